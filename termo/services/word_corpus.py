"""
Word Corpus

Immutable collection of target-eligible words, the guess acceptance
vocabulary and the accented display forms.
"""

import random
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from ..config.game_settings import (
    DEFAULT_WORDS_FILE, WordCorpusError, get_word_statistics,
    load_word_data, validate_word_list_integrity
)


class WordCorpus:
    """
    Word source for a game server.

    Targets are drawn by sampling indices, so the word lists themselves are
    never mutated and can be shared by every session.
    """

    def __init__(self, targets: Iterable[str], accepted: Iterable[str] = (),
                 accented: Optional[Mapping[str, str]] = None):
        self.targets = tuple(targets)
        # Every target is also a valid guess
        self.accepted = frozenset(self.targets) | frozenset(accepted)
        self.accented = MappingProxyType(dict(accented or {}))

    @classmethod
    def from_json(cls, json_file_path: Optional[str] = None) -> "WordCorpus":
        """Load and validate a corpus file (see ``load_word_data`` for the format)."""
        data = load_word_data(json_file_path or DEFAULT_WORDS_FILE)
        return cls(data["targets"], data["accepted"], data["accented"])

    def draw(self, count: int, rng: Optional[random.Random] = None) -> List[str]:
        """
        Draw ``count`` distinct targets uniformly at random without replacement.

        Raises:
            WordCorpusError: If the corpus holds fewer than ``count`` targets
        """
        if count > len(self.targets):
            raise WordCorpusError(
                f"Cannot draw {count} targets from a corpus of {len(self.targets)}"
            )
        rng = rng or random
        return [self.targets[i] for i in rng.sample(range(len(self.targets)), count)]

    def is_accepted(self, word: str) -> bool:
        return word in self.accepted

    def display_form(self, word: str) -> str:
        return self.accented.get(word, word)

    def validate(self) -> bool:
        return validate_word_list_integrity(list(self.targets))

    def statistics(self) -> dict:
        stats = get_word_statistics(list(self.targets))
        stats["accepted_words"] = len(self.accepted)
        return stats

    def __len__(self) -> int:
        return len(self.targets)
