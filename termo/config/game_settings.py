"""
Game Configuration Constants Module

This module defines all game configuration constants and the loader for the
bundled word corpus. All game parameters are centralized here to enable easy
modification.
"""

import json
import os
from typing import Dict, Final, List, Tuple

WORD_LENGTH: Final[int] = 5
"""
Number of letters in every target word and guess.
Type: Final[int] - Immutable to prevent accidental modification
"""

ALPHABET: Final[str] = "abcdefghijklmnopqrstuvwxyz"

# mode -> (number of boards, max guesses, display label)
MODE_SETTINGS: Final[Dict[str, Tuple[int, int, str]]] = {
    "single": (1, 6, "termo"),
    "dual": (2, 7, "dueto"),
    "quad": (4, 9, "quarteto"),
}

# Transient notices shown by the front end
NOTICE_TOO_SHORT: Final[str] = "Palavra muito curta"
NOTICE_NOT_RECOGNIZED: Final[str] = "Palavra não reconhecida"
NOTICE_WON: Final[str] = "Parabéns!"

DEFAULT_WORDS_FILE: Final[str] = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'words.json'
)


class WordCorpusError(ValueError):
    """Raised when the word corpus file is missing or malformed."""


def load_word_data(json_file_path: str = DEFAULT_WORDS_FILE) -> Dict:
    """
    Load the word corpus from a JSON file.

    The file holds an object with three keys:
        targets:  words that may be drawn as secret targets
        accepted: additional words accepted as guesses
        accented: mapping of plain ASCII word -> display form

    Returns:
        dict: ``{"targets": List[str], "accepted": List[str], "accented": Dict[str, str]}``
        with every word lowercased

    Raises:
        WordCorpusError: If the file is missing, malformed or holds invalid words
    """
    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise WordCorpusError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise WordCorpusError(f"Invalid JSON in {json_file_path}: {e}")

    if not isinstance(data, dict):
        raise WordCorpusError("JSON file must contain an object with a 'targets' array")

    raw_targets = data.get("targets", [])
    raw_accepted = data.get("accepted", [])
    raw_accented = data.get("accented", {})

    for name, words in (("targets", raw_targets), ("accepted", raw_accepted)):
        if not isinstance(words, list) or not all(isinstance(word, str) for word in words):
            raise WordCorpusError(f"'{name}' must be an array of strings")
    if not isinstance(raw_accented, dict) or not all(
        isinstance(value, str) for value in raw_accented.values()
    ):
        raise WordCorpusError("'accented' must be an object mapping words to strings")

    targets = [word.lower() for word in raw_targets]
    accepted = [word.lower() for word in raw_accepted]
    accented = {key.lower(): value for key, value in raw_accented.items()}

    validate_word_list_integrity(targets)
    for word in accepted:
        _validate_word(word)

    return {"targets": targets, "accepted": accepted, "accented": accented}


def _validate_word(word: str, index: int = None) -> None:
    where = f"Word at index {index} '{word}'" if index is not None else f"Word '{word}'"
    if len(word) != WORD_LENGTH:
        raise WordCorpusError(f"{where} is not {WORD_LENGTH} characters long")
    if not all(char in ALPHABET for char in word):
        raise WordCorpusError(f"{where} contains characters outside a-z")


def validate_word_list_integrity(words: List[str]) -> bool:
    """
    Validates the integrity and consistency of a target word list.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly WORD_LENGTH characters
    2. Character validation: Only lowercase a-z allowed
    3. Uniqueness validation: No duplicate entries
    4. Size validation: Enough words to fill the largest mode

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        WordCorpusError: If any validation check fails with detailed error message
    """
    if not words:
        raise WordCorpusError("Word list cannot be empty")

    for index, word in enumerate(words):
        _validate_word(word, index)

    if len(words) != len(set(words)):
        duplicates = sorted({word for word in words if words.count(word) > 1})
        raise WordCorpusError(f"Duplicate words found in word list: {duplicates}")

    most_boards = max(boards for boards, _, _ in MODE_SETTINGS.values())
    if len(words) < most_boards:
        raise WordCorpusError(
            f"Word list has {len(words)} targets, at least {most_boards} are required"
        )

    return True


def get_word_statistics(words: List[str]) -> dict:
    """
    Analyzes a word list and returns statistical information for game balancing.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words in database
            - avg_vowel_count: Average vowels per word
            - letter_frequency: Distribution of letters across all words
            - most_common_letters: Five most frequent letters
    """
    if not words:
        return {"error": "Word list is empty"}

    vowels = set('aeiou')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in words)

    letter_frequency = {}
    for word in words:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(words),
        "avg_vowel_count": round(total_vowels / len(words), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        word_data = load_word_data()
        print(" Word list validation passed")

        stats = get_word_statistics(word_data["targets"])
        print(f" Game statistics: {stats}")

        print(" All configuration validation checks passed")
    except WordCorpusError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
