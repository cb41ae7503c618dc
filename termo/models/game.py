"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ..config.game_settings import MODE_SETTINGS


class LetterStatus(Enum):
    """Per-letter evaluation of a guess against one target."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    EMPTY = "empty"


class GameStatus(Enum):
    """Overall session status. WON and LOST are terminal."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class SubmitOutcome(Enum):
    """Result of submitting the in-progress guess."""
    ACCEPTED = "accepted"
    TOO_SHORT = "too_short"
    NOT_RECOGNIZED = "not_recognized"
    IGNORED = "ignored"


class InvalidModeError(ValueError):
    """Raised when a request names a mode that does not exist."""


class GameMode(Enum):
    """Board layout: how many targets are played at once and the guess budget."""
    SINGLE = "single"
    DUAL = "dual"
    QUAD = "quad"

    @property
    def num_boards(self) -> int:
        return MODE_SETTINGS[self.value][0]

    @property
    def max_guesses(self) -> int:
        return MODE_SETTINGS[self.value][1]

    @property
    def label(self) -> str:
        return MODE_SETTINGS[self.value][2]

    @classmethod
    def from_name(cls, name) -> "GameMode":
        """
        Resolve a mode from its value ("dual") or its display label ("dueto").

        Raises:
            InvalidModeError: If the name matches no mode
        """
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            normalized = name.strip().lower()
            for mode in cls:
                if normalized in (mode.value, mode.label):
                    return mode
        choices = ", ".join(f'"{mode.value}"' for mode in cls)
        raise InvalidModeError(f"Invalid game mode {name!r}. Must be one of {choices}")


@dataclass
class Notice:
    """A transient message for the player. The token identifies this notice for its auto-clear."""
    message: str
    kind: str  # "error" or "success"
    token: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class BoardState:
    """
    One board's view of the shared guess list.

    Never stored on the session: always derived from the guess list and the
    board's target so it cannot drift from them.
    """
    index: int
    target: str
    guesses: Tuple[str, ...]
    win_index: Optional[int]
    is_active: bool

    @property
    def is_won(self) -> bool:
        return self.win_index is not None

    @classmethod
    def derive(cls, index: int, target: str, guesses: Sequence[str], game_over: bool) -> "BoardState":
        """Build the board for ``target`` from the shared ``guesses``."""
        guesses = tuple(guesses)
        try:
            win_index = guesses.index(target)
        except ValueError:
            win_index = None

        if win_index is not None:
            guesses = guesses[:win_index + 1]

        return cls(
            index=index,
            target=target,
            guesses=guesses,
            win_index=win_index,
            is_active=win_index is None and not game_over,
        )


@dataclass
class BoardView:
    """Render-ready rows for one board."""
    index: int
    rows: List[List[Dict[str, str]]]  # cells of {"letter", "display", "status"}
    current_guess: List[str]
    active_cell: int  # -1 when the board takes no input
    show_current_row: bool
    empty_rows: int
    is_won: bool
    is_active: bool
    win_index: Optional[int] = None


@dataclass
class GameSnapshot:
    """Read-only state handed to the display after every change."""
    game_id: str
    mode: str
    mode_label: str
    num_boards: int
    max_guesses: int
    status: str
    guesses: List[str]
    current_guess: List[str]
    active_cell: int
    boards: List[BoardView]
    keyboard: Dict[str, List[str]]  # letter -> one status per board
    fully_absent: List[str]
    notice: Optional[Dict[str, str]] = None
    revealed: List[str] = field(default_factory=list)  # display forms of the targets after a loss
