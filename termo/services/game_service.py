"""
Game Service

Contains the game state machine for single, dual and quad boards and the
in-memory registry of running sessions.
"""

import threading
import time
import uuid
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config.game_settings import (
    ALPHABET, NOTICE_NOT_RECOGNIZED, NOTICE_TOO_SHORT, NOTICE_WON, WORD_LENGTH
)
from ..models.game import (
    BoardState, BoardView, GameMode, GameSnapshot, GameStatus, Notice,
    SubmitOutcome
)
from .input_events import EventType, InputEvent, LETTER_PATTERN
from .scoring import is_fully_absent, keyboard_statuses, score_guess
from .word_corpus import WordCorpus

LAST_CELL = WORD_LENGTH - 1


class GameNotFoundError(LookupError):
    """Raised when no session exists for a game id."""


class GameSession:
    """
    One player's game: the targets, the shared guess list, the in-progress
    guess and the cursor.

    Boards are not stored; ``boards()`` derives them from the guess list on
    every call. Inputs that make no sense in the current state (typing after
    the game ended, an out-of-range cell) are ignored and return False.
    """

    def __init__(self, corpus: WordCorpus, mode=GameMode.SINGLE, game_id: Optional[str] = None,
                 targets: Optional[Sequence[str]] = None, rng=None,
                 notice_seconds: float = 2.0, clock: Callable[[], float] = time.monotonic):
        self.game_id = game_id or str(uuid.uuid4())
        self.corpus = corpus
        self.rng = rng
        self.notice_seconds = notice_seconds
        self.clock = clock
        self.lock = threading.RLock()
        self.mode = GameMode.SINGLE
        self.start_game(mode, targets)

    # ------------------------------------------------------------------
    # Lifecycle

    def start_game(self, mode=None, targets: Optional[Sequence[str]] = None) -> None:
        """
        Start a fresh game, optionally in a different mode.

        ``targets`` fixes the secret words (daily puzzles, tests); otherwise
        they are drawn at random from the corpus.

        Raises:
            InvalidModeError: If ``mode`` names no mode
            ValueError: If ``targets`` do not fit the mode or the vocabulary
        """
        mode = GameMode.from_name(mode if mode is not None else self.mode)

        if targets is None:
            targets = self.corpus.draw(mode.num_boards, self.rng)
        else:
            targets = [target.lower() for target in targets]
            self._check_targets(mode, targets)

        self.mode = mode
        self.targets: Tuple[str, ...] = tuple(targets)
        self.guesses: List[str] = []
        self.current_guess: List[str] = [""] * WORD_LENGTH
        self.active_cell = 0
        self.status = GameStatus.PLAYING
        self.notice: Optional[Notice] = None

    def _check_targets(self, mode: GameMode, targets: List[str]) -> None:
        if len(targets) != mode.num_boards:
            raise ValueError(f"Mode '{mode.value}' needs {mode.num_boards} targets, got {len(targets)}")
        if len(set(targets)) != len(targets):
            raise ValueError("Targets must be distinct")
        for target in targets:
            if not self.corpus.is_accepted(target):
                raise ValueError(f"Target '{target}' is not in the word list")

    @property
    def is_playing(self) -> bool:
        return self.status == GameStatus.PLAYING

    @property
    def max_guesses(self) -> int:
        return self.mode.max_guesses

    def boards(self) -> List[BoardState]:
        game_over = not self.is_playing
        return [
            BoardState.derive(index, target, self.guesses, game_over)
            for index, target in enumerate(self.targets)
        ]

    # ------------------------------------------------------------------
    # Editing the in-progress guess

    def input_letter(self, letter: str) -> bool:
        if not self.is_playing or not isinstance(letter, str) or not letter.isascii():
            return False
        letter = letter.lower()
        if not LETTER_PATTERN.fullmatch(letter):
            return False

        self.current_guess[self.active_cell] = letter
        if self.active_cell < LAST_CELL:
            self.active_cell += 1
        return True

    def backspace(self) -> bool:
        """Clear the cell under the cursor, or the one before it when the cursor cell is empty."""
        if not self.is_playing:
            return False

        if self.current_guess[self.active_cell]:
            self.current_guess[self.active_cell] = ""
            return True
        if self.active_cell > 0:
            self.active_cell -= 1
            self.current_guess[self.active_cell] = ""
            return True
        return False

    def move_cursor(self, direction: int) -> bool:
        """Move one cell right for a positive direction, left for a negative one."""
        if not self.is_playing or direction == 0:
            return False
        new_cell = self.active_cell + (1 if direction > 0 else -1)
        if new_cell < 0 or new_cell > LAST_CELL:
            return False
        self.active_cell = new_cell
        return True

    def select_cell(self, index: int) -> bool:
        if not self.is_playing or not 0 <= index <= LAST_CELL:
            return False
        self.active_cell = index
        return True

    # ------------------------------------------------------------------
    # Submitting

    def submit_guess(self) -> SubmitOutcome:
        """
        Validate the in-progress guess and append it to the shared guess list.

        Rejections leave the guess list, the buffer and the cursor untouched
        and only raise a notice.
        """
        if not self.is_playing:
            return SubmitOutcome.IGNORED

        if not all(self.current_guess):
            self.show_notice(NOTICE_TOO_SHORT, "error")
            return SubmitOutcome.TOO_SHORT

        word = "".join(self.current_guess)
        if not self.corpus.is_accepted(word):
            self.show_notice(NOTICE_NOT_RECOGNIZED, "error")
            return SubmitOutcome.NOT_RECOGNIZED

        self.guesses.append(word)
        self.current_guess = [""] * WORD_LENGTH
        self.active_cell = 0

        if all(board.is_won for board in self.boards()):
            self.status = GameStatus.WON
            self.show_notice(NOTICE_WON, "success")
        elif len(self.guesses) >= self.max_guesses:
            self.status = GameStatus.LOST

        return SubmitOutcome.ACCEPTED

    # ------------------------------------------------------------------
    # Event dispatch

    def handle_event(self, event: InputEvent) -> Tuple[bool, Optional[SubmitOutcome]]:
        """
        Apply one input event.

        Returns:
            Tuple of (state_changed, submit_outcome). The outcome is only set
            for ENTER events.
        """
        if event.type == EventType.LETTER:
            return self.input_letter(event.value), None
        if event.type == EventType.BACKSPACE:
            return self.backspace(), None
        if event.type == EventType.CURSOR_LEFT:
            return self.move_cursor(-1), None
        if event.type == EventType.CURSOR_RIGHT:
            return self.move_cursor(1), None
        if event.type == EventType.SELECT_CELL:
            return self.select_cell(event.value), None
        if event.type == EventType.ENTER:
            outcome = self.submit_guess()
            return outcome != SubmitOutcome.IGNORED, outcome
        if event.type == EventType.CHOOSE_MODE:
            self.start_game(event.value)
            return True, None
        if event.type == EventType.RESTART:
            self.start_game()
            return True, None
        return False, None

    # ------------------------------------------------------------------
    # Notices

    def show_notice(self, message: str, kind: str = "error") -> Notice:
        """Replace the current notice. The returned token is needed to clear it."""
        self.notice = Notice(
            message=message,
            kind=kind,
            token=uuid.uuid4().hex,
            expires_at=self.clock() + self.notice_seconds,
        )
        return self.notice

    def clear_notice(self, token: str) -> bool:
        """Clear the notice only if ``token`` still identifies it."""
        if self.notice is None or self.notice.token != token:
            return False
        self.notice = None
        return True

    def current_notice(self) -> Optional[Notice]:
        if self.notice is not None and self.notice.is_expired(self.clock()):
            self.notice = None
        return self.notice

    # ------------------------------------------------------------------
    # Snapshot

    def _board_view(self, board: BoardState) -> BoardView:
        rows = []
        for guess in board.guesses:
            display = self.corpus.display_form(guess)
            if len(display) != len(guess):
                display = guess
            rows.append([
                {"letter": letter, "display": shown, "status": status.value}
                for letter, shown, status in zip(guess, display, score_guess(guess, board.target))
            ])

        show_current_row = board.is_active and len(board.guesses) < self.max_guesses
        reserved = 0 if board.is_won or not board.is_active else 1

        return BoardView(
            index=board.index,
            rows=rows,
            current_guess=list(self.current_guess) if board.is_active else [""] * WORD_LENGTH,
            active_cell=self.active_cell if board.is_active else -1,
            show_current_row=show_current_row,
            empty_rows=max(0, self.max_guesses - len(board.guesses) - reserved),
            is_won=board.is_won,
            is_active=board.is_active,
            win_index=board.win_index,
        )

    def snapshot(self) -> GameSnapshot:
        """Read-only view of the session for the display."""
        boards = self.boards()
        keys = keyboard_statuses(boards)
        notice = self.current_notice()

        return GameSnapshot(
            game_id=self.game_id,
            mode=self.mode.value,
            mode_label=self.mode.label,
            num_boards=self.mode.num_boards,
            max_guesses=self.max_guesses,
            status=self.status.value,
            guesses=list(self.guesses),
            current_guess=list(self.current_guess),
            active_cell=self.active_cell,
            boards=[self._board_view(board) for board in boards],
            keyboard={letter: [status.value for status in keys[letter]] for letter in ALPHABET},
            fully_absent=[letter for letter in ALPHABET if is_fully_absent(keys[letter])],
            notice={"message": notice.message, "kind": notice.kind, "token": notice.token} if notice else None,
            revealed=[self.corpus.display_form(target) for target in self.targets]
            if self.status == GameStatus.LOST else [],
        )


class GameService:
    """
    Registry of running game sessions.

    Each call on a session runs under that session's lock, so events for one
    game are applied one at a time in arrival order.
    """

    def __init__(self, corpus: Optional[WordCorpus] = None, notice_seconds: float = 2.0,
                 default_mode: str = "single", rng=None):
        self.corpus = corpus if corpus is not None else WordCorpus.from_json()
        self.notice_seconds = notice_seconds
        self.default_mode = GameMode.from_name(default_mode)
        self.rng = rng
        self.games: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create_new_game(self, mode=None, targets: Optional[Sequence[str]] = None) -> str:
        """
        Creates a new game session.

        Returns:
            str: Unique game ID for this session
        """
        session = GameSession(
            self.corpus,
            mode=mode if mode is not None else self.default_mode,
            targets=targets,
            rng=self.rng,
            notice_seconds=self.notice_seconds,
        )
        with self._lock:
            self.games[session.game_id] = session
        return session.game_id

    def get_session(self, game_id: str) -> GameSession:
        """
        Raises:
            GameNotFoundError: If no session exists for ``game_id``
        """
        with self._lock:
            session = self.games.get(game_id)
        if session is None:
            raise GameNotFoundError(f"Game not found: {game_id}")
        return session

    def get_game_state(self, game_id: str) -> Optional[GameSnapshot]:
        """Returns the snapshot for a session, or None if the game does not exist."""
        try:
            session = self.get_session(game_id)
        except GameNotFoundError:
            return None
        with session.lock:
            return session.snapshot()

    def dispatch(self, game_id: str, event: InputEvent) -> Tuple[bool, Optional[SubmitOutcome], GameSnapshot]:
        """Apply one event and return (changed, submit_outcome, snapshot)."""
        session = self.get_session(game_id)
        with session.lock:
            changed, outcome = session.handle_event(event)
            return changed, outcome, session.snapshot()

    def submit_guess(self, game_id: str) -> Tuple[SubmitOutcome, GameSnapshot]:
        session = self.get_session(game_id)
        with session.lock:
            outcome = session.submit_guess()
            return outcome, session.snapshot()

    def start_game(self, game_id: str, mode=None) -> GameSnapshot:
        """Start a new game in an existing session, keeping its mode when none is given."""
        session = self.get_session(game_id)
        with session.lock:
            session.start_game(mode)
            return session.snapshot()

    def clear_notice(self, game_id: str, token: str) -> bool:
        try:
            session = self.get_session(game_id)
        except GameNotFoundError:
            return False
        with session.lock:
            return session.clear_notice(token)

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._lock:
            return self.games.pop(game_id, None) is not None


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(corpus: Optional[WordCorpus] = None, **kwargs) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(corpus, **kwargs)
    return _game_service
