"""
Guess Scoring

Pure functions that score guesses against a target and fold the results
into the per-letter hints shown on the keyboard.
"""

from typing import Dict, List, Optional, Sequence

from ..config.game_settings import ALPHABET
from ..models.game import BoardState, LetterStatus


def score_guess(guess: str, target: str) -> List[LetterStatus]:
    """
    Implements the Wordle letter evaluation algorithm.

    Exact position matches are found first and consume their target letter.
    Every other guessed letter is PRESENT only while an unconsumed copy of it
    remains in the target (the leftmost one is consumed), otherwise ABSENT.

    Raises:
        ValueError: If guess and target differ in length
    """
    if len(guess) != len(target):
        raise ValueError(f"Cannot score {guess!r} against {target!r}: lengths differ")

    # Working copies to track letter consumption
    target_chars: List[Optional[str]] = list(target)
    result: List[Optional[LetterStatus]] = [None] * len(guess)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == target_chars[i]:
            result[i] = LetterStatus.CORRECT
            target_chars[i] = None

    # Second pass: present letters and misses
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if letter in target_chars:
            result[i] = LetterStatus.PRESENT
            target_chars[target_chars.index(letter)] = None
        else:
            result[i] = LetterStatus.ABSENT

    return result


def aggregate_keyboard(guesses: Sequence[str], target: str) -> Dict[str, LetterStatus]:
    """
    Summarizes every letter of the alphabet over a board's guesses.

    Letters never guessed stay EMPTY. A CORRECT letter is never overwritten
    and a PRESENT letter is never overwritten by ABSENT; any other new
    status replaces the old one.
    """
    letter_status = {letter: LetterStatus.EMPTY for letter in ALPHABET}

    for guess in guesses:
        for letter, new_status in zip(guess, score_guess(guess, target)):
            current_status = letter_status.get(letter, LetterStatus.EMPTY)

            if current_status == LetterStatus.CORRECT:
                continue
            if current_status == LetterStatus.PRESENT and new_status == LetterStatus.ABSENT:
                continue

            letter_status[letter] = new_status

    return letter_status


def keyboard_statuses(boards: Sequence[BoardState]) -> Dict[str, List[LetterStatus]]:
    """One status per board for each letter, each over that board's own guesses."""
    per_board = [aggregate_keyboard(board.guesses, board.target) for board in boards]
    return {
        letter: [summary[letter] for summary in per_board]
        for letter in ALPHABET
    }


def is_fully_absent(statuses: Sequence[LetterStatus]) -> bool:
    """True when every board has ruled the letter out."""
    return bool(statuses) and all(status == LetterStatus.ABSENT for status in statuses)
