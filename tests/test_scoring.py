"""
Testing guess scoring and keyboard aggregation.
"""

from collections import Counter
from itertools import product

import pytest

from termo.models.game import BoardState, LetterStatus
from termo.services.scoring import (
    aggregate_keyboard, is_fully_absent, keyboard_statuses, score_guess
)

C = LetterStatus.CORRECT
P = LetterStatus.PRESENT
A = LetterStatus.ABSENT
E = LetterStatus.EMPTY

WORDS = ["termo", "sagaz", "eases", "sassy", "hello", "lolly", "speed", "abide", "casas", "salas", "aaaaa"]


def test_exact_guess_is_all_correct():
    assert score_guess("termo", "termo") == [C, C, C, C, C]


def test_no_shared_letters_is_all_absent():
    assert score_guess("bully", "termo") == [A, A, A, A, A]


def test_repeated_letters_are_consumed_once():
    # the second 's' at position 0 takes the last free 's' in the target
    assert score_guess("sassy", "eases") == [P, C, C, A, A]


def test_correct_matches_take_priority_over_earlier_present():
    # both target 'l's are used by exact matches, so the leading 'l' gets nothing
    assert score_guess("lolly", "hello") == [A, P, C, C, A]


def test_present_uses_leftmost_remaining_letter():
    assert score_guess("speed", "abide") == [A, A, P, A, P]
    assert score_guess("casas", "salas") == [A, C, P, C, C]


def test_lengths_must_match():
    with pytest.raises(ValueError):
        score_guess("termos", "termo")


def test_scoring_is_deterministic():
    assert score_guess("sassy", "eases") == score_guess("sassy", "eases")


@pytest.mark.parametrize("guess,target", list(product(WORDS, WORDS)))
def test_credited_letters_never_exceed_target_counts(guess, target):
    statuses = score_guess(guess, target)
    assert len(statuses) == 5
    assert all(status in (C, P, A) for status in statuses)

    credited = Counter(letter for letter, status in zip(guess, statuses) if status != A)
    target_counts = Counter(target)
    for letter, count in credited.items():
        assert count <= target_counts[letter]


def test_aggregate_covers_alphabet_and_leaves_unused_keys_empty():
    statuses = aggregate_keyboard([], "termo")
    assert len(statuses) == 26
    assert set(statuses.values()) == {E}


def test_aggregate_marks_guessed_letters():
    statuses = aggregate_keyboard(["sagaz"], "termo")
    assert statuses["s"] == A
    assert statuses["a"] == A
    assert statuses["t"] == E


def test_correct_is_never_downgraded():
    # 'o' is exact in the first guess and only present in the second
    statuses = aggregate_keyboard(["xxxxo", "oxxxx"], "termo")
    assert statuses["o"] == C


def test_present_is_not_downgraded_to_absent():
    # the second 'o' finds no copy left and scores absent
    assert score_guess("ooxxx", "termo")[:2] == [P, A]
    assert aggregate_keyboard(["ooxxx"], "termo")["o"] == P


def test_absent_can_be_upgraded():
    # first 'o' scores absent before the exact match at the end
    assert score_guess("oxxxo", "termo")[0] == A
    assert aggregate_keyboard(["oxxxo"], "termo")["o"] == C


def test_present_upgrades_to_correct():
    statuses = aggregate_keyboard(["oxxxx", "xxxxo"], "termo")
    assert statuses["o"] == C


def test_keyboard_statuses_are_per_board():
    boards = [
        BoardState.derive(0, "termo", ["termo", "sagaz"], False),
        BoardState.derive(1, "sagaz", ["termo", "sagaz"], False),
    ]
    keys = keyboard_statuses(boards)

    # board 0 froze at its win, so it never saw the 's' of the second guess
    assert keys["t"] == [C, A]
    assert keys["s"] == [E, C]
    assert keys["q"] == [E, E]


def test_fully_absent_needs_every_board():
    assert is_fully_absent([A, A])
    assert not is_fully_absent([A, E])
    assert not is_fully_absent([])
