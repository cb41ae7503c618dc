"""
Services Package

Contains all business logic and service classes.
"""

from .game_service import GameNotFoundError, GameService, GameSession, get_game_service
from .input_events import EventType, InputEvent, InvalidEventError, parse_key
from .scoring import aggregate_keyboard, is_fully_absent, keyboard_statuses, score_guess
from .word_corpus import WordCorpus

__all__ = [
    'GameNotFoundError', 'GameService', 'GameSession', 'get_game_service',
    'EventType', 'InputEvent', 'InvalidEventError', 'parse_key',
    'aggregate_keyboard', 'is_fully_absent', 'keyboard_statuses', 'score_guess',
    'WordCorpus'
]
