"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    BoardState, BoardView, GameMode, GameSnapshot, GameStatus,
    InvalidModeError, LetterStatus, Notice, SubmitOutcome
)

__all__ = [
    'BoardState', 'BoardView', 'GameMode', 'GameSnapshot', 'GameStatus',
    'InvalidModeError', 'LetterStatus', 'Notice', 'SubmitOutcome'
]
