"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .helpers import get_user_identity
from .game_logger import game_logger
from .decorators import require_game, websocket_game_required

__all__ = ['require_game', 'websocket_game_required', 'get_user_identity', 'game_logger']
