"""
Request Decorators

Contains decorators that resolve the game session for HTTP and WebSocket handlers.
"""

from functools import wraps
from flask import jsonify, request
from flask_socketio import emit

from ..services.game_service import GameNotFoundError, get_game_service
from .game_logger import game_logger


def require_game(f):
    """
    Decorator for endpoints taking a ``game_id`` URL parameter.

    Answers 500 when the game service is not running and 404 when the game
    does not exist; otherwise calls the view with ``game_service`` added.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_id = kwargs.get('game_id')
        try:
            game_service.get_session(game_id)
        except GameNotFoundError:
            error_response = {
                'success': False,
                'error': 'Game not found'
            }
            game_logger.log_server_response(request, f.__name__, False, error_response, game_id)
            return jsonify(error_response), 404

        kwargs['game_service'] = game_service
        return f(*args, **kwargs)

    return decorated_function


def websocket_game_required(f):
    """Decorator for WebSocket events whose payload carries a ``game_id``."""
    @wraps(f)
    def decorated_function(data=None, *args, **kwargs):
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        if not isinstance(data, dict) or not data.get('game_id'):
            emit('error', {'error': 'Game ID is required'})
            return

        try:
            game_service.get_session(data['game_id'])
        except GameNotFoundError:
            emit('error', {'error': 'Game not found', 'game_id': data['game_id']})
            return

        kwargs['game_service'] = game_service
        return f(data, *args, **kwargs)

    return decorated_function
