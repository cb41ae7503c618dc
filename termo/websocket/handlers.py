"""
WebSocket Event Handlers

Handles all WebSocket events so a front end can stream key presses and
receive the game state after every change.
"""

from dataclasses import asdict
from flask import current_app, request
from flask_socketio import emit, join_room, leave_room
from ..controllers.game_controller import log_state_changes
from ..models.game import InvalidModeError
from ..services.game_service import get_game_service
from ..services.input_events import EventType, InputEvent, InvalidEventError, parse_key
from ..utils.decorators import websocket_game_required
from ..utils.game_logger import game_logger


def game_room(game_id: str) -> str:
    return f"game_{game_id}"


def broadcast_game_state_update(game_id, socketio):
    """Send the current snapshot to everyone watching the game."""
    game_service = get_game_service()
    if not game_service:
        return

    state = game_service.get_game_state(game_id)
    if state is not None:
        socketio.emit('game_state', asdict(state), room=game_room(game_id))


def schedule_notice_clear(socketio, game_id: str, token: str, delay: float):
    """
    Clear a notice after ``delay`` seconds.

    The token makes this a no-op when a newer notice or a new game has
    replaced the one it was scheduled for.
    """
    def clear_later():
        socketio.sleep(delay)
        game_service = get_game_service()
        if game_service and game_service.clear_notice(game_id, token):
            broadcast_game_state_update(game_id, socketio)

    return socketio.start_background_task(clear_later)


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def apply_event(game_service, game_id: str, event: InputEvent):
        before = game_service.get_game_state(game_id)
        try:
            changed, outcome, state = game_service.dispatch(game_id, event)
        except InvalidModeError as e:
            emit('error', {'error': str(e), 'game_id': game_id})
            return

        log_state_changes(game_id, before, state, request.remote_addr)
        game_logger.log_user_action(
            request, 'socket_event', game_id,
            event=event.type.value, changed=changed,
            outcome=outcome.value if outcome else None
        )

        if changed or event.type in (EventType.CHOOSE_MODE, EventType.RESTART):
            socketio.emit('game_state', asdict(state), room=game_room(game_id))

        if state.notice and (before.notice is None or before.notice['token'] != state.notice['token']):
            schedule_notice_clear(
                socketio, game_id, state.notice['token'],
                current_app.config.get('NOTICE_CLEAR_SECONDS', 2)
            )

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        game_logger.log_user_action(request, 'socket_connect')

    @socketio.on('join_game')
    @websocket_game_required
    def handle_join_game(data, game_service=None):
        """Join a game's room and receive its current state."""
        game_id = data['game_id']
        join_room(game_room(game_id))
        game_logger.log_user_action(request, 'join_game', game_id)
        emit('game_state', asdict(game_service.get_game_state(game_id)))

    @socketio.on('leave_game')
    @websocket_game_required
    def handle_leave_game(data, game_service=None):
        leave_room(game_room(data['game_id']))

    @socketio.on('input_event')
    @websocket_game_required
    def handle_input_event(data, game_service=None):
        """Apply a structured event: ``{"game_id", "type", "value"}``."""
        try:
            event = InputEvent.from_payload(data)
        except InvalidEventError as e:
            emit('error', {'error': str(e), 'game_id': data['game_id']})
            return
        apply_event(game_service, data['game_id'], event)

    @socketio.on('key_press')
    @websocket_game_required
    def handle_key_press(data, game_service=None):
        """Apply a raw browser key: ``{"game_id", "key", "ctrl", "meta", "alt"}``."""
        event = parse_key(
            str(data.get('key') or ''),
            data.get('ctrl', False), data.get('meta', False), data.get('alt', False)
        )
        if event is not None:
            apply_event(game_service, data['game_id'], event)

    @socketio.on('choose_mode')
    @websocket_game_required
    def handle_choose_mode(data, game_service=None):
        mode = data.get('mode')
        if not mode:
            emit('error', {'error': 'Mode is required', 'game_id': data['game_id']})
            return
        apply_event(game_service, data['game_id'], InputEvent(EventType.CHOOSE_MODE, mode))

    @socketio.on('restart')
    @websocket_game_required
    def handle_restart(data, game_service=None):
        apply_event(game_service, data['game_id'], InputEvent(EventType.RESTART))
