"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from dataclasses import asdict
from flask import Blueprint, request, jsonify
from ..models.game import GameSnapshot, InvalidModeError, SubmitOutcome
from ..services.game_service import get_game_service
from ..services.input_events import InputEvent, InvalidEventError, parse_key
from ..utils.decorators import require_game
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def log_state_changes(game_id: str, before: GameSnapshot, after: GameSnapshot, user_ip: str):
    """Log boards won and game endings that happened between two snapshots."""
    for old_board, new_board in zip(before.boards, after.boards):
        if new_board.is_won and not old_board.is_won:
            game_logger.log_game_event(
                game_id, 'board_won', user_ip,
                board=new_board.index, guesses_used=new_board.win_index + 1
            )

    if before.status != after.status:
        if after.status == 'won':
            game_logger.log_game_event(
                game_id, 'game_won', user_ip,
                mode=after.mode, guesses_used=len(after.guesses)
            )
        elif after.status == 'lost':
            game_logger.log_game_event(
                game_id, 'game_lost', user_ip,
                mode=after.mode, guesses_used=len(after.guesses), targets=after.revealed
            )


def _apply_event(game_service, game_id: str, event: InputEvent, action: str):
    before = game_service.get_game_state(game_id)
    changed, outcome, state = game_service.dispatch(game_id, event)
    log_state_changes(game_id, before, state, request.remote_addr)

    response_data = {
        'success': True,
        'changed': changed,
        'outcome': outcome.value if outcome else None,
        'state': asdict(state)
    }
    game_logger.log_server_response(
        request, action, True, response_data, game_id,
        event=event.type.value, changed=changed
    )
    return jsonify(response_data)


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        data = request.get_json(silent=True) or {}
        mode = data.get('mode', game_service.default_mode.value)

        game_logger.log_user_action(request, 'new_game', extra_data={'mode': mode})

        game_id = game_service.create_new_game(mode)
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            num_boards=state.num_boards, max_guesses=state.max_guesses
        )
        game_logger.log_game_event(game_id, 'game_started', request.remote_addr, mode=state.mode)

        return jsonify(response_data)

    except InvalidModeError as e:
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 400

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game
def get_state(game_id, game_service=None):
    """Get current game state."""
    game_logger.log_user_action(request, 'get_state', game_id)

    state = game_service.get_game_state(game_id)
    response_data = {
        'success': True,
        'state': asdict(state)
    }

    game_logger.log_server_response(
        request, 'get_state', True, response_data, game_id, status=state.status
    )
    return jsonify(response_data)


@game_bp.route('/game/<game_id>/event', methods=['POST'])
@require_game
def input_event(game_id, game_service=None):
    """Apply one input event: letter, backspace, enter, cursor moves, cell selection, mode, restart."""
    data = request.get_json(silent=True) or {}
    game_logger.log_user_action(request, 'input_event', game_id, event=data.get('type'))

    try:
        event = InputEvent.from_payload(data)
        return _apply_event(game_service, game_id, event, 'input_event')
    except (InvalidEventError, InvalidModeError) as e:
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'input_event', False, error_response, game_id)
        return jsonify(error_response), 400
    except Exception as e:
        game_logger.log_error(request, e, 'input_event', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/key', methods=['POST'])
@require_game
def key_press(game_id, game_service=None):
    """Apply a raw keyboard key as sent by the browser (``Enter``, ``ArrowLeft``, ``a``...)."""
    data = request.get_json(silent=True) or {}
    key = str(data.get('key') or '')
    game_logger.log_user_action(request, 'key_press', game_id, key=key)

    event = parse_key(key, data.get('ctrl', False), data.get('meta', False), data.get('alt', False))
    if event is None:
        # Keys the game does not use are not an error
        response_data = {
            'success': True,
            'changed': False,
            'outcome': None,
            'state': asdict(game_service.get_game_state(game_id))
        }
        game_logger.log_server_response(request, 'key_press', True, response_data, game_id, ignored=True)
        return jsonify(response_data)

    try:
        return _apply_event(game_service, game_id, event, 'key_press')
    except Exception as e:
        game_logger.log_error(request, e, 'key_press', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game
def submit_guess(game_id, game_service=None):
    """Submit the in-progress guess."""
    try:
        game_logger.log_user_action(request, 'submit_guess', game_id)

        before = game_service.get_game_state(game_id)
        outcome, state = game_service.submit_guess(game_id)
        log_state_changes(game_id, before, state, request.remote_addr)

        if outcome in (SubmitOutcome.TOO_SHORT, SubmitOutcome.NOT_RECOGNIZED):
            error_response = {
                'success': False,
                'outcome': outcome.value,
                'error': state.notice['message'] if state.notice else outcome.value,
                'state': asdict(state)
            }
            game_logger.log_server_response(
                request, 'submit_guess', False, error_response, game_id,
                validation_error=outcome.value, attempted_guess=''.join(before.current_guess)
            )
            game_logger.log_game_event(game_id, 'guess_rejected', request.remote_addr, reason=outcome.value)
            return jsonify(error_response), 400

        response_data = {
            'success': outcome == SubmitOutcome.ACCEPTED,
            'outcome': outcome.value,
            'state': asdict(state)
        }
        if outcome == SubmitOutcome.IGNORED:
            response_data['error'] = 'Game is already over'
            game_logger.log_server_response(request, 'submit_guess', False, response_data, game_id)
            return jsonify(response_data), 409

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            guess=state.guesses[-1], round=len(state.guesses), status=state.status
        )
        game_logger.log_game_event(
            game_id, 'guess_submitted', request.remote_addr, round=len(state.guesses)
        )
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/mode', methods=['POST'])
@require_game
def choose_mode(game_id, game_service=None):
    """Start a new game in the requested mode."""
    data = request.get_json(silent=True) or {}
    mode = data.get('mode')
    game_logger.log_user_action(request, 'choose_mode', game_id, mode=mode)

    if not mode:
        error_response = {'success': False, 'error': 'Mode is required'}
        game_logger.log_server_response(request, 'choose_mode', False, error_response, game_id)
        return jsonify(error_response), 400

    try:
        state = game_service.start_game(game_id, mode)
    except InvalidModeError as e:
        error_response = {'success': False, 'error': str(e)}
        game_logger.log_server_response(request, 'choose_mode', False, error_response, game_id)
        return jsonify(error_response), 400

    response_data = {'success': True, 'state': asdict(state)}
    game_logger.log_server_response(request, 'choose_mode', True, response_data, game_id)
    game_logger.log_game_event(game_id, 'game_started', request.remote_addr, mode=state.mode)
    return jsonify(response_data)


@game_bp.route('/game/<game_id>/restart', methods=['POST'])
@require_game
def restart(game_id, game_service=None):
    """Start a new game in the current mode."""
    game_logger.log_user_action(request, 'restart', game_id)

    state = game_service.start_game(game_id)

    response_data = {'success': True, 'state': asdict(state)}
    game_logger.log_server_response(request, 'restart', True, response_data, game_id)
    game_logger.log_game_event(game_id, 'game_started', request.remote_addr, mode=state.mode)
    return jsonify(response_data)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game
def delete_game(game_id, game_service=None):
    """Delete a game session."""
    game_logger.log_user_action(request, 'delete_game', game_id)

    success = game_service.delete_game(game_id)
    response_data = {
        'success': success
    }

    game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)
    if success:
        game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)

    return jsonify(response_data)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games) if game_service else 0,
            'word_count': len(game_service.corpus) if game_service else 0,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
