"""
Testing the HTTP and WebSocket surface with Flask's test clients.
"""

import time

from termo.services.game_service import get_game_service
from termo.websocket.handlers import schedule_notice_clear


def new_game(client, mode="single"):
    response = client.post('/api/new_game', json={'mode': mode})
    assert response.status_code == 200
    return response.get_json()


def fix_targets(game_id, mode, targets):
    get_game_service().get_session(game_id).start_game(mode, targets)


def send_word(client, game_id, word):
    for letter in word:
        client.post(f'/api/game/{game_id}/event', json={'type': 'letter', 'value': letter})
    return client.post(f'/api/game/{game_id}/guess')


def test_new_game_returns_state(client):
    body = new_game(client, 'dueto')
    state = body['state']

    assert body['success']
    assert state['game_id'] == body['game_id']
    assert state['mode'] == 'dual'
    assert state['mode_label'] == 'dueto'
    assert state['num_boards'] == 2
    assert state['max_guesses'] == 7
    assert state['status'] == 'playing'
    assert len(state['boards']) == 2
    assert state['keyboard']['a'] == ['empty', 'empty']
    assert 'targets' not in state


def test_new_game_rejects_unknown_mode(client):
    response = client.post('/api/new_game', json={'mode': 'octo'})
    assert response.status_code == 400
    assert not response.get_json()['success']


def test_unknown_game_is_404(client):
    assert client.get('/api/game/missing/state').status_code == 404
    assert client.post('/api/game/missing/guess').status_code == 404


def test_events_edit_the_buffer(client):
    game_id = new_game(client)['game_id']

    body = client.post(f'/api/game/{game_id}/event', json={'type': 'letter', 'value': 't'}).get_json()
    assert body['changed']
    assert body['state']['current_guess'] == ['t', '', '', '', '']
    assert body['state']['active_cell'] == 1

    body = client.post(f'/api/game/{game_id}/key', json={'key': 'Backspace'}).get_json()
    assert body['state']['current_guess'] == [''] * 5
    assert body['state']['active_cell'] == 0

    body = client.post(f'/api/game/{game_id}/key', json={'key': 'r', 'ctrl': True}).get_json()
    assert not body['changed']

    body = client.post(f'/api/game/{game_id}/key', json={'key': 'ArrowLeft'}).get_json()
    assert not body['changed']


def test_bad_event_payload_is_400(client):
    game_id = new_game(client)['game_id']
    response = client.post(f'/api/game/{game_id}/event', json={'type': 'jump'})
    assert response.status_code == 400


def test_rejected_guesses(client):
    game_id = new_game(client)['game_id']
    fix_targets(game_id, 'single', ['termo'])

    client.post(f'/api/game/{game_id}/event', json={'type': 'letter', 'value': 'c'})
    response = client.post(f'/api/game/{game_id}/guess')
    body = response.get_json()
    assert response.status_code == 400
    assert body['outcome'] == 'too_short'
    assert body['error'] == 'Palavra muito curta'
    assert body['state']['guesses'] == []
    assert body['state']['current_guess'][0] == 'c'

    response = send_word(client, game_id, 'zzzz')
    body = response.get_json()
    assert response.status_code == 400
    assert body['outcome'] == 'not_recognized'
    assert body['state']['guesses'] == []


def test_win_through_api(client):
    game_id = new_game(client, 'dual')['game_id']
    fix_targets(game_id, 'dual', ['termo', 'sagaz'])

    body = send_word(client, game_id, 'termo').get_json()
    assert body['outcome'] == 'accepted'
    assert body['state']['boards'][0]['is_won']
    assert body['state']['boards'][1]['is_active']
    assert body['state']['status'] == 'playing'

    body = send_word(client, game_id, 'sagaz').get_json()
    assert body['state']['status'] == 'won'
    assert body['state']['notice']['message'] == 'Parabéns!'

    response = client.post(f'/api/game/{game_id}/guess')
    assert response.status_code == 409


def test_loss_reveals_targets(client):
    game_id = new_game(client)['game_id']
    fix_targets(game_id, 'single', ['termo'])

    for word in ['sagaz', 'negro', 'mexer', 'nobre', 'fosse', 'casas']:
        body = send_word(client, game_id, word).get_json()

    assert body['state']['status'] == 'lost'
    assert body['state']['revealed'] == ['termo']


def test_mode_and_restart(client):
    game_id = new_game(client)['game_id']

    body = client.post(f'/api/game/{game_id}/mode', json={'mode': 'quad'}).get_json()
    assert body['state']['num_boards'] == 4
    assert body['state']['max_guesses'] == 9

    assert client.post(f'/api/game/{game_id}/mode', json={'mode': 'octo'}).status_code == 400
    assert client.post(f'/api/game/{game_id}/mode', json={}).status_code == 400

    body = client.post(f'/api/game/{game_id}/restart').get_json()
    assert body['state']['mode'] == 'quad'
    assert body['state']['guesses'] == []


def test_delete_and_health(client):
    game_id = new_game(client)['game_id']
    assert client.get('/api/health').get_json()['active_games'] == 1

    assert client.delete(f'/api/game/{game_id}').get_json()['success']
    assert client.get(f'/api/game/{game_id}/state').status_code == 404
    assert client.get('/api/health').get_json()['status'] == 'healthy'


def test_socket_join_and_key_press(app, client):
    game_id = new_game(client)['game_id']
    socket_client = app.socketio.test_client(app)

    socket_client.emit('join_game', {'game_id': game_id})
    received = socket_client.get_received()
    assert received[-1]['name'] == 'game_state'
    assert received[-1]['args'][0]['game_id'] == game_id

    socket_client.emit('key_press', {'game_id': game_id, 'key': 'T'})
    received = socket_client.get_received()
    states = [message['args'][0] for message in received if message['name'] == 'game_state']
    assert states[-1]['current_guess'][0] == 't'


def test_socket_unknown_game(app):
    socket_client = app.socketio.test_client(app)
    socket_client.emit('join_game', {'game_id': 'missing'})
    received = socket_client.get_received()
    assert received[-1]['name'] == 'error'


def test_socket_key_press_ignores_non_string_keys(app, client):
    game_id = new_game(client)['game_id']
    socket_client = app.socketio.test_client(app)
    socket_client.emit('join_game', {'game_id': game_id})
    socket_client.get_received()

    socket_client.emit('key_press', {'game_id': game_id, 'key': 5})
    socket_client.emit('key_press', {'game_id': game_id, 'key': None})

    assert socket_client.get_received() == []
    assert get_game_service().get_game_state(game_id).current_guess == [''] * 5


def test_socket_choose_mode_requires_mode(app, client):
    game_id = new_game(client)['game_id']
    fix_targets(game_id, 'single', ['termo'])
    socket_client = app.socketio.test_client(app)

    socket_client.emit('choose_mode', {'game_id': game_id})
    received = socket_client.get_received()

    assert received[-1]['name'] == 'error'
    assert received[-1]['args'][0]['error'] == 'Mode is required'
    assert get_game_service().get_session(game_id).targets == ('termo',)


def test_socket_notice_is_cleared_after_delay(app, client):
    game_id = new_game(client)['game_id']
    socket_client = app.socketio.test_client(app)
    socket_client.emit('join_game', {'game_id': game_id})

    # two rejected submits in a row, each schedules its own clear
    socket_client.emit('key_press', {'game_id': game_id, 'key': 'Enter'})
    socket_client.emit('key_press', {'game_id': game_id, 'key': 'Enter'})

    states = []
    deadline = time.monotonic() + 2
    while time.monotonic() < deadline:
        states += [m['args'][0] for m in socket_client.get_received() if m['name'] == 'game_state']
        if states and states[-1]['notice'] is None:
            break
        time.sleep(0.01)

    assert any(state['notice'] for state in states)
    assert states[-1]['notice'] is None
    assert get_game_service().get_game_state(game_id).notice is None


def test_stale_notice_clear_keeps_newer_notice(app, client):
    game_id = new_game(client)['game_id']
    session = get_game_service().get_session(game_id)
    stale = session.show_notice('Palavra muito curta')
    fresh = session.show_notice('Palavra não reconhecida')

    schedule_notice_clear(app.socketio, game_id, stale.token, 0).join()
    assert session.notice is fresh

    schedule_notice_clear(app.socketio, game_id, fresh.token, 0).join()
    assert session.notice is None
