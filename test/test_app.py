import pytest

from app import GAME_SESSION_KEY
from engine import ConfigurationError, RoundEngine


def current_answer(client):
    with client.session_transaction() as sess:
        return sess[GAME_SESSION_KEY]['current_word']


def event_types(data):
    return [event['type'] for event in data['events']]


def test_config(client):
    res = client.get('/api/config')
    assert res.status_code == 200
    assert res.get_json() == {'max_words': 10, 'score_increase': 20}


def test_start_game(client):
    res = client.post('/api/game/start')
    assert res.status_code == 201
    game = res.get_json()['game']
    assert game['round_count'] == 1
    assert game['score'] == 0
    assert game['max_words'] == 10
    assert not game['game_over']
    assert game['scrambled_word']


def test_get_game_starts_session(client):
    res = client.get('/api/game')
    assert res.status_code == 200
    first = res.get_json()['game']
    assert first['round_count'] == 1

    # Same session on the next request
    again = client.get('/api/game').get_json()['game']
    assert again == first


def test_actions_need_a_game(client):
    for path in ('/api/game/guess', '/api/game/skip', '/api/game/reset'):
        res = client.post(path, json={'guess': 'cat'})
        assert res.status_code == 409
        assert res.get_json()['success'] is False


def test_wrong_guess(client):
    start = client.post('/api/game/start').get_json()['game']
    res = client.post('/api/game/guess', json={'guess': 'definitely wrong'})
    assert res.status_code == 200
    data = res.get_json()
    assert data['is_correct'] is False
    assert data['events'] == []
    assert data['game'] == start


def test_correct_guess_advances(client):
    client.post('/api/game/start')
    answer = current_answer(client)

    data = client.post('/api/game/guess', json={'guess': f'  {answer.upper()} '}).get_json()

    assert data['is_correct'] is True
    assert data['game']['score'] == 20
    assert data['game']['round_count'] == 2
    assert event_types(data) == ['score', 'scrambled_word', 'round_count']
    assert current_answer(client) != answer


def test_guess_body_must_be_json_object(client):
    client.post('/api/game/start')
    res = client.post('/api/game/guess', data='cat', content_type='text/plain')
    assert res.status_code == 400
    res = client.post('/api/game/guess', json={'guess': 42})
    assert res.status_code == 400


def test_skip(client):
    client.post('/api/game/start')
    data = client.post('/api/game/skip').get_json()
    assert data['has_next'] is True
    assert data['game']['round_count'] == 2
    assert data['game']['score'] == 0


def test_full_game_and_play_again(client):
    client.post('/api/game/start')
    for _ in range(9):
        data = client.post('/api/game/guess', json={'guess': current_answer(client)}).get_json()
        assert data['is_correct'] is True
        assert not data['game']['game_over']

    data = client.post('/api/game/guess', json={'guess': current_answer(client)}).get_json()
    assert data['game']['score'] == 200
    assert data['game']['round_count'] == 10
    assert data['game']['game_over'] is True

    # Nothing changes once the game is over
    data = client.post('/api/game/skip').get_json()
    assert data['has_next'] is False
    assert data['game']['score'] == 200

    data = client.post('/api/game/reset').get_json()
    assert data['game']['score'] == 0
    assert data['game']['round_count'] == 1
    assert data['game']['game_over'] is False
    assert 'score' in event_types(data)


def test_invalid_session_is_discarded(client):
    client.post('/api/game/start')
    with client.session_transaction() as sess:
        state = sess[GAME_SESSION_KEY]
        state['score'] = 15
        sess[GAME_SESSION_KEY] = state

    res = client.post('/api/game/skip')
    assert res.status_code == 409

    # A fresh game is started on the next read
    game = client.get('/api/game').get_json()['game']
    assert game['round_count'] == 1


def test_session_state_restores(client):
    client.post('/api/game/start')
    with client.session_transaction() as sess:
        engine = RoundEngine.from_dict(sess[GAME_SESSION_KEY])
    assert engine.round_count == 1


def test_configuration_error_is_not_treated_as_bad_session(client, monkeypatch):
    client.post('/api/game/start')

    def broken_config(data):
        raise ConfigurationError('Word list is empty')

    monkeypatch.setattr(RoundEngine, 'from_dict', staticmethod(broken_config))

    with pytest.raises(ConfigurationError):
        client.post('/api/game/skip')
