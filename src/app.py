"""
Unscramble - a word unscrambling game served with Flask
"""
import logging

from flask import Flask, jsonify, request, session

from config import GAME_CONFIG, SECRET_KEY, LOG_LEVEL
from engine import RoundEngine, MAX_WORDS, SCORE_INCREASE, ConfigurationError, validate_config
from events import GameEvent
from words import WORD_LIST

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = Flask(__name__)
app.secret_key = SECRET_KEY  # For session management
app.config['DEBUG'] = GAME_CONFIG['debug_mode']

# Refuse to start with a word list that cannot fill a session
validate_config(WORD_LIST, MAX_WORDS, SCORE_INCREASE)

# Flask session key holding the serialised RoundEngine
GAME_SESSION_KEY = 'game'


def load_engine():
    """Rebuild the player's engine from the session, or None if there is no game."""
    data = session.get(GAME_SESSION_KEY)
    if data is None:
        return None
    try:
        return RoundEngine.from_dict(data)
    except ConfigurationError:
        raise
    except ValueError as e:
        app.logger.warning("Discarding invalid game session: %s", e)
        session.pop(GAME_SESSION_KEY, None)
        return None


def save_engine(engine):
    session[GAME_SESSION_KEY] = engine.to_dict()


def init_game_session():
    """Initialize a new game session."""
    engine = RoundEngine()
    save_engine(engine)
    app.logger.info("New game session started")
    return engine


def record_events(engine):
    """Collect every notification the engine emits from now on."""
    events = []
    for name in RoundEngine.OBSERVABLES:
        engine.observe(
            name,
            lambda value, name=name: events.append(GameEvent(name, {'value': value})),
            replay=False,
        )
    return events


def game_response(engine, events=None, status=200, **extra):
    body = {'game': engine.state}
    body.update(extra)
    if events is not None:
        body['events'] = [event.to_dict() for event in events]
    return jsonify(body), status


def error_response(message, status):
    return jsonify({'success': False, 'message': message}), status


def no_game_response():
    return error_response('No game in progress', 409)


@app.route('/api/config', methods=['GET'])
def game_config():
    """Public game constants."""
    return jsonify({
        'max_words': MAX_WORDS,
        'score_increase': SCORE_INCREASE,
    })


@app.route('/api/game', methods=['GET'])
def current_game():
    """Current game state. Starts a game if none is in progress."""
    engine = load_engine()
    if engine is None:
        engine = init_game_session()
    return game_response(engine)


@app.route('/api/game/start', methods=['POST'])
def start_game():
    """Initialize and start a new game."""
    engine = init_game_session()
    return game_response(engine, status=201)


@app.route('/api/game/guess', methods=['POST'])
def check_guess():
    """Check the player's word; a correct word moves straight on to the next one."""
    engine = load_engine()
    if engine is None:
        return no_game_response()

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response('Request body must be a JSON object', 400)
    guess = data.get('guess', '')
    if not isinstance(guess, str):
        return error_response('guess must be a string', 400)

    events = record_events(engine)
    is_correct = engine.submit_guess(guess.strip())
    if is_correct and not engine.advance_or_end():
        app.logger.info("Game finished with score %d", engine.score)

    save_engine(engine)
    return game_response(engine, events, is_correct=is_correct)


@app.route('/api/game/skip', methods=['POST'])
def skip_word():
    """Skip the current word without changing the score."""
    engine = load_engine()
    if engine is None:
        return no_game_response()

    events = record_events(engine)
    has_next = engine.advance_or_end()

    save_engine(engine)
    return game_response(engine, events, has_next=has_next)


@app.route('/api/game/reset', methods=['POST'])
def reset_game():
    """Play again: zero the score and deal a new first word."""
    engine = load_engine()
    if engine is None:
        return no_game_response()

    events = record_events(engine)
    engine.reset()

    save_engine(engine)
    return game_response(engine, events)


if __name__ == '__main__':
    app.run(debug=GAME_CONFIG['debug_mode'])
