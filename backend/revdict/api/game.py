from flask import Blueprint, jsonify, request, current_app
from revdict import db
from revdict.models import PlaySession, MODES
from revdict.services.lookup import WordLookup
from revdict.services.rounds import RoundController, RoundNotActive, WordFound
from revdict.services.store import EventStore
from revdict.socketio_events import notify_leaderboard_stale

game = Blueprint('game', __name__)

MAX_PLAYER_LEN = 64
MAX_GUESS_LEN = 128
MAX_WORD_LENGTH = 30


def _controller(mode: str) -> RoundController:
    cfg = current_app.config
    return RoundController(
        lookup=WordLookup.from_config(cfg, mode),
        store=EventStore(),
        logger=current_app.logger,
        max_attempts=int(cfg.get('WORD_LOOKUP_MAX_ATTEMPTS', 5)),
        on_recorded=notify_leaderboard_stale,
    )


def _parse_word_length(raw):
    """Returns (length, error). Blank means no constraint."""
    if raw is None or raw == '':
        return None, None
    try:
        length = int(raw)
    except (TypeError, ValueError):
        return None, 'word_length must be a whole number'
    if not 1 <= length <= MAX_WORD_LENGTH:
        return None, f'word_length must be between 1 and {MAX_WORD_LENGTH}'
    return length, None


def _round_payload(play_session, result):
    return {
        'session_code': play_session.session_code,
        'word': result.word,
        'correct': result.correct,
        'skipped': result.skipped,
        'reaction_time': f'{result.reaction_time:.2f}',
        'score': play_session.score,
        'rounds_played': play_session.rounds_played,
        'telemetry_recorded': result.telemetry_recorded,
    }


@game.route('/modes', methods=['GET'])
def list_modes():
    return jsonify({'modes': list(MODES), 'default': current_app.config.get('DEFAULT_MODE', MODES[0])})


@game.route('/sessions', methods=['POST'])
def create_session():
    data = request.get_json(silent=True) or {}
    player = (data.get('player') or '').strip()
    mode = data.get('mode') or current_app.config.get('DEFAULT_MODE', MODES[0])
    if not player:
        return jsonify({'error': 'A nickname is required'}), 400
    if len(player) > MAX_PLAYER_LEN:
        return jsonify({'error': f'Nickname must be at most {MAX_PLAYER_LEN} characters'}), 400
    if mode not in MODES:
        return jsonify({'error': f"mode must be one of {', '.join(MODES)}"}), 400
    word_length, error = _parse_word_length(data.get('word_length'))
    if error:
        return jsonify({'error': error}), 400

    # a returning nickname carries on from its best score in this mode
    best = EventStore().best_score(player, mode)
    play_session = PlaySession(player=player, mode=mode, word_length=word_length, score=best, rounds_played=0)
    db.session.add(play_session)
    db.session.commit()
    current_app.logger.info(
        f"[session-created] code={play_session.session_code} player={player} mode={mode} score={best}"
    )
    return jsonify(play_session.to_dict()), 201


@game.route('/sessions/<string:session_code>', methods=['GET'])
def get_session(session_code):
    play_session = PlaySession.query.filter_by(session_code=session_code.upper()).first_or_404()
    return jsonify(play_session.to_dict())


@game.route('/sessions/<string:session_code>/round', methods=['POST'])
def start_round(session_code):
    play_session = PlaySession.query.filter_by(session_code=session_code.upper()).first_or_404()
    if play_session.current_word is not None:
        return jsonify({'error': 'Finish or skip the current round first'}), 409

    data = request.get_json(silent=True) or {}
    length, error = _parse_word_length(data.get('word_length'))
    if error:
        return jsonify({'error': error}), 400

    updated, outcome = _controller(play_session.mode).start_round(play_session.to_round_session(), length)
    if not isinstance(outcome, WordFound):
        return jsonify({
            'error': 'No valid word found yet',
            'retryable': True,
            'attempts': outcome.attempts,
        }), 503

    play_session.apply(updated)
    db.session.add(play_session)
    db.session.commit()
    return jsonify({
        'session_code': play_session.session_code,
        'definition': outcome.definition,
        'word_length': len(outcome.word),
    })


@game.route('/sessions/<string:session_code>/guess', methods=['POST'])
def submit_guess(session_code):
    play_session = PlaySession.query.filter_by(session_code=session_code.upper()).first_or_404()
    data = request.get_json(silent=True) or {}
    guess = data.get('guess')
    if not isinstance(guess, str) or not guess.strip():
        return jsonify({'error': 'A guess is required (skip the round instead)'}), 400
    if len(guess) > MAX_GUESS_LEN:
        return jsonify({'error': f'Guess must be at most {MAX_GUESS_LEN} characters'}), 400

    round_session = play_session.to_round_session()
    # closed in the same commit that appends the attempt
    play_session.close_round()
    try:
        result = _controller(play_session.mode).submit_guess(round_session, guess)
    except RoundNotActive:
        return jsonify({'error': 'No round in progress'}), 409

    play_session.apply(result.session)
    db.session.add(play_session)
    db.session.commit()
    return jsonify(_round_payload(play_session, result))


@game.route('/sessions/<string:session_code>/skip', methods=['POST'])
def skip_round(session_code):
    play_session = PlaySession.query.filter_by(session_code=session_code.upper()).first_or_404()
    round_session = play_session.to_round_session()
    play_session.close_round()
    try:
        result = _controller(play_session.mode).skip_round(round_session)
    except RoundNotActive:
        return jsonify({'error': 'No round in progress'}), 409

    play_session.apply(result.session)
    db.session.add(play_session)
    db.session.commit()
    return jsonify(_round_payload(play_session, result))
