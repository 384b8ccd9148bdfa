from flask import Blueprint, jsonify, request, current_app
from revdict.models import MODES
from revdict.services.aggregation import compute_leaderboard, compute_word_statistics
from revdict.services.store import EventStore

stats = Blueprint('stats', __name__)


def _requested_mode():
    mode = request.args.get('mode') or current_app.config.get('DEFAULT_MODE', MODES[0])
    return mode if mode in MODES else None


def _bad_mode():
    return jsonify({'error': f"mode must be one of {', '.join(MODES)}"}), 400


@stats.route('/leaderboard', methods=['GET'])
def leaderboard():
    """Per-player leaderboard for one mode, highest score first."""
    mode = _requested_mode()
    if not mode:
        return _bad_mode()
    store = EventStore()
    rows = compute_leaderboard(
        store.attempts(mode),
        store.scores(mode),
        mode,
        mistake_penalty=float(current_app.config.get('MISTAKE_PENALTY_SEC', 5)),
    )
    return jsonify({'mode': mode, 'rows': [r.to_dict() for r in rows]})


@stats.route('/words', methods=['GET'])
def word_statistics():
    """Per-word statistics for one mode, lowest guess rate (hardest) first."""
    mode = _requested_mode()
    if not mode:
        return _bad_mode()
    rows = compute_word_statistics(EventStore().attempts(mode), mode)
    return jsonify({'mode': mode, 'order': 'hardest-first', 'rows': [r.to_dict() for r in rows]})


@stats.route('/players/<string:player>/latest-score', methods=['GET'])
def latest_score(player):
    mode = _requested_mode()
    if not mode:
        return _bad_mode()
    event = EventStore().latest_score(player, mode)
    if not event:
        return jsonify({'error': f'No score recorded for {player} in {mode}'}), 404
    return jsonify(event.to_dict())
