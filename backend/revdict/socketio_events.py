from flask_socketio import join_room, leave_room, emit
from revdict import socketio
from revdict.models import MODES


def _room(mode: str) -> str:
    return f"mode:{mode}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_mode(data):
    mode = (data or {}).get('mode')
    if mode not in MODES:
        emit('error', {'message': f"mode must be one of {', '.join(MODES)}"})
        return
    join_room(_room(mode))
    emit('joined', {'room': _room(mode)})


def handle_leave_mode(data):
    mode = (data or {}).get('mode')
    if not mode:
        emit('error', {'message': 'mode is required'})
        return
    leave_room(_room(mode))
    emit('left', {'room': _room(mode)})


def handle_ping(data):
    emit('pong', data or {})


def notify_leaderboard_stale(mode: str) -> None:
    """Tell leaderboard viewers of ``mode`` that new telemetry has landed.

    Clients refetch the leaderboard; nothing is aggregated here.
    """
    socketio.emit('leaderboard_stale', {'mode': mode}, to=_room(mode), namespace='/ws')


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_mode', handle_join_mode, namespace='/ws')
    socketio.on_event('leave_mode', handle_leave_mode, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('join_mode', handle_join_mode, namespace='/')
        socketio.on_event('leave_mode', handle_leave_mode, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
