from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from revdict.routes import main
    flask_app.register_blueprint(main)

    from revdict.api.game import game
    flask_app.register_blueprint(game, url_prefix='/api/game')

    from revdict.api.stats import stats
    flask_app.register_blueprint(stats, url_prefix='/api/stats')

    from revdict.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates every table, discarding all telemetry."""
        import revdict.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('leaderboard')
    @click.option('--mode', default=None, help='Mode to aggregate (defaults to DEFAULT_MODE).')
    def leaderboard_command(mode):
        """Prints the leaderboard for one mode."""
        from revdict.services.store import EventStore
        from revdict.services.aggregation import compute_leaderboard
        with flask_app.app_context():
            mode = mode or flask_app.config['DEFAULT_MODE']
            store = EventStore()
            rows = compute_leaderboard(
                store.attempts(mode), store.scores(mode), mode,
                mistake_penalty=flask_app.config.get('MISTAKE_PENALTY_SEC', 5),
            )
            if not rows:
                print(f'No games recorded for {mode}.')
            for rank, row in enumerate(rows, start=1):
                r = row.to_dict()
                print(f"{rank:>3}. {r['player']:<20} score={r['score']:<4} "
                      f"best={r['shortest']} avg={r['average']} wrongs={r['wrongs']} "
                      f"easiest={r['easiest_word']} hardest={r['hardest_word']}")

    @click.command('word-stats')
    @click.option('--mode', default=None, help='Mode to aggregate (defaults to DEFAULT_MODE).')
    def word_stats_command(mode):
        """Prints per-word statistics for one mode, hardest first."""
        from revdict.services.store import EventStore
        from revdict.services.aggregation import compute_word_statistics
        with flask_app.app_context():
            mode = mode or flask_app.config['DEFAULT_MODE']
            rows = compute_word_statistics(EventStore().attempts(mode), mode)
            if not rows:
                print(f'No words attempted in {mode}.')
            for row in rows:
                r = row.to_dict()
                print(f"{r['word']:<20} guessed={r['guess_rate']:>5}% "
                      f"mistakes={r['mistakes']:<3} avg={r['average_reaction_time']}")

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(leaderboard_command)
    flask_app.cli.add_command(word_stats_command)

    return flask_app
