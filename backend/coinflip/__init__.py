from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from coinflip.config import Config
from coinflip.services.wagering import Wagering

wagering = Wagering()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)
    wagering.init_app(flask_app)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from coinflip.main import main
    flask_app.register_blueprint(main)

    from coinflip.api.matches import matches
    flask_app.register_blueprint(matches, url_prefix='/api/matches')

    # Register Socket.IO event handlers
    from coinflip.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('serve')
    def serve_command():
        """Runs the Socket.IO server on the configured host and port."""
        host = flask_app.config['HOST']
        port = flask_app.config['PORT']
        flask_app.logger.info(f"[serve] listening on http://{host}:{port}")
        socketio.run(flask_app, host=host, port=port)

    flask_app.cli.add_command(serve_command)

    return flask_app
