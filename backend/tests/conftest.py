import os
import sys
import pytest

# Ensure the backend root (containing the `coinflip` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from coinflip import create_app, socketio
from coinflip.services.wagering import Ledger, MatchRegistry, SequenceCoin


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    HOST = '127.0.0.1'
    PORT = 3001
    CORS_ALLOWED_ORIGINS = '*'
    STARTING_BALANCE = 100
    HOUSE_FEE_PERCENT = 10
    MATCH_ID_LENGTH = 8
    COIN = None
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    """Build extra Socket.IO test clients; all are disconnected on teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
        )
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def sio_client(sio_factory):
    return sio_factory()


@pytest.fixture()
def set_coin(flask_app):
    """Force the next flips to the given outcomes, e.g. set_coin('HEADS')."""
    def _set(*outcomes):
        flask_app.extensions['wagering'].registry.coin = SequenceCoin(outcomes)
    return _set


@pytest.fixture()
def ledger():
    return Ledger(starting_balance=100)


@pytest.fixture()
def registry(ledger):
    return MatchRegistry(ledger, coin=SequenceCoin(['HEADS']))
