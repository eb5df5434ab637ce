from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from wordshortener.app import Application
from wordshortener.services import MessageBoard, NotificationHub, ShortenerEngine, WordPool


@pytest.fixture
def hub():
    return NotificationHub()


@pytest.fixture
def app(short_link_dao, message_dao, hub, vocabulary, clock):
    """Application wired to in-memory DAOs (the sweep thread is not started)."""
    engine = ShortenerEngine(short_link_dao, WordPool(vocabulary), ttl=timedelta(days=1), sweep_interval=timedelta(minutes=1), clock=clock)
    board = MessageBoard(message_dao, hub)
    _app = Application(engine=engine, board=board, hub=hub, long_poll_timeout=0.05)
    yield _app
    _app.close()


@pytest.fixture
def broken_app(hub):
    """Application whose services raise whatever the test configures."""
    engine = MagicMock(spec=ShortenerEngine)
    board = MagicMock(spec=MessageBoard)
    return Application(engine=engine, board=board, hub=hub, long_poll_timeout=0.05)


@pytest.fixture
def event():
    return {
        'body': None,
        'pathParameters': None,
        'queryStringParameters': None,
        'headers': {'User-Agent': 'pytest'},
        'requestContext': {
            'domainName': 'words.test',
            'visitorId': 'visitor-42',
        },
    }
