"""Composition root: builds and owns every long-lived component

Startup:
    >>> from wordshortener.utils import initialize_logging, load_config
    >>> initialize_logging()
    >>> app = Application.from_config(load_config()).start()

Shutdown (signal handling is left to the hosting server):
    >>> app.close()

close() runs at most once, in dependency order:
    1. the shortener engine (stops the sweep thread, which still uses Redis)
    2. the notification hub (releases long-polling readers with CLOSED)
    3. the Redis client
"""

import logging
import threading

import redis

from wordshortener.dao.redis import MessageRedisDAO, ShortLinkRedisDAO
from wordshortener.services import MessageBoard, NotificationHub, ShortenerEngine, WordPool
from wordshortener.utils.config import AppConfig
from wordshortener.utils.words import load_words


logger = logging.getLogger(__name__)


class Application:
    def __init__(
        self,
        engine: ShortenerEngine,
        board: MessageBoard,
        hub: NotificationHub,
        long_poll_timeout: float,
        redis_client: redis.Redis | None = None,
    ):
        self.engine = engine
        self.board = board
        self.hub = hub
        self.long_poll_timeout = long_poll_timeout
        self._redis = redis_client
        self._close_lock = threading.Lock()
        self._closed = False

    @classmethod
    def from_config(cls, config: AppConfig, redis_client: redis.Redis | None = None) -> 'Application':
        """Wire DAOs and services from configuration

        Both DAOs share a single Redis client (and connection pool).
        """
        short_link_dao = ShortLinkRedisDAO(**config.redis, redis_client=redis_client, prefix=config.prefix)
        message_dao = MessageRedisDAO(redis_client=short_link_dao.redis, prefix=config.prefix)

        hub = NotificationHub()
        engine = ShortenerEngine(
            dao=short_link_dao,
            pool=WordPool(load_words(config.wordlist_path)),
            ttl=config.link_ttl,
            sweep_interval=config.sweep_interval,
        )
        board = MessageBoard(message_dao, hub)

        return cls(
            engine=engine,
            board=board,
            hub=hub,
            long_poll_timeout=config.long_poll_timeout.total_seconds(),
            redis_client=short_link_dao.redis,
        )

    def start(self) -> 'Application':
        self.engine.start()
        return self

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True

        logger.info('Shutting down.')
        self.engine.close()
        self.hub.close()
        if self._redis is not None:
            self._redis.close()
        logger.info('Good night.')

    def __enter__(self) -> 'Application':
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.close()
