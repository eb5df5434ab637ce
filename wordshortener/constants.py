from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Short link lifetime
    ONE_DAY = 86_400  # 60 * 60 * 24
    # Default period of the reclamation sweep
    ONE_MINUTE = 60


class Defaults:
    """Default configuration values."""

    REDIS_PORT = 6379
    REDIS_DB = 0
    REDIS_SOCKET_TIMEOUT = 5  # seconds, surfaced as StorageError when exceeded
    LINK_TTL = TTL.ONE_DAY
    SWEEP_INTERVAL = TTL.ONE_MINUTE
    LONG_POLL_TIMEOUT = 30
    LOG_LEVEL = 'INFO'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'
        LOG_PATH = 'LOG_PATH'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105
        SOCKET_TIMEOUT = 'REDIS_SOCKET_TIMEOUT'

    class Shortener(StrEnum):
        LINK_TTL = 'LINK_TTL_SECONDS'
        SWEEP_INTERVAL = 'SWEEP_INTERVAL_SECONDS'
        WORDLIST_PATH = 'WORDLIST_PATH'

    class MessageBoard(StrEnum):
        LONG_POLL_TIMEOUT = 'LONG_POLL_TIMEOUT_SECONDS'


# Message board list orders
class MessageOrder(StrEnum):
    NEWEST = 'newest'
    OLDEST = 'oldest'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
