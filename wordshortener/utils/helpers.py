"""Helper utilities shared by services and handlers.

Functions:
    utcnow() -> datetime
        Current moment as an aware UTC datetime (the default shortener clock)
    base_url(event) -> str
        Extract the public base URL from a request event
    get_short_url(word, base_url) -> str
        Get string representation of the short URL for a given word
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(func) -> Callable
        Decorator: Turn any unexpected handler exception into a logged 500 response

Example:
        >>> from wordshortener.utils.helpers import get_short_url
        >>> get_short_url('otter', 'https://example.com/')
        'https://example.com/u/otter'
"""

import os
import json
import logging
import functools
from datetime import datetime, UTC
from typing import Any
from collections.abc import Callable

from wordshortener.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from wordshortener.exceptions import MissingEnvironmentVariableError


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


def base_url(event: dict[str, Any]) -> str:
    """Extract the public base URL from a request event

    Args:
        event (dict): request event passed to a handler

    Returns:
        str: Base URL, e.g. "https://example.com", or "http://localhost:3000"
             when the event carries no domain (local runs, tests).
    """
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')
    return f'https://{domain}' if domain else 'http://localhost:3000'


def get_short_url(word: str, base_url: str) -> str:
    """Get string representation of a short URL

    Args:
        word (str): vocabulary word of the link
        base_url (str): public base URL of the site

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/u/{word}'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('REDIS_HOST')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'REDIS_HOST'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(func: Callable[..., dict]) -> Callable[..., dict]:
    """Decorator: respond with 500 instead of propagating unexpected exceptions

    Handlers map every expected error to a status code themselves; anything
    that still escapes is a bug or an infrastructure failure. It is logged with
    its traceback and the client gets a generic 500.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> dict:
        try:
            return func(*args, **kwargs)
        except Exception:
            logger.exception('Unhandled exception in handler. Responding with 500.', extra={'handler': func.__name__})
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json', 'Cache-Control': 'no-cache'},
                'body': json.dumps({'message': 'Internal Server Error', 'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR}),
            }

    return wrapper
