"""Absolute URL validation for the shortener

A URL is accepted when it:
    - is a string that is non-empty once surrounding whitespace is stripped;
    - has no inner whitespace or control characters;
    - starts with an RFC 3986 scheme (ALPHA *( ALPHA / DIGIT / "+" / "-" / "." ) ":");
    - has a host when the scheme is hierarchical (http, https, ftp, ws, wss),
      or a non-empty remainder for the opaque schemes (mailto, tel, sms).

Any other scheme is rejected, javascript: and data: included.

Example:
    >>> validate_url('  https://example.com/a?b=c  ')
    'https://example.com/a?b=c'
    >>> validate_url('not a url')
    Traceback (most recent call last):
        ...
    wordshortener.exceptions.InvalidUrlError: invalid URL
"""

import re
import urllib.parse
from typing import Any

from wordshortener.exceptions import InvalidUrlError


SCHEME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')
HIERARCHICAL_SCHEMES = frozenset({'http', 'https', 'ftp', 'ws', 'wss'})
OPAQUE_SCHEMES = frozenset({'mailto', 'tel', 'sms'})


def validate_url(url: Any) -> str:
    """Return the stripped URL, or raise InvalidUrlError"""
    if not isinstance(url, str):
        raise InvalidUrlError('invalid URL')

    url = url.strip()
    if not url or any(ch.isspace() or not ch.isprintable() for ch in url):
        raise InvalidUrlError('invalid URL')

    try:
        components = urllib.parse.urlsplit(url)
        hostname = components.hostname
        components.port  # raises ValueError on a non-numeric or out of range port
    except ValueError as e:
        raise InvalidUrlError('invalid URL') from e

    scheme = components.scheme.lower()
    if not scheme or not SCHEME_PATTERN.match(scheme):
        raise InvalidUrlError('invalid URL')

    if scheme in HIERARCHICAL_SCHEMES:
        if not hostname:
            raise InvalidUrlError('invalid URL')
    elif scheme not in OPAQUE_SCHEMES or not url[len(scheme) + 1:]:
        raise InvalidUrlError('invalid URL')

    return url
