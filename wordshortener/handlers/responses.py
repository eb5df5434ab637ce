"""Response builders shared by all handlers

Every response is a plain dict:
    {'statusCode': int, 'headers': dict[str, str], 'body': str}

API responses are never cached by clients or proxies.
"""

import json
from typing import Any


NO_CACHE_HEADERS = {
    'Content-Type': 'application/json',
    'Cache-Control': 'no-cache',
}


def response_json(status_code: int, body: Any) -> dict:
    return {
        'statusCode': status_code,
        'headers': dict(NO_CACHE_HEADERS),
        'body': json.dumps(body),
    }


def response_error(status_code: int, message: str, error_code: str | None = None) -> dict:
    body = {'message': message}
    if error_code:
        body['errorCode'] = error_code
    return response_json(status_code, body)


def response_400(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Bad Request'
    return response_error(400, base if not message else f'{base} ({message})', error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> dict:
    return response_error(404, message or 'Not Found', error_code)


def response_500(message: str | None = None) -> dict:
    base = 'Internal Server Error'
    return response_error(500, base if not message else f'{base} ({message})')


def response_503(message: str | None = None, error_code: str | None = None) -> dict:
    return response_error(503, message or 'Service Unavailable', error_code)


def response_204() -> dict:
    return {
        'statusCode': 204,
        'headers': {'Cache-Control': 'no-cache'},
        'body': '',
    }


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {
            'Location': location,
            'Cache-Control': 'no-cache',
        },
        'body': json.dumps({}),  # no body needed for redirects
    }
