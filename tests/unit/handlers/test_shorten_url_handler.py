"""Unit tests for the shorten_url handler.

Test coverage includes:

1. Successful shortening
   - Ensures the handler returns 201 with the word, URL, expiry and short URL.

2. Invalid requests
   - Ensures malformed JSON bodies return HTTP 400.
   - Ensures missing or invalid URLs return HTTP 400 with 'invalid URL'.

3. Exhaustion
   - Ensures an exhausted vocabulary returns HTTP 503.

4. Server errors
   - Ensures storage failures and unexpected exceptions return HTTP 500.
"""

import json

import pytest

from wordshortener.dao.exceptions import DataStoreError
from wordshortener.handlers import shorten_url


def _request(event, body):
    event['body'] = body if isinstance(body, str) else json.dumps(body)
    return event


# -------------------------------
# 1. Successful shortening
# -------------------------------


def test_shorten_url(app, event, vocabulary, short_link_dao):
    response = shorten_url.handler(_request(event, {'url': 'https://example.com/blog/article'}), app)
    body = json.loads(response['body'])

    assert response['statusCode'] == 201
    assert response['headers']['Cache-Control'] == 'no-cache'
    assert body['url'] == 'https://example.com/blog/article'
    assert body['word'] in vocabulary
    assert body['expiry'] == '2026-10-18T12:00:00.000Z'
    assert body['short_url'] == f'https://words.test/u/{body["word"]}'
    assert body['word'] in short_link_dao.records


# -------------------------------
# 2. Invalid requests
# -------------------------------


def test_shorten_url_with_invalid_json(app, event):
    response = shorten_url.handler(_request(event, '{"url": "https://example.com"'), app)
    body = json.loads(response['body'])

    assert response['statusCode'] == 400
    assert body['message'] == 'Bad Request (invalid JSON body)'


@pytest.mark.parametrize(
    'payload',
    [{}, {'target': 'https://example.com'}, {'url': 'not a url'}, {'url': ''}, {'url': 'javascript:alert(1)'}, ['https://example.com']],
)
def test_shorten_url_with_invalid_url(app, event, payload):
    response = shorten_url.handler(_request(event, payload), app)
    body = json.loads(response['body'])

    assert response['statusCode'] == 400
    assert body['message'] == 'Bad Request (invalid URL)'
    assert body['errorCode'] == 'shortener:invalid_url'
    assert app.engine.available == 3


def test_shorten_url_without_body(app, event):
    response = shorten_url.handler(event, app)
    assert response['statusCode'] == 400


# -------------------------------
# 3. Exhaustion
# -------------------------------


def test_shorten_url_when_exhausted(app, event, vocabulary):
    for i in range(len(vocabulary)):
        response = shorten_url.handler(_request(event, {'url': f'https://example.com/{i}'}), app)
        assert response['statusCode'] == 201

    response = shorten_url.handler(_request(event, {'url': 'https://example.com/late'}), app)
    body = json.loads(response['body'])

    assert response['statusCode'] == 503
    assert body['message'] == 'no available words'
    assert body['errorCode'] == 'shortener:no_available_words'


# -------------------------------
# 4. Server errors
# -------------------------------


def test_shorten_url_with_storage_error(app, event, short_link_dao):
    short_link_dao.fail_insert = DataStoreError('Redis is down')

    response = shorten_url.handler(_request(event, {'url': 'https://example.com'}), app)

    assert response['statusCode'] == 500
    assert json.loads(response['body'])['message'] == 'Internal Server Error'
    assert app.engine.available == 3


def test_shorten_url_with_unexpected_error(broken_app, event):
    broken_app.engine.shorten.side_effect = RuntimeError('boom')

    response = shorten_url.handler(_request(event, {'url': 'https://example.com'}), broken_app)
    body = json.loads(response['body'])

    assert response['statusCode'] == 500
    assert body['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
