import json
import logging

from wordshortener.app import Application
from wordshortener.exceptions import InvalidUrlError, NoAvailableWordsError, StorageError
from wordshortener.handlers.responses import response_400, response_500, response_503, response_json
from wordshortener.types import Event, Response
from wordshortener.utils.helpers import base_url, get_short_url, guarantee_500_response


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: Event, app: Application) -> Response:
    """Handle requests to shorten URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Extract the target URL from the JSON request body
    - Step 2: Ask the shortener engine for a new link
    - Step 3: Respond with 201 and the link's public fields

    HTTP responses:
        201: Successful URL shortening
            url: original url (provided in request)
            word: allocated word
            expiry: ISO-8601 UTC expiry of the link
            short_url: full short URL
        400: Bad client request
            message: invalid JSON body or invalid URL
        503: Service unavailable
            message: every word is currently in use
        500: Internal server error

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = handler(event, app)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['word']
        'otter'
    """
    # 1- Extract target URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.')
        return response_400(message='invalid JSON body')
    url = request_body.get('url') if isinstance(request_body, dict) else None

    # 2- Allocate a word and store the link
    try:
        link = app.engine.shorten(url)
    except InvalidUrlError as e:
        logger.info('Invalid URL. Responding with 400.', extra={'url': url})
        return response_400(message=str(e), error_code=InvalidUrlError.error_code)
    except NoAvailableWordsError as e:
        logger.warning('No available words. Responding with 503.')
        return response_503(message=str(e), error_code=NoAvailableWordsError.error_code)
    except StorageError:
        logger.exception('Failed to shorten URL. Responding with 500.')
        return response_500()

    # 3- Return successful response to user
    body = link.to_dict()
    body['short_url'] = get_short_url(link.word, base_url(event))
    return response_json(201, body)
