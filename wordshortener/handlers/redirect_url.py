import logging

from wordshortener.app import Application
from wordshortener.exceptions import StorageError, UrlNotFoundError
from wordshortener.handlers.responses import response_302, response_400, response_404, response_500
from wordshortener.types import Event, Response
from wordshortener.utils.helpers import guarantee_500_response


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: Event, app: Application) -> Response:
    """Handle requests to follow a short link

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing word in path parameters
        404: Not found
            message: the word has no live link (never existed or expired)
        500: Internal server error

    Example:
        >>> response = handler({'pathParameters': {'word': 'otter'}}, app)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract word from request's path
    word = (event.get('pathParameters') or {}).get('word')
    if not word:
        logger.info('Missing "word" in path. Responding with 400.')
        return response_400(message="missing 'word' in path")

    # 2- Resolve the word
    try:
        url = app.engine.lookup(word)
    except UrlNotFoundError:
        logger.info('Short link not found. Responding with 404.', extra={'word': word})
        return response_404(message=f"short link '{word}' doesn't exist", error_code=UrlNotFoundError.error_code)
    except StorageError:
        logger.exception('Failed to resolve short link. Responding with 500.', extra={'word': word})
        return response_500()

    # 3- Redirect client to target URL
    logger.info('Redirecting client to target URL. Responding with 302.', extra={'word': word})
    return response_302(location=url)
