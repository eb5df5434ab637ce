"""Anonymous message board handlers

Handlers:
    post_handler(event, app)    POST /messages
    list_handler(event, app)    GET  /messages?limit=&order=
    get_handler(event, app)     GET  /messages/{id}
    update_handler(event, app)  GET  /messages/update  (long-poll)

The visitor id is an opaque, optional value supplied by the hosting server in
event['requestContext']['visitorId'].
"""

import json
import logging

from wordshortener.app import Application
from wordshortener.exceptions import (
    InvalidMessageError,
    InvalidQueryError,
    MessageNotFoundError,
    StorageError,
)
from wordshortener.handlers.responses import (
    response_204,
    response_400,
    response_404,
    response_500,
    response_503,
    response_json,
)
from wordshortener.services import WaitOutcome
from wordshortener.types import Event, Response
from wordshortener.utils.helpers import guarantee_500_response


logger = logging.getLogger(__name__)


def _visitor_id(event: Event) -> str | None:
    return (event.get('requestContext') or {}).get('visitorId')


@guarantee_500_response
def post_handler(event: Event, app: Application) -> Response:
    """Post a message: JSON body {"message": "..."}

    HTTP responses:
        201: {id, message, created_at, visitor_id}
        400: invalid JSON body, missing or empty message
        500: internal server error
    """
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.')
        return response_400(message='invalid JSON body')
    message = request_body.get('message') if isinstance(request_body, dict) else None

    try:
        saved = app.board.post(message, visitor_id=_visitor_id(event))
    except InvalidMessageError as e:
        logger.info('Invalid message. Responding with 400.', extra={'reason': str(e)})
        return response_400(message=str(e), error_code=InvalidMessageError.error_code)
    except StorageError:
        logger.exception('Failed to post message. Responding with 500.')
        return response_500()

    return response_json(201, saved.to_dict())


@guarantee_500_response
def list_handler(event: Event, app: Application) -> Response:
    """List messages. Query parameters: limit (positive int), order (newest|oldest)

    HTTP responses:
        200: {messages: [...]}
        400: invalid limit or order
        500: internal server error
    """
    params = event.get('queryStringParameters') or {}
    try:
        messages = app.board.list(limit=params.get('limit'), order=params.get('order'))
    except InvalidQueryError as e:
        logger.info('Invalid message query. Responding with 400.', extra={'reason': str(e)})
        return response_400(message=str(e), error_code=InvalidQueryError.error_code)
    except StorageError:
        logger.exception('Failed to list messages. Responding with 500.')
        return response_500()

    return response_json(200, {'messages': [m.to_dict() for m in messages]})


@guarantee_500_response
def get_handler(event: Event, app: Application) -> Response:
    """Fetch one message by id (path parameter)

    HTTP responses:
        200: {id, message, created_at, visitor_id}
        400: missing or malformed id
        404: no such message
        500: internal server error
    """
    message_id = (event.get('pathParameters') or {}).get('id')
    if message_id is None:
        logger.info('Missing "id" in path. Responding with 400.')
        return response_400(message="missing 'id' in path")

    try:
        message = app.board.get(message_id)
    except InvalidQueryError as e:
        logger.info('Invalid message id. Responding with 400.', extra={'messageId': message_id})
        return response_400(message=str(e), error_code=InvalidQueryError.error_code)
    except MessageNotFoundError as e:
        logger.info('Message not found. Responding with 404.', extra={'messageId': message_id})
        return response_404(message=str(e), error_code=MessageNotFoundError.error_code)
    except StorageError:
        logger.exception('Failed to read message. Responding with 500.', extra={'messageId': message_id})
        return response_500()

    return response_json(200, message.to_dict())


@guarantee_500_response
def update_handler(event: Event, app: Application) -> Response:
    """Long-poll until the next message is posted

    Blocks for at most app.long_poll_timeout seconds.

    HTTP responses:
        204: a new message was posted while waiting
        200: {"updated": false} when the wait timed out
        503: the server is shutting down
    """
    outcome = app.board.wait_for_update(app.long_poll_timeout)
    if outcome is WaitOutcome.FIRED:
        return response_204()
    if outcome is WaitOutcome.TIMEOUT:
        return response_json(200, {'updated': False})

    logger.info('Server closing. Responding with 503.')
    return response_503(message='server is shutting down')
