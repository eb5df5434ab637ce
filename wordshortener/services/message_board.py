"""Anonymous message board backed by the message DAO and the NotificationHub

Every successful post() fires the hub, waking all long-polling readers that
are waiting for the next message.
"""

import logging

from wordshortener.constants import MessageOrder
from wordshortener.dao.base import MessageBaseDAO
from wordshortener.dao.exceptions import DataStoreError, MessageDoesNotExistError
from wordshortener.exceptions import InvalidMessageError, InvalidQueryError, MessageNotFoundError, StorageError
from wordshortener.models import MessageModel
from wordshortener.services.notification_hub import NotificationHub, WaitOutcome


logger = logging.getLogger(__name__)


class MessageBoard:
    def __init__(self, dao: MessageBaseDAO, hub: NotificationHub):
        self.dao = dao
        self.hub = hub

    def post(self, message: str | None, visitor_id: str | None = None) -> MessageModel:
        """Store a message and wake waiting readers

        Raises:
            InvalidMessageError: if the message is missing or blank.
            StorageError: if the message can't be stored (readers are not woken).
        """
        if not isinstance(message, str):
            raise InvalidMessageError('no message')
        message = message.strip()
        if not message:
            raise InvalidMessageError('empty message')

        try:
            saved = self.dao.save(message, visitor_id=visitor_id)
        except DataStoreError as e:
            logger.error('Failed to store message.', extra={'visitorId': visitor_id}, exc_info=True)
            raise StorageError("Can't store message.") from e

        released = self.hub.notify()
        logger.info('Message posted.', extra={'messageId': saved.id, 'released': released})
        return saved

    def list(self, limit: int | str | None = None, order: str | None = None) -> list[MessageModel]:
        """List messages, newest first unless `order` is 'oldest'

        `limit` may come straight from a query string, so numeric strings are accepted.

        Raises:
            InvalidQueryError: if `order` or `limit` is invalid.
            StorageError: if the store can't be read.
        """
        if order is None:
            order = MessageOrder.NEWEST
        if order not in (MessageOrder.NEWEST, MessageOrder.OLDEST):
            raise InvalidQueryError('invalid order')

        if limit is not None:
            try:
                limit = int(limit)
            except (TypeError, ValueError) as e:
                raise InvalidQueryError('invalid limit') from e
            if limit <= 0:
                raise InvalidQueryError('invalid limit')

        try:
            return self.dao.get_all(limit=limit, reverse=order == MessageOrder.NEWEST)
        except DataStoreError as e:
            logger.error('Failed to list messages.', exc_info=True)
            raise StorageError("Can't list messages.") from e

    def get(self, message_id: int | str) -> MessageModel:
        """Fetch a single message

        Raises:
            InvalidQueryError: if the id is not a positive integer.
            MessageNotFoundError: if no message has that id.
            StorageError: if the store can't be read.
        """
        try:
            message_id = int(message_id)
        except (TypeError, ValueError) as e:
            raise InvalidQueryError('invalid message id') from e
        if message_id <= 0:
            raise InvalidQueryError('invalid message id')

        try:
            return self.dao.get(message_id)
        except MessageDoesNotExistError as e:
            raise MessageNotFoundError(f"Message '{message_id}' not found.") from e
        except DataStoreError as e:
            logger.error('Failed to read message.', extra={'messageId': message_id}, exc_info=True)
            raise StorageError(f"Can't read message '{message_id}'.") from e

    def wait_for_update(self, timeout: float | None) -> WaitOutcome:
        """Block until the next post(), shutdown, or `timeout` seconds"""
        return self.hub.wait_for_event(timeout)
