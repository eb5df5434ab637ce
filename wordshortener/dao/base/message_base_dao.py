"""Abstract base class for message board data access objects (DAOs).

Messages are append-only: they are never updated or deleted, and their ids
follow insertion order.

Example:
        >>> from wordshortener.dao.redis import MessageRedisDAO
        >>> dao = MessageRedisDAO(...)

        >>> dao.save("hello there", visitor_id="42").id
        1
        >>> [m.message for m in dao.get_all(limit=10, reverse=True)]
        ['hello there']
"""

from abc import ABC, abstractmethod

from wordshortener.models import MessageModel


class MessageBaseDAO(ABC):
    """Interface for message data access objects (DAOs).

    Methods:
        save(message: str, visitor_id: str | None) -> MessageModel:
            Allocate an id and store the message.
            Raises DataStoreError on connection or write failure.

        get(message_id: int) -> MessageModel:
            Retrieve a single message.
            Raises MessageDoesNotExistError if the id is unknown.
            Raises DataStoreError on connection or read failure.

        get_all(limit: int | None, reverse: bool) -> list[MessageModel]:
            Retrieve messages in insertion order (reverse=True: newest first).
            Raises DataStoreError on connection or read failure.
    """

    @abstractmethod
    def save(self, message: str, visitor_id: str | None = None, **kwargs) -> MessageModel:
        pass

    @abstractmethod
    def get(self, message_id: int, **kwargs) -> MessageModel:
        pass

    @abstractmethod
    def get_all(self, limit: int | None = None, reverse: bool = True, **kwargs) -> list[MessageModel]:
        pass
