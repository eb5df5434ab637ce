"""Data Access Object (DAO) implementation for the message board in Redis

Key layout (see RedisKeySchema):
    <prefix>:messages:counter   STRING  last allocated message id
    <prefix>:messages:<id>      HASH    {message, visitor_id, created_at}
    <prefix>:messages:index     LIST    message ids in insertion order
"""

from datetime import datetime, UTC

from beartype import beartype

from wordshortener.models import MessageModel
from wordshortener.dao.base import MessageBaseDAO
from wordshortener.dao.redis.mixins import RedisClientMixin
from wordshortener.dao.redis.helpers import handle_redis_errors, to_timestamp, from_timestamp
from wordshortener.dao.exceptions import MessageDoesNotExistError


class MessageRedisDAO(RedisClientMixin, MessageBaseDAO):
    @handle_redis_errors
    @beartype
    def save(self, message: str, visitor_id: str | None = None, **kwargs) -> MessageModel:
        message_id = self.redis.incr(self.keys.message_counter_key())
        created_at = datetime.now(UTC)

        # NOTE: The record and its index entry are written together, so
        #       get_all() never lists an id whose hash does not exist yet.
        with self.redis.pipeline(transaction=True) as pipe:
            # fmt: off
            pipe.hset(self.keys.message_key(message_id), mapping={
                'message': message,
                'visitor_id': visitor_id or '',
                'created_at': to_timestamp(created_at),
            })
            # fmt: on
            pipe.rpush(self.keys.message_index_key(), message_id)
            pipe.execute()

        return MessageModel(id=message_id, message=message, created_at=created_at, visitor_id=visitor_id)

    @handle_redis_errors
    @beartype
    def get(self, message_id: int, **kwargs) -> MessageModel:
        record = self.redis.hgetall(self.keys.message_key(message_id))
        if not record:
            raise MessageDoesNotExistError(f"Message with ID '{message_id}' does not exist.")
        return self._to_model(message_id, record)

    @handle_redis_errors
    @beartype
    def get_all(self, limit: int | None = None, reverse: bool = True, **kwargs) -> list[MessageModel]:
        index_key = self.keys.message_index_key()
        if limit is None:
            ids = self.redis.lrange(index_key, 0, -1)
        elif reverse:
            ids = self.redis.lrange(index_key, -limit, -1)
        else:
            ids = self.redis.lrange(index_key, 0, limit - 1)

        ids = [int(message_id) for message_id in ids]
        if reverse:
            ids.reverse()

        with self.redis.pipeline(transaction=False) as pipe:
            for message_id in ids:
                pipe.hgetall(self.keys.message_key(message_id))
            records = pipe.execute()

        return [self._to_model(message_id, record) for message_id, record in zip(ids, records) if record]

    @staticmethod
    def _to_model(message_id: int, record: dict) -> MessageModel:
        return MessageModel(
            id=message_id,
            message=record['message'],
            created_at=from_timestamp(record['created_at']),
            visitor_id=record.get('visitor_id') or None,
        )
