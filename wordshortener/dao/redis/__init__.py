from wordshortener.dao.redis.redis_key_schema import RedisKeySchema
from wordshortener.dao.redis.mixins import RedisClientMixin
from wordshortener.dao.redis.short_link_redis_dao import ShortLinkRedisDAO
from wordshortener.dao.redis.message_redis_dao import MessageRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortLinkRedisDAO',
    'MessageRedisDAO',
]
