from wordshortener.dao.base import ShortLinkBaseDAO, MessageBaseDAO
from wordshortener.dao.redis import ShortLinkRedisDAO, MessageRedisDAO


__all__ = [
    'ShortLinkBaseDAO',
    'MessageBaseDAO',
    'ShortLinkRedisDAO',
    'MessageRedisDAO',
]
