from wordshortener.dao.base.short_link_base_dao import ShortLinkBaseDAO
from wordshortener.dao.base.message_base_dao import MessageBaseDAO


__all__ = [
    'ShortLinkBaseDAO',
    'MessageBaseDAO',
]
