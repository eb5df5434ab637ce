from wordshortener.models.short_link_model import ShortLinkModel
from wordshortener.models.message_model import MessageModel


__all__ = [
    'ShortLinkModel',
    'MessageModel',
]
