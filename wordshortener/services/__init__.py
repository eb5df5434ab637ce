from wordshortener.services.word_pool import WordPool
from wordshortener.services.shortener_engine import ShortenerEngine
from wordshortener.services.notification_hub import NotificationHub, Subscription, HubState, WaitOutcome
from wordshortener.services.message_board import MessageBoard


__all__ = [
    'WordPool',
    'ShortenerEngine',
    'NotificationHub',
    'Subscription',
    'HubState',
    'WaitOutcome',
    'MessageBoard',
]
