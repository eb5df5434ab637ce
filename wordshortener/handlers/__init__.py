from wordshortener.handlers import messages, redirect_url, shorten_url


__all__ = [
    'messages',
    'redirect_url',
    'shorten_url',
]
