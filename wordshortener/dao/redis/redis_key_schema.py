import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing data models.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "wordshortener:prod" or "wordshortener:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, word: str) -> str:
        return f'links:{word}'

    @prefix_key
    def link_expiry_index_key(self) -> str:
        return 'links:expiry'

    @prefix_key
    def message_key(self, message_id: int) -> str:
        return f'messages:{message_id}'

    @prefix_key
    def message_index_key(self) -> str:
        return 'messages:index'

    @prefix_key
    def message_counter_key(self) -> str:
        return 'messages:counter'
