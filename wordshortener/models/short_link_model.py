from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a word to URL mapping.

    Attributes:
        word (str):
            Vocabulary word identifying the link, used as the URL path segment.
        url (str):
            The absolute destination URL the word redirects to.
        created_at (datetime):
            Moment of allocation (UTC).
        expires_at (datetime):
            created_at + TTL. The link is no longer resolvable once
            `now > expires_at`.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime.now(UTC)
        >>> link = ShortLinkModel(
        ...     word="otter",
        ...     url="https://example.com/article/123",
        ...     created_at=now,
        ...     expires_at=now + timedelta(days=1),
        ... )
        >>> link.is_expired(now)
        False
        >>> link.to_dict()['word']
        'otter'
    """

    word: str
    url: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def to_dict(self) -> dict[str, str]:
        """Public fields of the link, as returned to API callers."""
        return {
            'word': self.word,
            'url': self.url,
            'expiry': self.expires_at.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
        }
