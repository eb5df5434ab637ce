from dataclasses import dataclass
from datetime import datetime
from typing import Any


# fmt: off
@dataclass(frozen=True)
class MessageModel:
    id: int                         # Sequential id allocated by the store, starting at 1
    message: str                    # Stripped, non-empty message text
    created_at: datetime            # Moment the message was stored (UTC)
    visitor_id: str | None = None   # Opaque id of the posting visitor, if known
# fmt: on

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'message': self.message,
            'visitor_id': self.visitor_id,
            'created_at': self.created_at.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
        }
