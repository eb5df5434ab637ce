from collections.abc import Callable
from datetime import datetime
from typing import Any


# Type aliases for handler payloads
type Event = dict[str, Any]
type Response = dict[str, Any]

# Source of "now" for expiry decisions; always returns an aware UTC datetime
type Clock = Callable[[], datetime]
