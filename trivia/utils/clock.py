from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Heure UTC naïve (sans tzinfo), format stocké en base."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
