"""Timezone utilities. Crypto markets never close, so everything is kept in UTC."""

from datetime import datetime

import pytz

UTC_TZ = pytz.utc


def now_utc() -> datetime:
    """Return current time as an aware UTC datetime."""
    return datetime.now(UTC_TZ)
