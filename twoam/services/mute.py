"""
Mute window rules.

A tenant is muted while its `mute_until` timestamp is strictly in the
future. Expired windows are left in storage and simply read as "not
muted"; nothing cleans them up.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Union

from twoam.config import MUTE_TIMESTAMP_FORMAT
from twoam.errors import InvalidMuteSpecError
from twoam.models.tenant import TenantRecord

logger = logging.getLogger(__name__)

MUTE_TODAY = ""
MUTE_TOMORROW = "tomorrow"
MUTE_WEEK = "week"


def parse_mute_until(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse a stored mute timestamp.

    Accepts ``YYYY-MM-DDTHH:MM:SS`` as well as a space separator and bare
    dates. A value that cannot be parsed is treated as no mute at all, so a
    corrupt row can neither crash a tick nor silence a server forever.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace(" ", "T", 1)).replace(tzinfo=None)
    except ValueError:
        logger.warning(f"[Mute] Ignoring unparseable mute_until value {value!r}")
        return None


def is_muted(record: TenantRecord, now: datetime) -> bool:
    """Return True iff the record's mute window ends strictly after `now`."""
    until = parse_mute_until(record.mute_until)
    return until is not None and now < until


def end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=0)


def resolve_mute_until(spec: Optional[str], now: datetime) -> datetime:
    """
    Turn a mute argument into the end of the mute window.

    Args:
        spec: "" (or None) and "tomorrow" mute until the end of today,
            "week" until the end of the day a week from now, and an
            explicit ``YYYY-MM-DD`` date until the start of that day.
        now: Reference time.

    Returns:
        The naive local datetime the mute lasts until.

    Raises:
        InvalidMuteSpecError: The date could not be parsed, or the window
            would already be over.
    """
    text = (spec or "").strip()
    keyword = text.lower()

    if keyword in (MUTE_TODAY, MUTE_TOMORROW):
        until = end_of_day(now)
    elif keyword == MUTE_WEEK:
        until = end_of_day(now + timedelta(weeks=1))
    else:
        try:
            day = datetime.strptime(text, "%Y-%m-%d")
        except ValueError:
            raise InvalidMuteSpecError(
                f"Could not understand '{text}'. Use tomorrow, week or a date (YYYY-MM-DD)."
            ) from None
        until = day.replace(hour=0, minute=0, second=0, microsecond=0)

    if until <= now:
        raise InvalidMuteSpecError(
            f"{format_mute_until(until)} is not in the future."
        )
    return until


def format_mute_until(until: datetime) -> str:
    """Format a mute timestamp the way it is persisted."""
    return until.strftime(MUTE_TIMESTAMP_FORMAT)
