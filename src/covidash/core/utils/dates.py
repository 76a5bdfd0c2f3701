"""Date helpers for the dashboard, all anchored to India Standard Time.

Values accepted wherever a date is parsed:

* ``YYYY-MM-DD`` strings, read as midnight IST of that day
* other ISO-8601 strings (a trailing ``Z`` is accepted)
* ``datetime`` objects; naive ones are taken as UTC
* ``date`` objects, read as midnight IST
* ``int``/``float`` epoch milliseconds

Locale is any Babel locale identifier; when omitted, ``COVIDASH_LOCALE`` applies.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

from babel.dates import format_datetime, format_timedelta

from covidash.core.constants import INDIA_ISO_SUFFIX, ISO_DATE_REGEX, IST
from covidash.core.settings import app_settings

DateLike = Union[str, datetime, date, int, float]


def get_india_date(now: Optional[datetime] = None) -> datetime:
    """Current time (or ``now``) as an aware datetime in IST."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(IST)


def get_india_date_iso(now: Optional[datetime] = None) -> str:
    return get_india_date(now).date().isoformat()


def get_india_date_yesterday(now: Optional[datetime] = None) -> datetime:
    return get_india_date(now) - timedelta(days=1)


def get_india_date_yesterday_iso(now: Optional[datetime] = None) -> str:
    return get_india_date_yesterday(now).date().isoformat()


def _to_india_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return get_india_date(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=IST)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).astimezone(IST)
    if isinstance(value, str):
        text = value.strip()
        if ISO_DATE_REGEX.match(text):
            text += INDIA_ISO_SUFFIX
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"Invalid date value: {value!r}") from exc
        return get_india_date(parsed)
    raise ValueError(f"Unsupported date value: {value!r}")


def parse_india_date(value: Optional[DateLike] = None) -> datetime:
    """Parse ``value`` into an IST datetime; an empty value means now."""
    if not value:
        return get_india_date()
    return _to_india_datetime(value)


def format_date(value: Optional[DateLike], pattern: str, locale: Optional[str] = None) -> str:
    """Format ``value`` in IST with a CLDR pattern such as ``dd MMM yyyy``.

    Returns an empty string for empty values. ``locale`` defaults to
    ``COVIDASH_LOCALE``.
    """
    if not value:
        return ""
    locale = locale or app_settings.COVIDASH_LOCALE
    return format_datetime(_to_india_datetime(value), pattern, tzinfo=IST, locale=locale)


def format_last_updated(
    value: DateLike,
    now: Optional[datetime] = None,
    locale: Optional[str] = None,
) -> str:
    """Localized distance between ``value`` and now, without direction (e.g. "3 days")."""
    locale = locale or app_settings.COVIDASH_LOCALE
    delta = _to_india_datetime(value) - get_india_date(now)
    return format_timedelta(delta, add_direction=False, locale=locale)
