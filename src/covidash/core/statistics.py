"""Derived statistics over a region's nested time-series record.

A region record is a plain mapping::

    {
        "total": {"confirmed": .., "deceased": .., "recovered": .., "other": ..,
                  "tested": .., "vaccinated1": .., "vaccinated2": ..},
        "delta": {...},    # change on the latest day
        "delta7": {...},   # change over the last 7 days
        "meta": {"population": .., "tested": {"last_updated": "YYYY-MM-DD"}},
    }

Any level may be missing or None; missing figures count as 0 and every
derivation returns 0 instead of a non-finite value.
"""

import math
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional, Union

from covidash.core.constants import STALE_STATISTICS
from covidash.core.models.statistic import TableStatistic
from covidash.core.settings import app_settings, logger
from covidash.core.utils.dates import parse_india_date


def _section(data: Optional[Mapping[str, Any]], key: str) -> Mapping[str, Any]:
    return (data or {}).get(key) or {}


def _figure(data, type_: str, key: str) -> float:
    return _section(data, type_).get(key) or 0


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.nan if numerator == 0 else math.copysign(math.inf, numerator)
    return numerator / denominator


def _scale_factor(data, type_: str, per_cent: bool, per_million: bool, moving_average: bool):
    factor = 1.0
    if type_ == "delta" and moving_average:
        type_ = "delta7"
        factor /= 7

    population = _section(data, "meta").get("population")
    if per_million:
        factor *= 1e6 / population if population else 0
    elif per_cent:
        factor *= 1e2 / population if population else 0
    return type_, factor


def get_statistic(
    data: Optional[Mapping[str, Any]],
    type_: str,
    statistic: str,
    *,
    per_cent: bool = False,
    per_million: bool = False,
    moving_average: bool = False,
) -> float:
    """Derive ``statistic`` from the ``type_`` section ("total", "delta", "delta7") of ``data``.

    Ratios (activeRatio, tpr, cfr, recoveryRatio) are percentages and ignore
    per-cent/per-million scaling. With ``moving_average`` a "delta" lookup
    reads "delta7" and divides by 7.
    """
    type_, factor = _scale_factor(data, type_, per_cent, per_million, moving_average)

    if statistic in ("active", "activeRatio"):
        confirmed = _figure(data, type_, "confirmed")
        active = (
            confirmed
            - _figure(data, type_, "deceased")
            - _figure(data, type_, "recovered")
            - _figure(data, type_, "other")
        )
        if statistic == "active":
            value = active * factor
        else:
            value = _divide(100 * active, confirmed)
    elif statistic == "vaccinated":
        value = (_figure(data, type_, "vaccinated1") + _figure(data, type_, "vaccinated2")) * factor
    elif statistic == "tpr":
        value = _divide(100 * _figure(data, type_, "confirmed"), _figure(data, type_, "tested"))
    elif statistic == "cfr":
        value = _divide(100 * _figure(data, type_, "deceased"), _figure(data, type_, "confirmed"))
    elif statistic == "recoveryRatio":
        value = _divide(100 * _figure(data, type_, "recovered"), _figure(data, type_, "confirmed"))
    elif statistic == "population":
        value = (_section(data, "meta").get("population") or 0) if type_ == "total" else 0
    else:
        value = _figure(data, type_, statistic) * factor

    # 0 * inf and friends collapse to 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return value or 0


def _difference_in_days(later: datetime, earlier: datetime) -> int:
    """Whole days between two datetimes, truncated toward zero."""
    return int((later - earlier) / timedelta(days=1))


def get_table_statistic(
    data: Optional[Mapping[str, Any]],
    statistic: str,
    last_updated: Union[datetime, str, int, float, None],
    *,
    table_types: Optional[Mapping[str, str]] = None,
    lookback_days: Optional[int] = None,
    per_cent: bool = False,
    per_million: bool = False,
    moving_average: bool = False,
) -> TableStatistic:
    """Total and delta for one table cell.

    ``table_types`` maps a statistic to the section its table column reads
    ("total" when absent); deltas are only shown for "total" columns.
    Testing figures older than ``lookback_days`` relative to ``last_updated``
    are reported as 0.
    """
    if lookback_days is None:
        lookback_days = app_settings.COVIDASH_TESTED_LOOKBACK_DAYS

    expired = False
    if statistic in STALE_STATISTICS:
        tested_updated = _section(_section(data, "meta"), "tested").get("last_updated")
        age = _difference_in_days(parse_india_date(last_updated), parse_india_date(tested_updated))
        expired = age > lookback_days
        if expired:
            logger.debug(f"[stats] {statistic} is {age} days old, hiding it (lookback={lookback_days})")

    type_ = (table_types or {}).get(statistic) or "total"
    args = dict(per_cent=per_cent, per_million=per_million, moving_average=moving_average)

    if expired:
        return TableStatistic(total=0, delta=0)
    total = get_statistic(data, type_, statistic, **args)
    delta = get_statistic(data, "delta", statistic, **args) if type_ == "total" else 0
    return TableStatistic(total=total, delta=delta)
