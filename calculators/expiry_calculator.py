"""
Expiry Calculator - Works out how long each parcel has left in its locker.

For Python beginners:
- Subtracting two datetimes gives a timedelta; we convert it to hours
- The free hours come from the message itself, or from the locker settings
- Everything here is a pure function: same inputs, same answer
"""

import math
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from config import WARNING_THRESHOLD_HOURS
from schemas.parcel_schema import ParcelRecord, Severity, TimeStatus


def evaluate(record: ParcelRecord, settings: Dict[str, int], now: Optional[datetime] = None) -> TimeStatus:
    """
    Compute the time status of a parcel.

    Args:
        record: Parcel produced by the notification parser
        settings: Locker name -> free hours lookup (read only)
        now: The instant to evaluate at (defaults to the current local time)

    Returns:
        TimeStatus with elapsed/remaining hours and a severity tier
    """

    if now is None:
        now = datetime.now()
    if not isinstance(now, datetime) or not isinstance(record.arrival_timestamp, datetime):
        raise TypeError("now and arrival_timestamp must both be datetime objects")

    elapsed_hours = (now - record.arrival_timestamp).total_seconds() / 3600

    # A zero override counts as "not stated" and falls through to the settings
    effective_free_hours = record.free_hours_override or settings.get(record.locker_name, 0)

    remaining_hours = effective_free_hours - elapsed_hours
    is_overdue = elapsed_hours > effective_free_hours

    if is_overdue:
        severity = Severity.OVERDUE
    elif remaining_hours < WARNING_THRESHOLD_HOURS:
        severity = Severity.WARNING
    else:
        severity = Severity.NORMAL

    return TimeStatus(
        stored_at=record.arrival_timestamp,
        elapsed_hours=elapsed_hours,
        effective_free_hours=effective_free_hours,
        remaining_hours=remaining_hours,
        is_overdue=is_overdue,
        severity=severity,
    )


def format_duration(hours: float) -> str:
    """
    Format an hour count as e.g. "1小时30分钟".

    The sign is dropped: overdue amounts are shown as positive durations.
    """

    abs_hours = abs(hours)
    whole_hours = math.floor(abs_hours)
    minutes = math.floor((abs_hours - whole_hours) * 60 + 0.5)

    if minutes == 60:
        whole_hours += 1
        minutes = 0

    return f"{whole_hours}小时{minutes}分钟"


def format_timestamp(value: datetime) -> str:
    """Format a datetime as e.g. 2024年03月15日 10:30"""
    return (
        f"{value.year}年{value.month:02d}月{value.day:02d}日 "
        f"{value.hour:02d}:{value.minute:02d}"
    )


def group_by_locker(records: Iterable[ParcelRecord]) -> Dict[str, List[ParcelRecord]]:
    """
    Group parcels by locker name.

    Keys come back sorted; parcels keep their original order inside a group.
    Parcels without a locker name are grouped under "".
    """

    groups: Dict[str, List[ParcelRecord]] = {}
    for record in records:
        groups.setdefault(record.locker_name, []).append(record)

    return {name: groups[name] for name in sorted(groups)}
