"""
Notification Parser - Extracts parcel records from pasted notification text.

This file contains the logic to take raw SMS/app notification text and
convert it into structured ParcelRecord objects.

For Python beginners:
- Regular expressions (regex) are patterns that help find specific text
- The parser reads the text one line at a time
- A line with a date and time (3月15日 10:30) always starts a new parcel
- Lines after it fill in the locker name, pickup code and free hours
- Text before the first date/time line is ignored
"""

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from config import NOTIFICATION_PATTERNS, is_reasonable_value
from schemas.parcel_schema import ParcelRecord


@dataclass
class _ParcelDraft:
    """Mutable parcel being filled in while its block of lines is read."""

    arrival_timestamp: datetime
    locker_name: str = ""
    pickup_code: str = ""
    free_hours_override: Optional[int] = None
    lines: List[str] = field(default_factory=list)

    def build(self) -> ParcelRecord:
        return ParcelRecord(
            id=uuid.uuid4().hex,
            arrival_timestamp=self.arrival_timestamp,
            locker_name=self.locker_name,
            pickup_code=self.pickup_code,
            free_hours_override=self.free_hours_override,
            raw_text="\n".join(self.lines),
        )


class NotificationParser:
    """
    Parses notification text into parcel records.

    Notifications from different apps are not reliably separated by blank
    lines, so the timestamp line is the only record boundary we trust.
    """

    def __init__(self):
        """Compile the notification patterns from config."""

        self.timestamp_pattern = re.compile(NOTIFICATION_PATTERNS["timestamp"])
        self.locker_pattern = re.compile(NOTIFICATION_PATTERNS["locker"])
        self.pickup_code_pattern = re.compile(NOTIFICATION_PATTERNS["pickup_code"])
        self.free_hours_pattern = re.compile(NOTIFICATION_PATTERNS["free_hours"])

    def parse(self, text: str, now: Optional[datetime] = None) -> List[ParcelRecord]:
        """
        Parse a block of pasted notification text.

        Args:
            text: Raw text, usually several notifications pasted together
            now: Current time, only used for its calendar year (defaults to now)

        Returns:
            List of ParcelRecord objects, in the order their timestamp lines appeared.
            Returns an empty list when nothing could be recognised.
        """

        year = (now or datetime.now()).year
        records = []
        current = None

        for raw_line in text.split("\n"):
            line = raw_line.strip()
            if not line:
                continue

            arrival = self._extract_timestamp(line, year)
            if arrival is not None:
                if current is not None:
                    records.append(current.build())
                current = _ParcelDraft(arrival_timestamp=arrival)

            # Still idle: nothing to attach this line to
            if current is None:
                continue

            self._apply_fields(current, line)
            current.lines.append(line)

        if current is not None:
            records.append(current.build())

        return records

    def _extract_timestamp(self, line: str, year: int) -> Optional[datetime]:
        """
        Find a 月/日 hh:mm timestamp in the line.

        Out-of-range values roll over instead of being rejected, so
        2月29日 in a non-leap year becomes 3月1日 and 25:00 becomes 01:00
        the next day. Returns None only when the pattern is not found.
        """

        match = self.timestamp_pattern.search(line)
        if not match:
            return None

        month, day, hour, minute = (int(group) for group in match.groups())

        # 0月 means December of the previous year, 13月 January of the next
        extra_years, month_index = divmod(month - 1, 12)
        first_of_month = datetime(year + extra_years, month_index + 1, 1)

        return first_of_month + timedelta(days=day - 1, hours=hour, minutes=minute)

    def _apply_fields(self, draft: _ParcelDraft, line: str) -> None:
        """Overwrite any field whose pattern matches this line (last match wins)."""

        locker_match = self.locker_pattern.search(line)
        if locker_match:
            draft.locker_name = locker_match.group(1)

        code_match = self.pickup_code_pattern.search(line)
        if code_match:
            draft.pickup_code = code_match.group(1)

        hours_match = self.free_hours_pattern.search(line)
        if hours_match and is_reasonable_value("free_hours", hours_match.group(1)):
            draft.free_hours_override = int(hours_match.group(1))


def parse_notifications(text: str, now: Optional[datetime] = None) -> List[ParcelRecord]:
    """Shortcut for NotificationParser().parse(text, now)."""
    return NotificationParser().parse(text, now)
