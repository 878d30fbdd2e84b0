"""
Configuration file for the Parcel Locker Tracker

This file contains all the customizable settings for parsing notifications
and computing free-storage status. You can modify these settings without
changing the core parser or calculator code.

For Python beginners:
- This centralizes all configuration in one place
- Easy to modify default lockers, notification patterns and thresholds
- Runtime paths (data folder, output folder) come from the .env file instead
"""

from typing import List, Dict

# =============================================================================
# LOCKER INFORMATION
# =============================================================================

# Free storage hours per locker brand, seeded the first time the tracker runs.
# Users can change these later with: python setup_lockers.py
DEFAULT_LOCKER_SETTINGS: Dict[str, int] = {
    "丰巢": 18,
    "蜜罐": 72,
    "和驿智能柜": 24,
}

# How similar (0-100) a locker name must be to a configured one before we
# suggest it as a "did you mean" hint
LOCKER_NAME_MATCH_THRESHOLD = 70

# =============================================================================
# PARSING CONFIGURATION
# =============================================================================

# Regex patterns used by the notification parser
NOTIFICATION_PATTERNS: Dict[str, str] = {
    # 3月15日 10:30 -> month, day, hour, minute (starts a new parcel)
    "timestamp": r'(\d{1,2})月(\d{1,2})日\s*(\d{1,2}):(\d{1,2})',

    # 【丰巢】 -> locker name
    "locker": r'【(.+?)】',

    # 取件码1234 -> pickup code
    "pickup_code": r'取件码(\d+)',

    # 18小时 -> free storage hours stated in the message itself
    "free_hours": r'(\d+)小时',
}

# Maximum reasonable values for validation
MAX_VALUES: Dict[str, int] = {
    "free_hours": 24 * 365,  # No locker stores parcels for free longer than a year
}


def is_reasonable_value(field_name: str, digits: str) -> bool:
    """
    Check if a number found in the text is within the expected range.

    Args:
        field_name: Name of the field being checked (key of MAX_VALUES)
        digits: The matched digits, before conversion to int

    Returns:
        True if the value seems reasonable
    """
    limit = MAX_VALUES[field_name]

    # Long digit strings are rejected before any int conversion
    if len(digits.lstrip("0")) > len(str(limit)):
        return False
    return int(digits) <= limit

# =============================================================================
# STATUS CONFIGURATION
# =============================================================================

# Parcels with less than this many free hours left are flagged as a warning
WARNING_THRESHOLD_HOURS = 2

# Labels shown next to each parcel, keyed by severity value
STATUS_LABELS: Dict[str, str] = {
    "normal": "✅ 正常",
    "warning": "⏰ 即将超时",
    "overdue": "⚠️ 已超时",
}

# =============================================================================
# EXPORT SETTINGS
# =============================================================================

# Column order for Excel/CSV reports
EXPORT_COLUMNS: List[str] = [
    "locker_name",
    "pickup_code",
    "stored_at",
    "elapsed_hours",
    "elapsed_display",
    "effective_free_hours",
    "remaining_hours",
    "remaining_display",
    "severity",
    "status_label",
    "id",
]
