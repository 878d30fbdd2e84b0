"""
Locker Settings - Helpers for the locker name -> free hours map.

For Python beginners:
- The settings are a plain dict like {"丰巢": 18}
- Every helper returns a NEW dict instead of changing the one passed in
- Fuzzy matching finds the closest configured name when a parcel's
  locker is not configured (e.g. "丰巢柜" vs "丰巢")
"""

from typing import Dict, List, Optional, Tuple

from fuzzywuzzy import fuzz, process
from pydantic import ValidationError

from config import DEFAULT_LOCKER_SETTINGS, LOCKER_NAME_MATCH_THRESHOLD
from schemas.parcel_schema import LockerSetting

INVALID_SETTING_MESSAGE = "请输入有效的快递柜名称和免费时长"


def default_locker_settings() -> Dict[str, int]:
    """Return a fresh copy of the default locker settings."""
    return dict(DEFAULT_LOCKER_SETTINGS)


def add_locker_setting(settings: Dict[str, int], name: str, hours) -> Dict[str, int]:
    """
    Add or overwrite a locker setting.

    Args:
        settings: Current settings map
        name: Locker name (surrounding whitespace is removed)
        hours: Free storage hours, must be a whole number of at least 1

    Returns:
        A new settings map containing the entry

    Raises:
        ValueError: If the name is empty or the hours are not valid
    """

    try:
        setting = LockerSetting(name=name, free_hours=hours)
    except ValidationError as e:
        raise ValueError(f"{INVALID_SETTING_MESSAGE}: {e.errors()[0]['msg']}") from e

    updated = dict(settings)
    updated[setting.name] = setting.free_hours
    return updated


def remove_locker_setting(settings: Dict[str, int], name: str) -> Dict[str, int]:
    """Return a new settings map without `name`. Raises KeyError if it is not configured."""

    if name not in settings:
        raise KeyError(name)

    return {key: value for key, value in settings.items() if key != name}


def sorted_locker_settings(settings: Dict[str, int]) -> List[Tuple[str, int]]:
    """Settings as (name, hours) pairs sorted by name."""
    return sorted(settings.items(), key=lambda item: item[0])


def suggest_locker_name(name: str, settings: Dict[str, int]) -> Optional[str]:
    """
    Find the configured locker name closest to `name`.

    Returns None when the name is empty, already configured, or nothing is
    similar enough (see LOCKER_NAME_MATCH_THRESHOLD).
    """

    if not name or not settings or name in settings:
        return None

    best_match = process.extractOne(
        name,
        list(settings),
        scorer=fuzz.ratio,
        score_cutoff=LOCKER_NAME_MATCH_THRESHOLD,
    )
    if best_match:
        return best_match[0]
    return None
