"""
Parcel Store - Saves locker settings and parcels to a JSON file.

The whole tracker state lives in one file:

    {
      "locker_settings": {"丰巢": 18, ...},
      "parcels": [{...}, ...]
    }

For Python beginners:
- JSON can't store datetime objects directly, so Pydantic converts
  them to ISO strings on save and back to datetimes on load
- ensure_ascii=False keeps Chinese text readable in the file
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Union

from pydantic import ValidationError

from locker_settings import default_locker_settings
from schemas.parcel_schema import ParcelRecord


class ParcelStore:
    """
    Keeps the settings map and parcel collection, and persists them.

    Nothing is written until save() is called.
    """

    def __init__(self, state_path: Union[str, Path]):
        self.state_path = Path(state_path)
        self._settings: Dict[str, int] = default_locker_settings()
        self._parcels: List[ParcelRecord] = []

    @property
    def settings(self) -> Dict[str, int]:
        return dict(self._settings)

    @property
    def parcels(self) -> List[ParcelRecord]:
        return list(self._parcels)

    def load(self) -> "ParcelStore":
        """
        Load state from disk.

        A missing file (first run) leaves the default settings and no parcels.

        Raises:
            ValueError: If the file exists but is not valid tracker JSON
        """

        if not self.state_path.exists():
            return self

        try:
            with open(self.state_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON format: {e}")

        if not isinstance(data, dict):
            raise ValueError("Tracker state must be a JSON object")

        saved_settings = data.get("locker_settings")
        if saved_settings is not None:
            self._settings = {str(name): int(hours) for name, hours in saved_settings.items()}
        else:
            self._settings = default_locker_settings()

        try:
            self._parcels = [ParcelRecord.model_validate(item) for item in data.get("parcels", [])]
        except ValidationError as e:
            raise ValueError(f"Error reading saved parcels: {e}")

        return self

    def save(self) -> str:
        """Write the current state to disk and return the file path."""

        self.state_path.parent.mkdir(parents=True, exist_ok=True)

        export_data = {
            "locker_settings": self._settings,
            "parcels": [record.model_dump(mode="json") for record in self._parcels],
        }

        with open(self.state_path, 'w', encoding='utf-8') as f:
            json.dump(export_data, f, indent=2, ensure_ascii=False)

        return str(self.state_path)

    def set_settings(self, settings: Dict[str, int]) -> None:
        self._settings = dict(settings)

    def add_parcels(self, records: Iterable[ParcelRecord]) -> None:
        self._parcels.extend(records)

    def remove_parcel(self, parcel_id: str) -> bool:
        """Remove a parcel by id. Returns False if no parcel has that id."""

        remaining = [record for record in self._parcels if record.id != parcel_id]
        removed = len(remaining) != len(self._parcels)
        self._parcels = remaining
        return removed

    def clear_parcels(self) -> None:
        self._parcels = []
