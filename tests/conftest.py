from datetime import datetime

import pytest

from schemas import ParcelRecord


@pytest.fixture
def arrival():
    return datetime(2024, 3, 15, 10, 30)


@pytest.fixture
def make_record(arrival):
    """Build a ParcelRecord with sensible defaults for the fields a test doesn't care about."""

    def _make(**overrides):
        fields = {
            "id": "parcel-1",
            "arrival_timestamp": arrival,
            "locker_name": "丰巢",
            "pickup_code": "1234",
        }
        fields.update(overrides)
        return ParcelRecord(**fields)

    return _make


@pytest.fixture
def settings():
    return {"丰巢": 18, "蜜罐": 72, "和驿智能柜": 24}
