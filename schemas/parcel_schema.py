"""
Parcel Schema - Defines the structure for parcel and locker data.

This file uses Pydantic to create "data models" - templates that define
exactly what information we keep about each parcel sitting in a locker.

For Python beginners:
- Pydantic automatically validates data types (str, int, datetime, etc.)
- frozen=True makes a model read-only once it has been created
- Optional fields may be missing from the notification text
- Custom validators clean/format data automatically
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import STATUS_LABELS


class Severity(str, Enum):
    """How urgent a parcel is. The values double as display class names."""

    NORMAL = "normal"
    WARNING = "warning"
    OVERDUE = "overdue"


class LockerSetting(BaseModel):
    """
    A single locker brand and how many hours it stores parcels for free.

    Used to validate user input before it goes into the settings map.
    """

    name: str = Field(..., description="Locker brand name, e.g. 丰巢")
    free_hours: int = Field(..., ge=1, description="Free storage hours (at least 1)")

    @field_validator('name')
    @classmethod
    def clean_name(cls, v):
        """Strip surrounding whitespace and reject empty names"""
        v = v.strip()
        if not v:
            raise ValueError('Locker name must not be empty')
        return v


class ParcelRecord(BaseModel):
    """
    Represents a single parcel recovered from notification text.

    This is like a "row" in a spreadsheet - one parcel in one locker.
    Records are read-only once the parser has finished building them.
    """

    model_config = ConfigDict(frozen=True)

    # Always present - a record only exists once a timestamp was found
    id: str = Field(..., description="Unique identifier assigned at parse time")
    arrival_timestamp: datetime = Field(..., description="When the parcel was stored (local time)")

    # Filled in when the matching pattern is found in the block
    locker_name: str = Field("", description="Locker brand from 【...】")
    pickup_code: str = Field("", description="Digits following 取件码")
    free_hours_override: Optional[int] = Field(None, description="Free hours stated in the message itself")

    # Debug/audit only
    raw_text: str = Field("", description="All lines that belong to this parcel")


class TimeStatus(BaseModel):
    """
    Time-based status of a parcel at a given instant.

    Never stored - the calculator rebuilds it every time it is needed.
    """

    model_config = ConfigDict(frozen=True)

    stored_at: datetime
    elapsed_hours: float = Field(..., description="Hours since arrival (negative if arrival is in the future)")
    effective_free_hours: int = Field(..., description="Override, else locker setting, else 0")
    remaining_hours: float = Field(..., description="Free hours left (negative means overdue)")
    is_overdue: bool
    severity: Severity

    @property
    def remaining_label(self) -> str:
        return "已超时" if self.is_overdue else "剩余时间"

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.severity.value]
