"""
Schemas package for parcel data validation.

This package contains Pydantic models that define the structure
and validation rules for parcels recovered from notification text.

As a Python beginner, think of schemas as "templates" that define:
- What fields (data pieces) we expect to extract
- What type each field should be (text, number, datetime, etc.)
- Which fields are required vs optional
- Validation rules (like "free hours must be at least 1")
"""

from .parcel_schema import LockerSetting, ParcelRecord, Severity, TimeStatus

# This makes it easy to import from other files like:
# from schemas import ParcelRecord
__all__ = ["LockerSetting", "ParcelRecord", "Severity", "TimeStatus"]
