"""
Calculators package for parcel time status.

This package turns parcel records plus locker settings into
elapsed/remaining times and a severity tier (normal, warning, overdue).
"""

from .expiry_calculator import evaluate, format_duration, format_timestamp, group_by_locker

__all__ = ["evaluate", "format_duration", "format_timestamp", "group_by_locker"]
