"""
Parsers package for notification text processing.

This package contains classes that take raw notification text and convert
it into structured parcel records using our defined schemas.

As a Python beginner, think of parsers as "translators" that:
- Take messy pasted text as input
- Use patterns and rules to find specific information
- Return structured data that matches our schemas
"""

from .notification_parser import NotificationParser, parse_notifications

# This allows easy importing like: from parsers import NotificationParser
__all__ = ["NotificationParser", "parse_notifications"]
