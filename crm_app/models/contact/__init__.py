# crm_app/models/contact/__init__.py
"""
Contact models package
"""

from .base import Contact
from .enums import (
    BirthdayMode,
    ContactMethodType,
    ContactStatus,
    GiftDirection,
    GiftStatus,
    LifeEventType,
    ReminderFrequency,
    ReminderStatus,
)
from .info import ContactAddress, ContactMethod
from .journal import Gift, LifeEvent, Note, Reminder
from .relationships import ContactRelationship, ContactTag, Tag

__all__ = [
    "Contact",
    "ContactMethod",
    "ContactAddress",
    "Tag",
    "ContactTag",
    "ContactRelationship",
    "Note",
    "LifeEvent",
    "Gift",
    "Reminder",
    # Enums
    "BirthdayMode",
    "ContactStatus",
    "ContactMethodType",
    "LifeEventType",
    "GiftStatus",
    "GiftDirection",
    "ReminderFrequency",
    "ReminderStatus",
]
