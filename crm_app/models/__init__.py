# crm_app/models/__init__.py
"""
Database models package
"""

from .account import Account
from .activity import Activity, ActivityParticipant, ActivityType
from .base import BaseModel, db
from .contact import (
    BirthdayMode,
    Contact,
    ContactAddress,
    ContactMethod,
    ContactMethodType,
    ContactRelationship,
    ContactStatus,
    ContactTag,
    Gift,
    GiftDirection,
    GiftStatus,
    LifeEvent,
    LifeEventType,
    Note,
    Reminder,
    ReminderFrequency,
    ReminderStatus,
    Tag,
)
from .importer import ImportRun, ImportRunStatus

__all__ = [
    "db",
    "BaseModel",
    "Account",
    # Contact models
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
    # Activity models
    "Activity",
    "ActivityParticipant",
    # Importer models
    "ImportRun",
    "ImportRunStatus",
    # Enums
    "ActivityType",
    "BirthdayMode",
    "ContactStatus",
    "ContactMethodType",
    "LifeEventType",
    "GiftStatus",
    "GiftDirection",
    "ReminderFrequency",
    "ReminderStatus",
]
