# crm_app/models/contact/enums.py
"""
Enums for contact models.
"""

from enum import Enum as PyEnum


class ContactStatus(PyEnum):
    """Contact status enumeration"""

    ACTIVE = "active"
    ARCHIVED = "archived"
    DECEASED = "deceased"


class BirthdayMode(PyEnum):
    """Precision of a stored birthday"""

    FULL_DATE = "full_date"
    MONTH_DAY = "month_day"
    APPROXIMATE_AGE = "approximate_age"


class ContactMethodType(PyEnum):
    """Kind of a contact method (email, phone, social handle...)"""

    EMAIL = "email"
    PHONE = "phone"
    WHATSAPP = "whatsapp"
    TELEGRAM = "telegram"
    SIGNAL = "signal"
    TWITTER = "twitter"
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    WEBSITE = "website"
    OTHER = "other"


class LifeEventType(PyEnum):
    """Life event categories"""

    CAREER = "career"
    RELATIONSHIPS = "relationships"
    LIVING = "living"
    HEALTH = "health"
    ACHIEVEMENT = "achievement"
    OTHER = "other"


class GiftStatus(PyEnum):
    """Gift lifecycle"""

    IDEA = "idea"
    PLANNED = "planned"
    PURCHASED = "purchased"
    GIVEN = "given"
    RECEIVED = "received"


class GiftDirection(PyEnum):
    """Whether the gift is given to or received from the contact"""

    GIVING = "giving"
    RECEIVING = "receiving"


class ReminderFrequency(PyEnum):
    """Reminder recurrence"""

    ONE_TIME = "one_time"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ReminderStatus(PyEnum):
    """Reminder state"""

    ACTIVE = "active"
    SNOOZED = "snoozed"
    COMPLETED = "completed"
    DISMISSED = "dismissed"
