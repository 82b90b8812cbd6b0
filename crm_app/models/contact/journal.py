# crm_app/models/contact/journal.py
"""
Per-contact journal models: notes, life events, gifts and reminders
"""

from sqlalchemy import Enum, Index

from ..base import BaseModel, db
from .enums import GiftDirection, GiftStatus, LifeEventType, ReminderFrequency, ReminderStatus


class Note(BaseModel):
    """Free-text note about a contact"""

    __tablename__ = "notes"

    id = db.Column(db.Integer, primary_key=True)
    contact_id = db.Column(db.Integer, db.ForeignKey("contacts.id"), nullable=False, index=True)
    body = db.Column(db.Text, nullable=False)
    is_pinned = db.Column(db.Boolean, default=False, nullable=False)

    contact = db.relationship("Contact", back_populates="notes")

    def __repr__(self):
        return f"<Note {self.id} contact={self.contact_id}>"


class LifeEvent(BaseModel):
    """Milestone in a contact's life (new job, marriage, move...)"""

    __tablename__ = "life_events"

    id = db.Column(db.Integer, primary_key=True)
    contact_id = db.Column(db.Integer, db.ForeignKey("contacts.id"), nullable=False, index=True)
    event_type = db.Column(
        Enum(LifeEventType, name="life_event_type_enum"),
        default=LifeEventType.OTHER,
        nullable=False,
    )
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    occurred_at = db.Column(db.Date, nullable=True)

    def __repr__(self):
        return f"<LifeEvent {self.title}>"


class Gift(BaseModel):
    """Gift idea, or a gift given to or received from a contact"""

    __tablename__ = "gifts"

    id = db.Column(db.Integer, primary_key=True)
    contact_id = db.Column(db.Integer, db.ForeignKey("contacts.id"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    url = db.Column(db.String(1000), nullable=True)
    estimated_cost = db.Column(db.Float, nullable=True)
    status = db.Column(Enum(GiftStatus, name="gift_status_enum"), default=GiftStatus.IDEA, nullable=False)
    direction = db.Column(
        Enum(GiftDirection, name="gift_direction_enum"),
        default=GiftDirection.GIVING,
        nullable=False,
    )
    date = db.Column(db.Date, nullable=True)

    def __repr__(self):
        return f"<Gift {self.name} ({self.status.value})>"


class Reminder(BaseModel):
    """Dated reminder about a contact, optionally recurring"""

    __tablename__ = "reminders"

    id = db.Column(db.Integer, primary_key=True)
    contact_id = db.Column(db.Integer, db.ForeignKey("contacts.id"), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    reminder_date = db.Column(db.Date, nullable=False)
    frequency = db.Column(
        Enum(ReminderFrequency, name="reminder_frequency_enum"),
        default=ReminderFrequency.ONE_TIME,
        nullable=False,
    )
    status = db.Column(
        Enum(ReminderStatus, name="reminder_status_enum"),
        default=ReminderStatus.ACTIVE,
        nullable=False,
    )
    is_auto_generated = db.Column(db.Boolean, default=False, nullable=False)

    __table_args__ = (Index("idx_reminder_contact_date", "contact_id", "reminder_date"),)

    def __repr__(self):
        return f"<Reminder {self.title} on {self.reminder_date}>"
