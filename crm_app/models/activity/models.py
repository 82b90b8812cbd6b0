# crm_app/models/activity/models.py
"""
Activity models: shared interactions with one or more contacts
"""

from sqlalchemy import Enum, Index

from ..base import BaseModel, db
from .enums import ActivityType


class Activity(BaseModel):
    """Something the account owner did with one or more contacts"""

    __tablename__ = "activities"

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey("accounts.id"), nullable=False, index=True)
    type = db.Column(
        Enum(ActivityType, name="activity_type_enum"),
        default=ActivityType.IN_PERSON,
        nullable=False,
    )
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    occurred_at = db.Column(db.DateTime(timezone=True), nullable=False)

    participants = db.relationship("ActivityParticipant", back_populates="activity")

    __table_args__ = (Index("idx_activity_account_occurred", "account_id", "occurred_at"),)

    def __repr__(self):
        return f"<Activity {self.title}>"


class ActivityParticipant(BaseModel):
    """Contacts taking part in an activity"""

    __tablename__ = "activity_participants"

    id = db.Column(db.Integer, primary_key=True)
    activity_id = db.Column(db.Integer, db.ForeignKey("activities.id"), nullable=False)
    contact_id = db.Column(db.Integer, db.ForeignKey("contacts.id"), nullable=False)

    activity = db.relationship("Activity", back_populates="participants")
    contact = db.relationship("Contact")

    __table_args__ = (
        db.UniqueConstraint("activity_id", "contact_id", name="_activity_participant_uc"),
    )
