# crm_app/models/contact/base.py
"""
Contact model: a person in an account's personal CRM.
"""

from sqlalchemy import Enum, Index
from sqlalchemy.orm import validates

from ..base import BaseModel, db
from .enums import BirthdayMode, ContactStatus


class Contact(BaseModel):
    """
    A person tracked by an account.

    Birthdays are stored with one of three precisions (see ``BirthdayMode``):
    a full date, month and day only, or an approximate birth year.
    """

    __tablename__ = "contacts"

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(
        db.Integer, db.ForeignKey("accounts.id"), nullable=False, index=True
    )

    # Name fields
    first_name = db.Column(db.String(100), nullable=False, default="")
    last_name = db.Column(db.String(100), nullable=True, index=True)
    nickname = db.Column(db.String(100), nullable=True)
    gender = db.Column(db.String(50), nullable=True)

    # Birthday
    birthday_mode = db.Column(Enum(BirthdayMode, name="birthday_mode_enum"), nullable=True)
    birthday_date = db.Column(db.Date, nullable=True)
    birthday_month = db.Column(db.Integer, nullable=True)
    birthday_day = db.Column(db.Integer, nullable=True)
    birthday_year_approximate = db.Column(db.Integer, nullable=True)

    status = db.Column(
        Enum(ContactStatus, name="contact_status_enum"),
        default=ContactStatus.ACTIVE,
        nullable=False,
        index=True,
    )
    is_favorite = db.Column(db.Boolean, default=False, nullable=False)
    met_description = db.Column(db.Text, nullable=True)  # How we met
    job_title = db.Column(db.String(200), nullable=True)
    company = db.Column(db.String(200), nullable=True)
    description = db.Column(db.Text, nullable=True)
    food_preferences = db.Column(db.Text, nullable=True)

    # Relationships
    account = db.relationship("Account", back_populates="contacts")
    contact_methods = db.relationship("ContactMethod", back_populates="contact")
    addresses = db.relationship("ContactAddress", back_populates="contact")
    tags = db.relationship("ContactTag", back_populates="contact")
    notes = db.relationship("Note", back_populates="contact")

    __table_args__ = (Index("idx_contact_account_name", "account_id", "last_name", "first_name"),)

    def __repr__(self):
        return f"<Contact {self.get_full_name()}>"

    @validates("birthday_month")
    def validate_birthday_month(self, key, value):
        """Month must be a calendar month"""
        if value is not None and not 1 <= value <= 12:
            raise ValueError(f"Invalid birthday month: {value}")
        return value

    @validates("birthday_day")
    def validate_birthday_day(self, key, value):
        """Day must be a calendar day"""
        if value is not None and not 1 <= value <= 31:
            raise ValueError(f"Invalid birthday day: {value}")
        return value

    def get_full_name(self):
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else "Unknown"
