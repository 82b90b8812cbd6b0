# crm_app/models/contact/info.py
"""
Contact information models: contact methods and addresses
"""

from sqlalchemy import Enum, Index
from sqlalchemy.orm import validates

from ..base import BaseModel, db
from .enums import ContactMethodType


class ContactMethod(BaseModel):
    """Ways to reach a contact (email, phone, social handles)"""

    __tablename__ = "contact_methods"

    id = db.Column(db.Integer, primary_key=True)
    contact_id = db.Column(db.Integer, db.ForeignKey("contacts.id"), nullable=False)
    type = db.Column(Enum(ContactMethodType, name="contact_method_type_enum"), nullable=False)
    value = db.Column(db.String(500), nullable=False)
    label = db.Column(db.String(100), nullable=True)  # Original field type name
    is_primary = db.Column(db.Boolean, default=False, nullable=False)

    contact = db.relationship("Contact", back_populates="contact_methods")

    __table_args__ = (Index("idx_contact_method_contact", "contact_id"),)

    def __repr__(self):
        return f"<ContactMethod {self.type.value}: {self.value}>"

    @validates("value")
    def validate_value(self, key, value):
        if value is None or not str(value).strip():
            raise ValueError("Contact method value cannot be empty")
        return str(value).strip()


class ContactAddress(BaseModel):
    """Addresses for contacts"""

    __tablename__ = "contact_addresses"

    id = db.Column(db.Integer, primary_key=True)
    contact_id = db.Column(db.Integer, db.ForeignKey("contacts.id"), nullable=False)
    label = db.Column(db.String(100), nullable=True)
    street = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(100), nullable=True)
    state_province = db.Column(db.String(100), nullable=True)
    postal_code = db.Column(db.String(20), nullable=True)
    country = db.Column(db.String(100), nullable=True)
    is_primary = db.Column(db.Boolean, default=False, nullable=False)

    contact = db.relationship("Contact", back_populates="addresses")

    def __repr__(self):
        return f"<ContactAddress {self.city}, {self.country}>"

    def get_full_address(self):
        """Format a single-line address"""
        parts = [self.street, self.city, self.state_province, self.postal_code, self.country]
        return ", ".join(part for part in parts if part)
