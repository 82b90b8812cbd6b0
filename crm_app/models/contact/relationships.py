# crm_app/models/contact/relationships.py
"""
Relationship models: tags and links between contacts
"""

from sqlalchemy import CheckConstraint, Index

from ..base import BaseModel, db


class Tag(BaseModel):
    """Account-scoped label that can be attached to contacts"""

    __tablename__ = "tags"

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey("accounts.id"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)

    contact_links = db.relationship("ContactTag", back_populates="tag")

    __table_args__ = (db.UniqueConstraint("account_id", "name", name="_account_tag_name_uc"),)

    def __repr__(self):
        return f"<Tag {self.name}>"


class ContactTag(BaseModel):
    """Tags attached to contacts"""

    __tablename__ = "contact_tags"

    id = db.Column(db.Integer, primary_key=True)
    contact_id = db.Column(db.Integer, db.ForeignKey("contacts.id"), nullable=False)
    tag_id = db.Column(db.Integer, db.ForeignKey("tags.id"), nullable=False)

    contact = db.relationship("Contact", back_populates="tags")
    tag = db.relationship("Tag", back_populates="contact_links")

    __table_args__ = (db.UniqueConstraint("contact_id", "tag_id", name="_contact_tag_uc"),)

    def __repr__(self):
        return f"<ContactTag contact={self.contact_id} tag={self.tag_id}>"


class ContactRelationship(BaseModel):
    """
    Typed link between two contacts of the same account.

    One row represents the pair; the inverse direction is implied by the type.
    """

    __tablename__ = "contact_relationships"

    id = db.Column(db.Integer, primary_key=True)
    contact_id = db.Column(db.Integer, db.ForeignKey("contacts.id"), nullable=False)
    related_contact_id = db.Column(db.Integer, db.ForeignKey("contacts.id"), nullable=False)
    relationship_type = db.Column(db.String(100), nullable=False)
    notes = db.Column(db.Text, nullable=True)

    contact = db.relationship("Contact", foreign_keys=[contact_id])
    related_contact = db.relationship("Contact", foreign_keys=[related_contact_id])

    __table_args__ = (
        db.UniqueConstraint(
            "contact_id",
            "related_contact_id",
            "relationship_type",
            name="_contact_relationship_uc",
        ),
        CheckConstraint("contact_id <> related_contact_id", name="ck_relationship_not_self"),
        Index("idx_relationship_related", "related_contact_id"),
    )

    def __repr__(self):
        return f"<ContactRelationship {self.contact_id} {self.relationship_type} {self.related_contact_id}>"
