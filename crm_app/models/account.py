# crm_app/models/account.py
"""
Account model. Every contact, tag and activity belongs to exactly one account.
"""

import re

from sqlalchemy.orm import validates

from .base import BaseModel, db

SLUG_PATTERN = re.compile(r"^[a-z0-9\-]+$")


class Account(BaseModel):
    """Tenant owning a personal CRM dataset"""

    __tablename__ = "accounts"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(100), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    contacts = db.relationship("Contact", back_populates="account", lazy="dynamic")

    def __repr__(self):
        return f"<Account {self.slug}>"

    @validates("slug")
    def validate_slug(self, key, value):
        """Slugs are lower-case identifiers used on the command line"""
        if not value or not value.strip():
            raise ValueError("Account slug cannot be empty")
        value = value.strip().lower()
        if not SLUG_PATTERN.match(value):
            raise ValueError("Account slug can only contain lowercase letters, numbers, and hyphens")
        return value

    @staticmethod
    def slugify(name):
        """Generate a command-line friendly slug from a name"""
        slug = name.lower()
        slug = re.sub(r"[_\s]+", "-", slug)
        slug = re.sub(r"[^a-z0-9\-]", "", slug)
        slug = re.sub(r"-+", "-", slug)
        return slug.strip("-")

    @staticmethod
    def resolve(identifier):
        """Find an account by numeric id or slug"""
        text = str(identifier).strip()
        if text.isdigit():
            account = db.session.get(Account, int(text))
            if account is not None:
                return account
        return Account.query.filter_by(slug=text.lower()).first()
