# scripts/create_account.py

"""
Script to create accounts from the command line.
Imports need an existing account to load into.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.exc import IntegrityError  # noqa: E402

from app import app  # noqa: E402
from crm_app.models import Account, db  # noqa: E402


def create_account():
    with app.app_context():
        name = input("Enter account name: ").strip()

        if not name:
            print("Error: Account name cannot be empty.")
            sys.exit(1)

        suggested_slug = Account.slugify(name)
        print(f"Suggested slug: {suggested_slug}")

        slug_input = input(f'Enter slug (or press Enter to use "{suggested_slug}"): ').strip()
        slug = slug_input or suggested_slug

        if Account.resolve(slug) is not None:
            print(f'Error: An account with slug "{slug}" already exists.')
            sys.exit(1)

        try:
            account = Account(name=name, slug=slug, is_active=True)
            db.session.add(account)
            db.session.commit()
        except (ValueError, IntegrityError) as exc:
            db.session.rollback()
            print(f"Error creating account: {exc}")
            sys.exit(1)

        print("Account created successfully!")
        print(f"   Id:   {account.id}")
        print(f"   Name: {account.name}")
        print(f"   Slug: {account.slug}")
        print(f"\nImport a Monica export with: flask importer monica --account {account.slug} --file <export.sql>")


if __name__ == "__main__":
    create_account()
