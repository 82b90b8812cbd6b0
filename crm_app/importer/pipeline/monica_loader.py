"""
Monica CRM export loader: full replace of one account's data.

The loader wipes every row the account owns, then inserts each translated
Monica entity in dependency order inside a single transaction. Each row insert
runs in its own SAVEPOINT so constraint violations are recorded and skipped,
while anything else rolls the whole import back.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, TypeVar

from flask import current_app
from sqlalchemy import delete, or_, select
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from crm_app.importer.contracts.monica import MonicaExport, parse_monica_export
from crm_app.importer.mapping import MonicaMapping, get_active_monica_mapping
from crm_app.importer.metrics import record_monica_rows
from crm_app.importer.pipeline.monica_translate import (
    MonicaLookups,
    Skip,
    translate_activity,
    translate_address,
    translate_call,
    translate_contact,
    translate_contact_field,
    translate_gift,
    translate_life_event,
    translate_note,
    translate_relationship_type,
    translate_reminder,
)
from crm_app.importer.pipeline.remap import IdentifierRemapper, RelationshipDeduplicator
from crm_app.models import (
    Account,
    Activity,
    ActivityParticipant,
    Contact,
    ContactAddress,
    ContactMethod,
    ContactRelationship,
    ContactTag,
    Gift,
    GiftDirection,
    LifeEvent,
    Note,
    Reminder,
    ReminderStatus,
    Tag,
    db,
)

ModelT = TypeVar("ModelT")

CONTACT = "contact"
TAG = "tag"

# Failures a single row may raise without poisoning the transaction.
ROW_ERRORS = (IntegrityError, DataError, ValueError)

COUNT_FIELDS = (
    "contacts",
    "tags",
    "contact_methods",
    "notes",
    "activities",
    "relationships",
    "addresses",
    "life_events",
    "gifts",
    "reminders",
    "calls",
)


class MonicaImportError(RuntimeError):
    """Raised for caller mistakes detected before the import transaction begins."""


class AccountNotFoundError(MonicaImportError):
    """Raised when the target account does not exist."""


@dataclass
class MonicaImportSummary:
    """Per-entity counts plus the non-fatal diagnostics collected during a run."""

    contacts: int = 0
    tags: int = 0
    contact_methods: int = 0
    notes: int = 0
    activities: int = 0
    relationships: int = 0
    addresses: int = 0
    life_events: int = 0
    gifts: int = 0
    reminders: int = 0
    calls: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    skipped: dict[str, int] = field(default_factory=dict)

    def counts(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in COUNT_FIELDS}

    @property
    def total_imported(self) -> int:
        return sum(self.counts().values())

    def record_error(self, entity: str, source_id: object, exc: Exception) -> None:
        message = getattr(exc, "orig", None) or exc
        self.errors.append(f"{entity} {source_id}: {message}")

    def record_skip(self, bucket: str, message: str | None = None) -> None:
        self.skipped[bucket] = self.skipped.get(bucket, 0) + 1
        if message:
            self.warnings.append(message)

    def as_dict(self) -> dict:
        return {
            **self.counts(),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "skipped": dict(self.skipped),
        }


class MonicaImportLoader:
    """Replace an account's data with the contents of a parsed Monica export."""

    def __init__(
        self,
        account_id: int,
        export: MonicaExport,
        *,
        mapping: MonicaMapping,
        session: Session | None = None,
        report_skips: bool = True,
    ):
        self.account_id = account_id
        self.export = export
        self.mapping = mapping
        self.session = session or db.session
        self.report_skips = report_skips
        self.lookups = MonicaLookups.from_export(export)
        self.remapper = IdentifierRemapper()
        self.relationships_seen = RelationshipDeduplicator()
        self.summary = MonicaImportSummary(warnings=list(export.warnings))
        self.now = datetime.now(timezone.utc)

    def execute(self) -> MonicaImportSummary:
        with self._transaction():
            self._wipe_account()
            self._import_contacts()
            self._import_tags()
            self._import_contact_tags()
            self._import_contact_methods()
            self._import_notes()
            self._import_calls()
            self._import_activities()
            self._import_relationships()
            self._import_addresses()
            self._import_life_events()
            self._import_gifts()
            self._import_reminders()

        current_app.logger.info(
            "Monica import finished for account %s",
            self.account_id,
            extra={
                "account_id": self.account_id,
                "counts": self.summary.counts(),
                "error_count": len(self.summary.errors),
                "skipped": dict(self.summary.skipped),
            },
        )
        return self.summary

    # Wipe ---------------------------------------------------------------

    def _wipe_account(self) -> None:
        """Delete every row owned by the account, children before parents."""
        contact_ids = select(Contact.id).where(Contact.account_id == self.account_id)
        activity_ids = select(Activity.id).where(Activity.account_id == self.account_id)

        statements = (
            delete(ActivityParticipant).where(
                or_(
                    ActivityParticipant.activity_id.in_(activity_ids),
                    ActivityParticipant.contact_id.in_(contact_ids),
                )
            ),
            delete(Activity).where(Activity.account_id == self.account_id),
            delete(ContactTag).where(ContactTag.contact_id.in_(contact_ids)),
            delete(ContactRelationship).where(
                or_(
                    ContactRelationship.contact_id.in_(contact_ids),
                    ContactRelationship.related_contact_id.in_(contact_ids),
                )
            ),
            delete(ContactMethod).where(ContactMethod.contact_id.in_(contact_ids)),
            delete(ContactAddress).where(ContactAddress.contact_id.in_(contact_ids)),
            delete(Note).where(Note.contact_id.in_(contact_ids)),
            delete(Reminder).where(Reminder.contact_id.in_(contact_ids)),
            delete(Gift).where(Gift.contact_id.in_(contact_ids)),
            delete(LifeEvent).where(LifeEvent.contact_id.in_(contact_ids)),
            delete(Tag).where(Tag.account_id == self.account_id),
            delete(Contact).where(Contact.account_id == self.account_id),
        )

        deleted = 0
        for statement in statements:
            result = self.session.execute(statement.execution_options(synchronize_session="fetch"))
            deleted += result.rowcount or 0
        current_app.logger.debug(
            "Wiped %s existing rows for account %s", deleted, self.account_id
        )

    # Row helpers --------------------------------------------------------

    def _insert(self, entity: str, source_id: object, build: Callable[[], ModelT]) -> ModelT | None:
        """
        Insert one destination row inside a SAVEPOINT.

        Returns the flushed instance, or ``None`` when the row failed and the
        error was recorded.
        """
        try:
            with self.session.begin_nested():
                instance = build()
                self.session.add(instance)
                self.session.flush()
        except ROW_ERRORS as exc:
            self.summary.record_error(entity, source_id, exc)
            current_app.logger.debug("Monica row rejected: %s %s (%s)", entity, source_id, exc)
            return None
        return instance

    def _skip(self, bucket: str, message: str) -> None:
        self.summary.record_skip(bucket, message if self.report_skips else None)

    def _resolve_contact(self, bucket: str, label: str, contact_source_id: int | None) -> int | None:
        destination_id = self.remapper.resolve(CONTACT, contact_source_id)
        if destination_id is None:
            kind = "partial" if self.remapper.is_excluded(CONTACT, contact_source_id) else "unknown"
            self._skip(bucket, f"{label} skipped: references {kind} contact {contact_source_id}")
        return destination_id

    # Steps --------------------------------------------------------------

    def _import_contacts(self) -> None:
        for record in self.export.contacts:
            payload = translate_contact(record, self.lookups, self.mapping, now=self.now)
            if isinstance(payload, Skip):
                self.remapper.exclude(CONTACT, record.id)
                self._skip("contacts", f"Contact {record.id} skipped: {payload.reason}")
                continue

            contact = self._insert(
                "Contact",
                record.id,
                lambda: Contact(account_id=self.account_id, **payload.model_kwargs()),
            )
            if contact is not None:
                self.remapper.record(CONTACT, record.id, contact.id)
                self.summary.contacts += 1

    def _import_tags(self) -> None:
        for record in self.export.tags:
            tag = self._insert("Tag", record.id, lambda: Tag(account_id=self.account_id, name=record.name))
            if tag is not None:
                self.remapper.record(TAG, record.id, tag.id)
                self.summary.tags += 1

    def _import_contact_tags(self) -> None:
        for link in self.export.contact_tags:
            label = f"ContactTag {link.contact_id}-{link.tag_id}"
            contact_id = self._resolve_contact("contact_tags", label, link.contact_id)
            if contact_id is None:
                continue
            tag_id = self.remapper.resolve(TAG, link.tag_id)
            if tag_id is None:
                self._skip("contact_tags", f"{label} skipped: references unknown tag {link.tag_id}")
                continue
            self._insert(
                "ContactTag",
                f"{link.contact_id}-{link.tag_id}",
                lambda: ContactTag(contact_id=contact_id, tag_id=tag_id),
            )

    def _import_contact_methods(self) -> None:
        for record in self.export.contact_fields:
            contact_id = self._resolve_contact("contact_methods", f"ContactMethod {record.id}", record.contact_id)
            if contact_id is None:
                continue
            payload = translate_contact_field(record, self.lookups, self.mapping)
            if isinstance(payload, Skip):
                self._skip("contact_methods", f"ContactMethod {record.id} skipped: {payload.reason}")
                continue
            method = self._insert(
                "ContactMethod",
                record.id,
                lambda: ContactMethod(
                    contact_id=contact_id,
                    type=payload.type,
                    value=payload.value,
                    label=payload.label,
                ),
            )
            if method is not None:
                self.summary.contact_methods += 1

    def _import_notes(self) -> None:
        for record in self.export.notes:
            contact_id = self._resolve_contact("notes", f"Note {record.id}", record.contact_id)
            if contact_id is None:
                continue
            payload = translate_note(record)
            note = self._insert(
                "Note",
                record.id,
                lambda: Note(contact_id=contact_id, body=payload.body, is_pinned=payload.is_pinned),
            )
            if note is not None:
                self.summary.notes += 1

    def _import_calls(self) -> None:
        for record in self.export.calls:
            contact_id = self._resolve_contact("calls", f"Call {record.id}", record.contact_id)
            if contact_id is None:
                continue
            payload = translate_call(record)
            note = self._insert("Call", record.id, lambda: Note(contact_id=contact_id, body=payload.body))
            if note is not None:
                self.summary.calls += 1

    def _import_activities(self) -> None:
        for record in self.export.activities:
            participant_ids: list[int] = []
            for source_id in self.lookups.activity_participants.get(record.id, ()):
                destination_id = self.remapper.resolve(CONTACT, source_id)
                if destination_id is not None and destination_id not in participant_ids:
                    participant_ids.append(destination_id)
            if not participant_ids:
                self._skip("activities", f"Activity {record.id} skipped: no imported participants")
                continue

            payload = translate_activity(record, now=self.now)
            activity = self._insert(
                "Activity",
                record.id,
                lambda: Activity(
                    account_id=self.account_id,
                    type=payload.type,
                    title=payload.title,
                    description=payload.description,
                    occurred_at=payload.occurred_at,
                    created_at=payload.created_at,
                    updated_at=payload.created_at,
                    participants=[ActivityParticipant(contact_id=pid) for pid in participant_ids],
                ),
            )
            if activity is not None:
                self.summary.activities += 1

    def _import_relationships(self) -> None:
        for record in self.export.relationships:
            label = f"Relationship {record.id}"
            contact_id = self._resolve_contact("relationships", label, record.contact_is)
            if contact_id is None:
                continue
            related_id = self._resolve_contact("relationships", label, record.of_contact)
            if related_id is None:
                continue
            relationship_type = self.lookups.relationship_types.get(record.relationship_type_id)
            if relationship_type is None:
                self._skip(
                    "relationships",
                    f"{label} skipped: unknown relationship type {record.relationship_type_id}",
                )
                continue

            names = translate_relationship_type(relationship_type, self.mapping)
            if not self.relationships_seen.admit(contact_id, related_id, names.forward, names.reverse):
                self.summary.record_skip("relationships")
                continue

            relationship = self._insert(
                "Relationship",
                record.id,
                lambda: ContactRelationship(
                    contact_id=contact_id,
                    related_contact_id=related_id,
                    relationship_type=names.forward,
                ),
            )
            if relationship is not None:
                self.summary.relationships += 1

    def _import_addresses(self) -> None:
        for record in self.export.addresses:
            contact_id = self._resolve_contact("addresses", f"Address {record.id}", record.contact_id)
            if contact_id is None:
                continue
            payload = translate_address(record, self.lookups)
            if isinstance(payload, Skip):
                self._skip("addresses", f"Address {record.id} skipped: {payload.reason}")
                continue
            address = self._insert(
                "Address",
                record.id,
                lambda: ContactAddress(
                    contact_id=contact_id,
                    label=payload.label,
                    street=payload.street,
                    city=payload.city,
                    state_province=payload.state_province,
                    postal_code=payload.postal_code,
                    country=payload.country,
                ),
            )
            if address is not None:
                self.summary.addresses += 1

    def _import_life_events(self) -> None:
        for record in self.export.life_events:
            contact_id = self._resolve_contact("life_events", f"LifeEvent {record.id}", record.contact_id)
            if contact_id is None:
                continue
            payload = translate_life_event(record, self.lookups, self.mapping)
            event = self._insert(
                "LifeEvent",
                record.id,
                lambda: LifeEvent(
                    contact_id=contact_id,
                    event_type=payload.event_type,
                    title=payload.title,
                    description=payload.description,
                    occurred_at=payload.occurred_at,
                ),
            )
            if event is not None:
                self.summary.life_events += 1

    def _import_gifts(self) -> None:
        for record in self.export.gifts:
            contact_id = self._resolve_contact("gifts", f"Gift {record.id}", record.contact_id)
            if contact_id is None:
                continue
            payload = translate_gift(record, self.mapping)
            gift = self._insert(
                "Gift",
                record.id,
                lambda: Gift(
                    contact_id=contact_id,
                    name=payload.name,
                    description=payload.description,
                    url=payload.url,
                    estimated_cost=payload.estimated_cost,
                    status=payload.status,
                    direction=GiftDirection.GIVING,
                    date=payload.date,
                ),
            )
            if gift is not None:
                self.summary.gifts += 1

    def _import_reminders(self) -> None:
        for record in self.export.reminders:
            contact_id = self._resolve_contact("reminders", f"Reminder {record.id}", record.contact_id)
            if contact_id is None:
                continue
            payload = translate_reminder(record, self.mapping)
            reminder = self._insert(
                "Reminder",
                record.id,
                lambda: Reminder(
                    contact_id=contact_id,
                    title=payload.title,
                    description=payload.description,
                    reminder_date=payload.reminder_date,
                    frequency=payload.frequency,
                    status=ReminderStatus.ACTIVE,
                ),
            )
            if reminder is not None:
                self.summary.reminders += 1

    @contextmanager
    def _transaction(self):
        """Commit on success; roll everything back on any escaping exception."""
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise


def import_monica_export(
    account_id: int,
    sql_text: str,
    *,
    session: Session | None = None,
    mapping: MonicaMapping | None = None,
    report_skips: bool | None = None,
) -> MonicaImportSummary:
    """
    Parse a Monica SQL export and replace ``account_id``'s data with it.

    Row-level failures are returned in the summary. Transaction-fatal failures
    roll back every change and propagate.
    """
    session = session or db.session
    if session.get(Account, account_id) is None:
        raise AccountNotFoundError(f"Account {account_id} does not exist.")
    if report_skips is None:
        report_skips = bool(current_app.config.get("IMPORTER_MONICA_REPORT_SKIPS", True))

    export = parse_monica_export(sql_text)
    loader = MonicaImportLoader(
        account_id,
        export,
        mapping=mapping or get_active_monica_mapping(),
        session=session,
        report_skips=report_skips,
    )
    summary = loader.execute()
    record_monica_rows(summary.counts(), errors=len(summary.errors), skipped=summary.skipped)
    return summary
