"""
Pure translation functions from Monica source records to destination payloads.

Translators never touch the database. Lookup tables (``MonicaMapping``) and the
per-export indexes (``MonicaLookups``) are passed in explicitly. Each row-level
translator returns either a payload dataclass or a :class:`Skip` describing why
the row produces no destination record.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timezone
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from crm_app.importer.contracts.monica import (
    MonicaActivity,
    MonicaAddress,
    MonicaCall,
    MonicaContact,
    MonicaContactField,
    MonicaContactFieldType,
    MonicaExport,
    MonicaGender,
    MonicaGift,
    MonicaLifeEvent,
    MonicaLifeEventCategory,
    MonicaLifeEventType,
    MonicaNote,
    MonicaPlace,
    MonicaRelationshipType,
    MonicaReminder,
    MonicaSpecialDate,
)
from crm_app.importer.mapping import MonicaMapping
from crm_app.models.activity.enums import ActivityType
from crm_app.models.contact.enums import (
    BirthdayMode,
    ContactMethodType,
    ContactStatus,
    GiftStatus,
    LifeEventType,
    ReminderFrequency,
)

HOW_WE_MET_SEPARATOR = " — "
CALL_NOTE_PREFIX = "Phone Call — "


@dataclass(frozen=True)
class Skip:
    """A row that intentionally produces no destination record."""

    reason: str


@dataclass(frozen=True)
class BirthdayPayload:
    mode: BirthdayMode
    date: date | None = None
    month: int | None = None
    day: int | None = None
    year_approximate: int | None = None


@dataclass(frozen=True)
class ContactPayload:
    source_id: int
    first_name: str
    last_name: str | None
    nickname: str | None
    gender: str | None
    birthday: BirthdayPayload | None
    status: ContactStatus
    is_favorite: bool
    met_description: str | None
    job_title: str | None
    company: str | None
    description: str | None
    food_preferences: str | None
    created_at: datetime
    updated_at: datetime

    def model_kwargs(self) -> dict:
        birthday = self.birthday
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "nickname": self.nickname,
            "gender": self.gender,
            "birthday_mode": birthday.mode if birthday else None,
            "birthday_date": birthday.date if birthday else None,
            "birthday_month": birthday.month if birthday else None,
            "birthday_day": birthday.day if birthday else None,
            "birthday_year_approximate": birthday.year_approximate if birthday else None,
            "status": self.status,
            "is_favorite": self.is_favorite,
            "met_description": self.met_description,
            "job_title": self.job_title,
            "company": self.company,
            "description": self.description,
            "food_preferences": self.food_preferences,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class ContactMethodPayload:
    type: ContactMethodType
    value: str
    label: str


@dataclass(frozen=True)
class NotePayload:
    body: str
    is_pinned: bool = False


@dataclass(frozen=True)
class ActivityPayload:
    type: ActivityType
    title: str
    description: str | None
    occurred_at: datetime
    created_at: datetime


@dataclass(frozen=True)
class RelationshipTypePayload:
    """Destination names for a relationship type and its inverse."""

    forward: str
    reverse: str


@dataclass(frozen=True)
class AddressPayload:
    label: str | None
    street: str | None
    city: str | None
    state_province: str | None
    postal_code: str | None
    country: str | None


@dataclass(frozen=True)
class LifeEventPayload:
    event_type: LifeEventType
    title: str
    description: str | None
    occurred_at: date | None


@dataclass(frozen=True)
class GiftPayload:
    name: str
    description: str | None
    url: str | None
    estimated_cost: float | None
    status: GiftStatus
    date: date | None


@dataclass(frozen=True)
class ReminderPayload:
    title: str
    description: str | None
    reminder_date: date | None
    frequency: ReminderFrequency


TranslationResult = Union[
    ContactPayload,
    ContactMethodPayload,
    NotePayload,
    ActivityPayload,
    AddressPayload,
    LifeEventPayload,
    GiftPayload,
    ReminderPayload,
    Skip,
]


def _index_by_id(records) -> Mapping[int, object]:
    return MappingProxyType({record.id: record for record in records})


@dataclass(frozen=True)
class MonicaLookups:
    """Read-only indexes over the lookup tables of one export."""

    genders: Mapping[int, MonicaGender]
    special_dates: Mapping[int, MonicaSpecialDate]
    contact_field_types: Mapping[int, MonicaContactFieldType]
    relationship_types: Mapping[int, MonicaRelationshipType]
    places: Mapping[int, MonicaPlace]
    life_event_types: Mapping[int, MonicaLifeEventType]
    life_event_categories: Mapping[int, MonicaLifeEventCategory]
    activity_participants: Mapping[int, Tuple[int, ...]]

    @classmethod
    def from_export(cls, export: MonicaExport) -> "MonicaLookups":
        participants: dict[int, list[int]] = defaultdict(list)
        for link in export.activity_contacts:
            if link.activity_id is None or link.contact_id is None:
                continue
            participants[link.activity_id].append(link.contact_id)

        return cls(
            genders=_index_by_id(export.genders),
            special_dates=_index_by_id(export.special_dates),
            contact_field_types=_index_by_id(export.contact_field_types),
            relationship_types=_index_by_id(export.relationship_types),
            places=_index_by_id(export.places),
            life_event_types=_index_by_id(export.life_event_types),
            life_event_categories=_index_by_id(export.life_event_categories),
            activity_participants=MappingProxyType(
                {activity_id: tuple(ids) for activity_id, ids in participants.items()}
            ),
        )


# Contact-level helpers -------------------------------------------------------


def resolve_gender(
    gender_id: int | None,
    genders: Mapping[int, MonicaGender],
    mapping: MonicaMapping,
) -> str | None:
    """Translate a Monica gender id into a destination gender label."""
    if not gender_id:
        return None
    gender = genders.get(gender_id)
    if gender is None or not gender.name:
        return None
    name = gender.name.strip().lower()
    return mapping.genders.get(name, name)


def resolve_birthday(special_date: MonicaSpecialDate | None) -> BirthdayPayload | None:
    """
    Convert a Monica special date into a birthday with the right precision.

    Age-based dates keep only the (synthetic) year, year-unknown dates keep
    month and day, anything else is a full calendar date.
    """
    if special_date is None or special_date.date is None:
        return None
    value = special_date.date
    if special_date.is_age_based:
        return BirthdayPayload(mode=BirthdayMode.APPROXIMATE_AGE, year_approximate=value.year)
    if special_date.is_year_unknown:
        return BirthdayPayload(mode=BirthdayMode.MONTH_DAY, month=value.month, day=value.day)
    return BirthdayPayload(mode=BirthdayMode.FULL_DATE, date=value)


def derive_status(is_dead: bool, is_active: bool) -> ContactStatus:
    if is_dead:
        return ContactStatus.DECEASED
    if not is_active:
        return ContactStatus.ARCHIVED
    return ContactStatus.ACTIVE


def combine_how_we_met(where: str | None, additional_info: str | None) -> str | None:
    parts = [part for part in (where, additional_info) if part]
    return HOW_WE_MET_SEPARATOR.join(parts) if parts else None


def translate_contact(
    contact: MonicaContact,
    lookups: MonicaLookups,
    mapping: MonicaMapping,
    *,
    now: datetime | None = None,
) -> ContactPayload | Skip:
    """Build the destination contact payload; partial contacts are skipped."""
    if contact.is_partial:
        return Skip("partial contact")

    now = now or datetime.now(timezone.utc)
    special_date = None
    if contact.birthday_special_date_id:
        special_date = lookups.special_dates.get(contact.birthday_special_date_id)

    return ContactPayload(
        source_id=contact.id,
        first_name=contact.first_name or "",
        last_name=contact.last_name,
        nickname=contact.nickname,
        gender=resolve_gender(contact.gender_id, lookups.genders, mapping),
        birthday=resolve_birthday(special_date),
        status=derive_status(contact.is_dead, contact.is_active),
        is_favorite=contact.is_starred,
        met_description=combine_how_we_met(contact.first_met_where, contact.first_met_additional_info),
        job_title=contact.job,
        company=contact.company,
        description=contact.description,
        food_preferences=contact.food_preferences,
        created_at=contact.created_at or now,
        updated_at=contact.updated_at or contact.created_at or now,
    )


# Child-row translators -------------------------------------------------------


def resolve_contact_method(
    field_type: MonicaContactFieldType,
    mapping: MonicaMapping,
) -> tuple[ContactMethodType, str]:
    """
    Resolve the destination kind for a Monica contact field type.

    The field type name is tried first, then its ``type`` hint column, then the
    generic ``other`` kind. The original name is always returned as the label.
    """
    kinds = mapping.contact_method_types
    resolved = kinds.get(field_type.name.strip().lower())
    if resolved is None and field_type.type:
        resolved = kinds.get(field_type.type.strip().lower())
    try:
        kind = ContactMethodType(resolved) if resolved else ContactMethodType.OTHER
    except ValueError:
        kind = ContactMethodType.OTHER
    return kind, field_type.name


def translate_contact_field(
    field: MonicaContactField,
    lookups: MonicaLookups,
    mapping: MonicaMapping,
) -> ContactMethodPayload | Skip:
    field_type = lookups.contact_field_types.get(field.contact_field_type_id)
    if field_type is None:
        return Skip(f"unknown contact field type {field.contact_field_type_id}")
    kind, label = resolve_contact_method(field_type, mapping)
    return ContactMethodPayload(type=kind, value=field.data, label=label)


def translate_note(note: MonicaNote) -> NotePayload:
    return NotePayload(body=note.body, is_pinned=note.is_favorited)


def translate_call(call: MonicaCall) -> NotePayload:
    """Render a Monica call log entry as a note body."""
    when = call.called_at.date().isoformat() if call.called_at else "unknown date"
    direction = "Called them" if call.contact_called else "They called"
    body = f"[{CALL_NOTE_PREFIX}{when}] {direction}\n\n{call.content or ''}"
    return NotePayload(body=body.strip())


def translate_activity(activity: MonicaActivity, *, now: datetime | None = None) -> ActivityPayload:
    now = now or datetime.now(timezone.utc)
    return ActivityPayload(
        type=ActivityType.IN_PERSON,
        title=activity.summary or "Activity",
        description=activity.description,
        occurred_at=activity.happened_at or activity.created_at or now,
        created_at=activity.created_at or now,
    )


def translate_relationship_type(
    relationship_type: MonicaRelationshipType,
    mapping: MonicaMapping,
) -> RelationshipTypePayload:
    """
    Translate a relationship type and its inverse.

    Names absent from the translation table pass through unchanged. The inverse
    comes from the export itself, then the static inverse table; a type with
    neither is treated as symmetric.
    """
    names = mapping.relationship_types
    forward_display = relationship_type.name.strip()
    reverse_display = (relationship_type.name_reverse_relationship or "").strip()
    forward_name = forward_display.lower()
    reverse_name = reverse_display.lower()
    if not reverse_name:
        reverse_name = mapping.inverse_relationship(forward_name) or forward_name
        reverse_display = reverse_name if reverse_name != forward_name else forward_display

    return RelationshipTypePayload(
        forward=names.get(forward_name, forward_display),
        reverse=names.get(reverse_name, reverse_display),
    )


def translate_address(address: MonicaAddress, lookups: MonicaLookups) -> AddressPayload | Skip:
    place = lookups.places.get(address.place_id)
    if place is None:
        return Skip(f"unknown place {address.place_id}")
    return AddressPayload(
        label=address.name,
        street=place.street,
        city=place.city,
        state_province=place.province,
        postal_code=place.postal_code,
        country=place.country,
    )


def translate_life_event(
    event: MonicaLifeEvent,
    lookups: MonicaLookups,
    mapping: MonicaMapping,
) -> LifeEventPayload:
    """
    Resolve category and title for a life event.

    Title precedence: the event's own name, the type key's canonical title, the
    raw type key, the type name, then ``Life event``.
    """
    event_type = LifeEventType.OTHER
    title = event.name
    type_record = lookups.life_event_types.get(event.life_event_type_id)

    if type_record is not None:
        category = lookups.life_event_categories.get(type_record.life_event_category_id)
        if category is not None and category.default_life_event_category_key:
            category_value = mapping.life_event_categories.get(category.default_life_event_category_key.lower())
            if category_value:
                try:
                    event_type = LifeEventType(category_value)
                except ValueError:
                    event_type = LifeEventType.OTHER
        if not title and type_record.default_life_event_type_key:
            key = type_record.default_life_event_type_key
            title = mapping.life_event_types.get(key.lower(), key)
        elif not title and type_record.name:
            title = type_record.name

    return LifeEventPayload(
        event_type=event_type,
        title=title or "Life event",
        description=event.note,
        occurred_at=event.happened_at,
    )


def translate_gift_status(status: str | None, mapping: MonicaMapping) -> GiftStatus:
    value = mapping.gift_statuses.get((status or "").strip().lower())
    try:
        return GiftStatus(value) if value else GiftStatus.IDEA
    except ValueError:
        return GiftStatus.IDEA


def translate_gift(gift: MonicaGift, mapping: MonicaMapping) -> GiftPayload:
    return GiftPayload(
        name=gift.name,
        description=gift.comment,
        url=gift.url,
        estimated_cost=gift.amount if gift.amount > 0 else None,
        status=translate_gift_status(gift.status, mapping),
        date=gift.date,
    )


def translate_reminder_frequency(frequency_type: str | None, mapping: MonicaMapping) -> ReminderFrequency:
    value = mapping.reminder_frequencies.get((frequency_type or "").strip().lower())
    try:
        return ReminderFrequency(value) if value else ReminderFrequency.ONE_TIME
    except ValueError:
        return ReminderFrequency.ONE_TIME


def translate_reminder(reminder: MonicaReminder, mapping: MonicaMapping) -> ReminderPayload:
    return ReminderPayload(
        title=reminder.title,
        description=reminder.description,
        reminder_date=reminder.initial_date,
        frequency=translate_reminder_frequency(reminder.frequency_type, mapping),
    )


