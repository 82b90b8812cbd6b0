"""Typed records for the Monica CRM export tables.

Each source table the importer reads has one frozen dataclass. Records keep the
Monica numeric primary key so the loader can remap foreign keys, and every
column is coerced to its real domain (int, bool flag, date, datetime, text).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import ClassVar, Mapping, Tuple, Type, TypeVar, Union

from crm_app.importer.adapters.monica_sql import MonicaSQLDump, SqlScalar

RecordT = TypeVar("RecordT", bound="MonicaRecordBase")

_TRUTHY = {"1", "true", "yes", "on"}


def _as_int(value: SqlScalar, default: int | None = None) -> int | None:
    if value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def _as_bool(value: SqlScalar, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def _as_str(value: SqlScalar, default: str | None = None) -> str | None:
    if value is None:
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_float(value: SqlScalar, default: float = 0.0) -> float:
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return default


def _as_date(value: SqlScalar) -> date | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _as_datetime(value: SqlScalar) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        parsed = _as_date(value)
        return datetime(parsed.year, parsed.month, parsed.day) if parsed else None


class MonicaRecordBase:
    """Shared constructor plumbing for source records."""

    table: ClassVar[str]
    primary_key: ClassVar[Tuple[str, ...]] = ("id",)

    @classmethod
    def from_row(cls: Type[RecordT], row: Mapping[str, SqlScalar]) -> RecordT:  # pragma: no cover - abstract
        raise NotImplementedError


@dataclass(frozen=True)
class MonicaContact(MonicaRecordBase):
    table: ClassVar[str] = "contacts"

    id: int
    first_name: str = ""
    middle_name: str | None = None
    last_name: str | None = None
    nickname: str | None = None
    gender_id: int | None = None
    description: str | None = None
    is_starred: bool = False
    is_partial: bool = False
    is_active: bool = True
    is_dead: bool = False
    first_met_where: str | None = None
    first_met_additional_info: str | None = None
    job: str | None = None
    company: str | None = None
    food_preferences: str | None = None
    birthday_special_date_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaContact":
        return cls(
            id=_as_int(row.get("id")),
            first_name=_as_str(row.get("first_name"), ""),
            middle_name=_as_str(row.get("middle_name")),
            last_name=_as_str(row.get("last_name")),
            nickname=_as_str(row.get("nickname")),
            gender_id=_as_int(row.get("gender_id")),
            description=_as_str(row.get("description")),
            is_starred=_as_bool(row.get("is_starred")),
            is_partial=_as_bool(row.get("is_partial")),
            is_active=_as_bool(row.get("is_active"), default=True),
            is_dead=_as_bool(row.get("is_dead")),
            first_met_where=_as_str(row.get("first_met_where")),
            first_met_additional_info=_as_str(row.get("first_met_additional_info")),
            job=_as_str(row.get("job")),
            company=_as_str(row.get("company")),
            food_preferences=_as_str(row.get("food_preferences")),
            birthday_special_date_id=_as_int(row.get("birthday_special_date_id")),
            created_at=_as_datetime(row.get("created_at")),
            updated_at=_as_datetime(row.get("updated_at")),
        )


@dataclass(frozen=True)
class MonicaContactField(MonicaRecordBase):
    table: ClassVar[str] = "contact_fields"

    id: int
    contact_id: int | None
    contact_field_type_id: int | None
    data: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaContactField":
        return cls(
            id=_as_int(row.get("id")),
            contact_id=_as_int(row.get("contact_id")),
            contact_field_type_id=_as_int(row.get("contact_field_type_id")),
            data=_as_str(row.get("data"), ""),
        )


@dataclass(frozen=True)
class MonicaContactFieldType(MonicaRecordBase):
    table: ClassVar[str] = "contact_field_types"

    id: int
    name: str = ""
    type: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaContactFieldType":
        return cls(
            id=_as_int(row.get("id")),
            name=_as_str(row.get("name"), ""),
            type=_as_str(row.get("type")),
        )


@dataclass(frozen=True)
class MonicaTag(MonicaRecordBase):
    table: ClassVar[str] = "tags"

    id: int
    name: str = ""
    name_slug: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaTag":
        return cls(
            id=_as_int(row.get("id")),
            name=_as_str(row.get("name"), ""),
            name_slug=_as_str(row.get("name_slug")),
        )


@dataclass(frozen=True)
class MonicaContactTag(MonicaRecordBase):
    table: ClassVar[str] = "contact_tag"
    primary_key: ClassVar[Tuple[str, ...]] = ("contact_id", "tag_id")

    contact_id: int | None
    tag_id: int | None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaContactTag":
        return cls(contact_id=_as_int(row.get("contact_id")), tag_id=_as_int(row.get("tag_id")))


@dataclass(frozen=True)
class MonicaNote(MonicaRecordBase):
    table: ClassVar[str] = "notes"

    id: int
    contact_id: int | None
    body: str = ""
    is_favorited: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaNote":
        return cls(
            id=_as_int(row.get("id")),
            contact_id=_as_int(row.get("contact_id")),
            body=_as_str(row.get("body"), ""),
            is_favorited=_as_bool(row.get("is_favorited")),
        )


@dataclass(frozen=True)
class MonicaActivity(MonicaRecordBase):
    table: ClassVar[str] = "activities"

    id: int
    activity_type_id: int | None = None
    summary: str | None = None
    description: str | None = None
    happened_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaActivity":
        return cls(
            id=_as_int(row.get("id")),
            activity_type_id=_as_int(row.get("activity_type_id")),
            summary=_as_str(row.get("summary")),
            description=_as_str(row.get("description")),
            happened_at=_as_datetime(row.get("happened_at")),
            created_at=_as_datetime(row.get("created_at")),
        )


@dataclass(frozen=True)
class MonicaActivityContact(MonicaRecordBase):
    table: ClassVar[str] = "activity_contact"
    primary_key: ClassVar[Tuple[str, ...]] = ("activity_id", "contact_id")

    activity_id: int | None
    contact_id: int | None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaActivityContact":
        return cls(activity_id=_as_int(row.get("activity_id")), contact_id=_as_int(row.get("contact_id")))


@dataclass(frozen=True)
class MonicaSpecialDate(MonicaRecordBase):
    """Monica's storage for birthdays: exact, month/day only, or age based."""

    table: ClassVar[str] = "special_dates"

    id: int
    contact_id: int | None
    is_age_based: bool = False
    is_year_unknown: bool = False
    date: date | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaSpecialDate":
        return cls(
            id=_as_int(row.get("id")),
            contact_id=_as_int(row.get("contact_id")),
            is_age_based=_as_bool(row.get("is_age_based")),
            is_year_unknown=_as_bool(row.get("is_year_unknown")),
            date=_as_date(row.get("date")),
        )


@dataclass(frozen=True)
class MonicaRelationship(MonicaRecordBase):
    table: ClassVar[str] = "relationships"

    id: int
    relationship_type_id: int | None
    contact_is: int | None
    of_contact: int | None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaRelationship":
        return cls(
            id=_as_int(row.get("id")),
            relationship_type_id=_as_int(row.get("relationship_type_id")),
            contact_is=_as_int(row.get("contact_is")),
            of_contact=_as_int(row.get("of_contact")),
        )


@dataclass(frozen=True)
class MonicaRelationshipType(MonicaRecordBase):
    table: ClassVar[str] = "relationship_types"

    id: int
    name: str = ""
    name_reverse_relationship: str = ""
    relationship_type_group_id: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaRelationshipType":
        return cls(
            id=_as_int(row.get("id")),
            name=_as_str(row.get("name"), ""),
            name_reverse_relationship=_as_str(row.get("name_reverse_relationship"), ""),
            relationship_type_group_id=_as_int(row.get("relationship_type_group_id"), 0),
        )


@dataclass(frozen=True)
class MonicaAddress(MonicaRecordBase):
    table: ClassVar[str] = "addresses"

    id: int
    place_id: int | None
    contact_id: int | None
    name: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaAddress":
        return cls(
            id=_as_int(row.get("id")),
            place_id=_as_int(row.get("place_id")),
            contact_id=_as_int(row.get("contact_id")),
            name=_as_str(row.get("name")),
        )


@dataclass(frozen=True)
class MonicaPlace(MonicaRecordBase):
    table: ClassVar[str] = "places"

    id: int
    street: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None
    country: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaPlace":
        return cls(
            id=_as_int(row.get("id")),
            street=_as_str(row.get("street")),
            city=_as_str(row.get("city")),
            province=_as_str(row.get("province")),
            postal_code=_as_str(row.get("postal_code")),
            country=_as_str(row.get("country")),
        )


@dataclass(frozen=True)
class MonicaLifeEvent(MonicaRecordBase):
    table: ClassVar[str] = "life_events"

    id: int
    contact_id: int | None
    life_event_type_id: int | None
    name: str | None = None
    note: str | None = None
    happened_at: date | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaLifeEvent":
        return cls(
            id=_as_int(row.get("id")),
            contact_id=_as_int(row.get("contact_id")),
            life_event_type_id=_as_int(row.get("life_event_type_id")),
            name=_as_str(row.get("name")),
            note=_as_str(row.get("note")),
            happened_at=_as_date(row.get("happened_at")),
        )


@dataclass(frozen=True)
class MonicaLifeEventType(MonicaRecordBase):
    table: ClassVar[str] = "life_event_types"

    id: int
    life_event_category_id: int = 0
    name: str | None = None
    default_life_event_type_key: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaLifeEventType":
        return cls(
            id=_as_int(row.get("id")),
            life_event_category_id=_as_int(row.get("life_event_category_id"), 0),
            name=_as_str(row.get("name")),
            default_life_event_type_key=_as_str(row.get("default_life_event_type_key")),
        )


@dataclass(frozen=True)
class MonicaLifeEventCategory(MonicaRecordBase):
    table: ClassVar[str] = "life_event_categories"

    id: int
    name: str | None = None
    default_life_event_category_key: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaLifeEventCategory":
        return cls(
            id=_as_int(row.get("id")),
            name=_as_str(row.get("name")),
            default_life_event_category_key=_as_str(row.get("default_life_event_category_key")),
        )


@dataclass(frozen=True)
class MonicaGift(MonicaRecordBase):
    table: ClassVar[str] = "gifts"

    id: int
    contact_id: int | None
    name: str = ""
    comment: str | None = None
    url: str | None = None
    amount: float = 0.0
    status: str = "idea"
    date: date | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaGift":
        return cls(
            id=_as_int(row.get("id")),
            contact_id=_as_int(row.get("contact_id")),
            name=_as_str(row.get("name"), ""),
            comment=_as_str(row.get("comment")),
            url=_as_str(row.get("url")),
            amount=_as_float(row.get("amount")),
            status=_as_str(row.get("status"), "idea"),
            date=_as_date(row.get("date")),
        )


@dataclass(frozen=True)
class MonicaReminder(MonicaRecordBase):
    table: ClassVar[str] = "reminders"

    id: int
    contact_id: int | None
    initial_date: date | None = None
    title: str = ""
    description: str | None = None
    frequency_type: str = "one_time"
    frequency_number: int = 1

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaReminder":
        return cls(
            id=_as_int(row.get("id")),
            contact_id=_as_int(row.get("contact_id")),
            initial_date=_as_date(row.get("initial_date")),
            title=_as_str(row.get("title"), ""),
            description=_as_str(row.get("description")),
            frequency_type=_as_str(row.get("frequency_type"), "one_time"),
            frequency_number=_as_int(row.get("frequency_number"), 1),
        )


@dataclass(frozen=True)
class MonicaGender(MonicaRecordBase):
    table: ClassVar[str] = "genders"

    id: int
    name: str = ""
    type: str = "O"

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaGender":
        return cls(
            id=_as_int(row.get("id")),
            name=_as_str(row.get("name"), ""),
            type=_as_str(row.get("type"), "O"),
        )


@dataclass(frozen=True)
class MonicaCall(MonicaRecordBase):
    table: ClassVar[str] = "calls"

    id: int
    contact_id: int | None
    called_at: datetime | None = None
    content: str | None = None
    contact_called: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaCall":
        return cls(
            id=_as_int(row.get("id")),
            contact_id=_as_int(row.get("contact_id")),
            called_at=_as_datetime(row.get("called_at")),
            content=_as_str(row.get("content")),
            contact_called=_as_bool(row.get("contact_called")),
        )


@dataclass(frozen=True)
class MonicaEntry(MonicaRecordBase):
    """Free-text journal entry (parsed for completeness, not imported)."""

    table: ClassVar[str] = "entries"

    id: int
    title: str | None = None
    post: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, SqlScalar]) -> "MonicaEntry":
        return cls(
            id=_as_int(row.get("id")),
            title=_as_str(row.get("title")),
            post=_as_str(row.get("post"), ""),
            created_at=_as_datetime(row.get("created_at")),
        )


MonicaRecord = Union[
    MonicaContact,
    MonicaContactField,
    MonicaContactFieldType,
    MonicaTag,
    MonicaContactTag,
    MonicaNote,
    MonicaActivity,
    MonicaActivityContact,
    MonicaSpecialDate,
    MonicaRelationship,
    MonicaRelationshipType,
    MonicaAddress,
    MonicaPlace,
    MonicaLifeEvent,
    MonicaLifeEventType,
    MonicaLifeEventCategory,
    MonicaGift,
    MonicaReminder,
    MonicaGender,
    MonicaCall,
    MonicaEntry,
]


@dataclass(frozen=True)
class MonicaExport:
    """All records parsed from one Monica SQL export."""

    contacts: Tuple[MonicaContact, ...] = ()
    contact_fields: Tuple[MonicaContactField, ...] = ()
    contact_field_types: Tuple[MonicaContactFieldType, ...] = ()
    tags: Tuple[MonicaTag, ...] = ()
    contact_tags: Tuple[MonicaContactTag, ...] = ()
    notes: Tuple[MonicaNote, ...] = ()
    activities: Tuple[MonicaActivity, ...] = ()
    activity_contacts: Tuple[MonicaActivityContact, ...] = ()
    special_dates: Tuple[MonicaSpecialDate, ...] = ()
    relationships: Tuple[MonicaRelationship, ...] = ()
    relationship_types: Tuple[MonicaRelationshipType, ...] = ()
    addresses: Tuple[MonicaAddress, ...] = ()
    places: Tuple[MonicaPlace, ...] = ()
    life_events: Tuple[MonicaLifeEvent, ...] = ()
    life_event_types: Tuple[MonicaLifeEventType, ...] = ()
    life_event_categories: Tuple[MonicaLifeEventCategory, ...] = ()
    gifts: Tuple[MonicaGift, ...] = ()
    reminders: Tuple[MonicaReminder, ...] = ()
    genders: Tuple[MonicaGender, ...] = ()
    calls: Tuple[MonicaCall, ...] = ()
    entries: Tuple[MonicaEntry, ...] = ()
    warnings: Tuple[str, ...] = field(default=())


EXPORT_FIELDS: Tuple[Tuple[str, Type[MonicaRecordBase]], ...] = (
    ("contacts", MonicaContact),
    ("contact_fields", MonicaContactField),
    ("contact_field_types", MonicaContactFieldType),
    ("tags", MonicaTag),
    ("contact_tags", MonicaContactTag),
    ("notes", MonicaNote),
    ("activities", MonicaActivity),
    ("activity_contacts", MonicaActivityContact),
    ("special_dates", MonicaSpecialDate),
    ("relationships", MonicaRelationship),
    ("relationship_types", MonicaRelationshipType),
    ("addresses", MonicaAddress),
    ("places", MonicaPlace),
    ("life_events", MonicaLifeEvent),
    ("life_event_types", MonicaLifeEventType),
    ("life_event_categories", MonicaLifeEventCategory),
    ("gifts", MonicaGift),
    ("reminders", MonicaReminder),
    ("genders", MonicaGender),
    ("calls", MonicaCall),
    ("entries", MonicaEntry),
)


def _load_records(dump: MonicaSQLDump, record_type: Type[RecordT], warnings: list[str]) -> Tuple[RecordT, ...]:
    records: list[RecordT] = []
    for row in dump.extract_table(record_type.table, primary_key=record_type.primary_key):
        record = record_type.from_row(row)
        if record_type.primary_key == ("id",) and getattr(record, "id") is None:
            warnings.append(f"Row in `{record_type.table}` without a usable id skipped")
            continue
        records.append(record)
    return tuple(records)


def parse_monica_export(sql_text: str) -> MonicaExport:
    """Parse a Monica SQL export into typed records."""
    dump = MonicaSQLDump(sql_text)
    warnings = list(dump.warnings)
    payload = {name: _load_records(dump, record_type, warnings) for name, record_type in EXPORT_FIELDS}
    return MonicaExport(**payload, warnings=tuple(warnings))
