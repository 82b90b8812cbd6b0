from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from crm_app.importer.contracts import (
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
    MonicaPlace,
    MonicaRelationshipType,
    MonicaReminder,
    MonicaSpecialDate,
)
from crm_app.importer.pipeline.monica_translate import (
    MonicaLookups,
    Skip,
    combine_how_we_met,
    derive_status,
    resolve_birthday,
    resolve_contact_method,
    resolve_gender,
    translate_activity,
    translate_address,
    translate_call,
    translate_contact,
    translate_contact_field,
    translate_gift,
    translate_life_event,
    translate_relationship_type,
    translate_reminder,
)
from crm_app.models import (
    ActivityType,
    BirthdayMode,
    ContactMethodType,
    ContactStatus,
    GiftStatus,
    LifeEventType,
    ReminderFrequency,
)

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _lookups(**collections) -> MonicaLookups:
    return MonicaLookups.from_export(MonicaExport(**collections))


def test_translate_contact_full(monica_mapping):
    lookups = _lookups(
        genders=(MonicaGender(id=2, name="Woman", type="F"),),
        special_dates=(MonicaSpecialDate(id=5, contact_id=1, date=date(1990, 5, 17)),),
    )
    contact = MonicaContact(
        id=1,
        first_name="Sarah",
        last_name="Chen",
        gender_id=2,
        is_starred=True,
        first_met_where="University",
        first_met_additional_info="Chemistry lab partner",
        job="Chemist",
        birthday_special_date_id=5,
        created_at=datetime(2019, 3, 1, 10, 0),
    )

    payload = translate_contact(contact, lookups, monica_mapping, now=NOW)

    assert payload.first_name == "Sarah"
    assert payload.gender == "female"
    assert payload.birthday.mode == BirthdayMode.FULL_DATE
    assert payload.birthday.date == date(1990, 5, 17)
    assert payload.status == ContactStatus.ACTIVE
    assert payload.is_favorite is True
    assert payload.met_description == "University — Chemistry lab partner"
    assert payload.job_title == "Chemist"
    assert payload.created_at == datetime(2019, 3, 1, 10, 0)
    assert payload.updated_at == datetime(2019, 3, 1, 10, 0)
    kwargs = payload.model_kwargs()
    assert kwargs["birthday_mode"] == BirthdayMode.FULL_DATE
    assert kwargs["birthday_month"] is None


def test_translate_contact_skips_partial(monica_mapping):
    payload = translate_contact(MonicaContact(id=2, first_name="Ghost", is_partial=True), _lookups(), monica_mapping)

    assert payload == Skip("partial contact")


def test_translate_contact_defaults_timestamps(monica_mapping):
    payload = translate_contact(MonicaContact(id=3), _lookups(), monica_mapping, now=NOW)

    assert payload.first_name == ""
    assert payload.birthday is None
    assert payload.created_at == NOW
    assert payload.updated_at == NOW


@pytest.mark.parametrize(
    ("name", "expected"),
    [("Man", "male"), ("woman", "female"), ("Rather not say", "rather not say")],
)
def test_resolve_gender(monica_mapping, name, expected):
    genders = {1: MonicaGender(id=1, name=name)}

    assert resolve_gender(1, genders, monica_mapping) == expected


def test_resolve_gender_missing(monica_mapping):
    assert resolve_gender(None, {}, monica_mapping) is None
    assert resolve_gender(9, {}, monica_mapping) is None


def test_resolve_birthday_precision_modes():
    age_based = resolve_birthday(MonicaSpecialDate(id=1, contact_id=1, is_age_based=True, date=date(1985, 1, 1)))
    year_unknown = resolve_birthday(
        MonicaSpecialDate(id=2, contact_id=1, is_year_unknown=True, date=date(1900, 12, 25))
    )
    full = resolve_birthday(MonicaSpecialDate(id=3, contact_id=1, date=date(1990, 5, 17)))

    assert age_based.mode == BirthdayMode.APPROXIMATE_AGE
    assert age_based.year_approximate == 1985
    assert age_based.date is None
    assert year_unknown.mode == BirthdayMode.MONTH_DAY
    assert (year_unknown.month, year_unknown.day) == (12, 25)
    assert year_unknown.date is None
    assert full.mode == BirthdayMode.FULL_DATE
    assert full.date == date(1990, 5, 17)
    assert resolve_birthday(MonicaSpecialDate(id=4, contact_id=1)) is None
    assert resolve_birthday(None) is None


@pytest.mark.parametrize(
    ("is_dead", "is_active", "expected"),
    [
        (True, True, ContactStatus.DECEASED),
        (True, False, ContactStatus.DECEASED),
        (False, False, ContactStatus.ARCHIVED),
        (False, True, ContactStatus.ACTIVE),
    ],
)
def test_derive_status(is_dead, is_active, expected):
    assert derive_status(is_dead, is_active) == expected


def test_combine_how_we_met():
    assert combine_how_we_met("Paris", "At a concert") == "Paris — At a concert"
    assert combine_how_we_met("Paris", None) == "Paris"
    assert combine_how_we_met(None, "At a concert") == "At a concert"
    assert combine_how_we_met("", None) is None


@pytest.mark.parametrize(
    ("name", "type_hint", "expected"),
    [
        ("Email", None, ContactMethodType.EMAIL),
        ("Work email", "email", ContactMethodType.EMAIL),
        ("LinkedIn", None, ContactMethodType.LINKEDIN),
        ("Skype", None, ContactMethodType.OTHER),
    ],
)
def test_resolve_contact_method(monica_mapping, name, type_hint, expected):
    kind, label = resolve_contact_method(MonicaContactFieldType(id=1, name=name, type=type_hint), monica_mapping)

    assert kind == expected
    assert label == name


def test_translate_contact_field_unknown_type_is_skipped(monica_mapping):
    field = MonicaContactField(id=1, contact_id=1, contact_field_type_id=42, data="x")

    payload = translate_contact_field(field, _lookups(), monica_mapping)

    assert isinstance(payload, Skip)
    assert "42" in payload.reason


def test_translate_call_renders_note_body():
    called = translate_call(
        MonicaCall(id=1, contact_id=1, called_at=datetime(2021, 6, 1, 18, 30), content="Trip", contact_called=True)
    )
    undated = translate_call(MonicaCall(id=2, contact_id=1))

    assert called.body == "[Phone Call — 2021-06-01] Called them\n\nTrip"
    assert undated.body == "[Phone Call — unknown date] They called"


def test_translate_activity_falls_back_to_created_at():
    payload = translate_activity(MonicaActivity(id=1, created_at=datetime(2021, 8, 1, 20, 0)), now=NOW)

    assert payload.type == ActivityType.IN_PERSON
    assert payload.title == "Activity"
    assert payload.occurred_at == datetime(2021, 8, 1, 20, 0)


def test_translate_relationship_type_uses_export_reverse(monica_mapping):
    names = translate_relationship_type(
        MonicaRelationshipType(id=1, name="uncle", name_reverse_relationship="nephew"), monica_mapping
    )

    assert (names.forward, names.reverse) == ("uncle_aunt", "nephew_niece")


def test_translate_relationship_type_uses_static_inverse(monica_mapping):
    forward = translate_relationship_type(MonicaRelationshipType(id=1, name="godfather"), monica_mapping)
    backward = translate_relationship_type(MonicaRelationshipType(id=2, name="godson"), monica_mapping)

    assert (forward.forward, forward.reverse) == ("godparent", "godchild")
    assert (backward.forward, backward.reverse) == ("godchild", "godparent")


def test_translate_relationship_type_unknown_is_symmetric(monica_mapping):
    names = translate_relationship_type(MonicaRelationshipType(id=1, name="neighbour"), monica_mapping)

    assert (names.forward, names.reverse) == ("neighbour", "neighbour")


def test_translate_relationship_type_keeps_custom_casing(monica_mapping):
    names = translate_relationship_type(
        MonicaRelationshipType(id=1, name=" Landlord ", name_reverse_relationship="Tenant"), monica_mapping
    )

    assert (names.forward, names.reverse) == ("Landlord", "Tenant")


def test_translate_address():
    lookups = _lookups(places=(MonicaPlace(id=1, street="1 Main St", city="Springfield", province="IL"),))

    payload = translate_address(MonicaAddress(id=1, place_id=1, contact_id=1, name="Home"), lookups)
    missing = translate_address(MonicaAddress(id=2, place_id=7, contact_id=1), lookups)

    assert payload.label == "Home"
    assert payload.state_province == "IL"
    assert isinstance(missing, Skip)


def test_translate_life_event_uses_type_key_title(monica_mapping):
    lookups = _lookups(
        life_event_categories=(
            MonicaLifeEventCategory(id=1, default_life_event_category_key="work_education"),
        ),
        life_event_types=(
            MonicaLifeEventType(id=3, life_event_category_id=1, default_life_event_type_key="new_job"),
        ),
    )
    event = MonicaLifeEvent(id=1, contact_id=1, life_event_type_id=3, note="Joined Acme", happened_at=date(2018, 9, 1))

    payload = translate_life_event(event, lookups, monica_mapping)

    assert payload.event_type == LifeEventType.CAREER
    assert payload.title == "New job"
    assert payload.description == "Joined Acme"
    assert payload.occurred_at == date(2018, 9, 1)


def test_translate_life_event_defaults(monica_mapping):
    payload = translate_life_event(MonicaLifeEvent(id=1, contact_id=1, life_event_type_id=None), _lookups(), monica_mapping)
    named = translate_life_event(
        MonicaLifeEvent(id=2, contact_id=1, life_event_type_id=None, name="Ran a marathon"), _lookups(), monica_mapping
    )

    assert payload.event_type == LifeEventType.OTHER
    assert payload.title == "Life event"
    assert named.title == "Ran a marathon"


@pytest.mark.parametrize(
    ("status", "expected"),
    [("offered", GiftStatus.GIVEN), ("idea", GiftStatus.IDEA), ("lost", GiftStatus.IDEA), (None, GiftStatus.IDEA)],
)
def test_translate_gift_status(monica_mapping, status, expected):
    payload = translate_gift(MonicaGift(id=1, contact_id=1, name="Teapot", status=status), monica_mapping)

    assert payload.status == expected


def test_translate_gift_cost_only_when_positive(monica_mapping):
    priced = translate_gift(MonicaGift(id=1, contact_id=1, name="Teapot", amount=35.0), monica_mapping)
    free = translate_gift(MonicaGift(id=2, contact_id=1, name="Card"), monica_mapping)

    assert priced.estimated_cost == 35.0
    assert free.estimated_cost is None


@pytest.mark.parametrize(
    ("frequency", "expected"),
    [
        ("year", ReminderFrequency.YEARLY),
        ("month", ReminderFrequency.MONTHLY),
        ("week", ReminderFrequency.WEEKLY),
        ("one_time", ReminderFrequency.ONE_TIME),
        ("day", ReminderFrequency.ONE_TIME),
    ],
)
def test_translate_reminder_frequency(monica_mapping, frequency, expected):
    payload = translate_reminder(
        MonicaReminder(id=1, contact_id=1, initial_date=date(2022, 5, 17), title="Call", frequency_type=frequency),
        monica_mapping,
    )

    assert payload.frequency == expected
    assert payload.reminder_date == date(2022, 5, 17)
