"""Canonical source-record contracts for importer adapters."""

from .monica import (
    EXPORT_FIELDS,
    MonicaActivity,
    MonicaActivityContact,
    MonicaAddress,
    MonicaCall,
    MonicaContact,
    MonicaContactField,
    MonicaContactFieldType,
    MonicaContactTag,
    MonicaEntry,
    MonicaExport,
    MonicaGender,
    MonicaGift,
    MonicaLifeEvent,
    MonicaLifeEventCategory,
    MonicaLifeEventType,
    MonicaNote,
    MonicaPlace,
    MonicaRecord,
    MonicaRelationship,
    MonicaRelationshipType,
    MonicaReminder,
    MonicaSpecialDate,
    MonicaTag,
    parse_monica_export,
)

__all__ = [
    "EXPORT_FIELDS",
    "MonicaActivity",
    "MonicaActivityContact",
    "MonicaAddress",
    "MonicaCall",
    "MonicaContact",
    "MonicaContactField",
    "MonicaContactFieldType",
    "MonicaContactTag",
    "MonicaEntry",
    "MonicaExport",
    "MonicaGender",
    "MonicaGift",
    "MonicaLifeEvent",
    "MonicaLifeEventCategory",
    "MonicaLifeEventType",
    "MonicaNote",
    "MonicaPlace",
    "MonicaRecord",
    "MonicaRelationship",
    "MonicaRelationshipType",
    "MonicaReminder",
    "MonicaSpecialDate",
    "MonicaTag",
    "parse_monica_export",
]
