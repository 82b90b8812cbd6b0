"""Importer pipeline helpers."""

from __future__ import annotations

from .monica_loader import (
    AccountNotFoundError,
    MonicaImportError,
    MonicaImportLoader,
    MonicaImportSummary,
    import_monica_export,
)
from .monica_translate import MonicaLookups, Skip
from .remap import IdentifierRemapper, RelationshipDeduplicator
from .run_service import list_recent_runs, run_monica_import

__all__ = [
    "AccountNotFoundError",
    "IdentifierRemapper",
    "MonicaImportError",
    "MonicaImportLoader",
    "MonicaImportSummary",
    "MonicaLookups",
    "RelationshipDeduplicator",
    "Skip",
    "import_monica_export",
    "list_recent_runs",
    "run_monica_import",
]
