"""Utilities for loading the Monica translation tables."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from flask import current_app, has_app_context

DEFAULT_MONICA_MAPPING_PATH = Path(__file__).resolve().parents[3] / "config" / "mappings" / "monica_v1.yaml"

_TABLE_KEYS = (
    "genders",
    "contact_method_types",
    "relationship_types",
    "relationship_inverses",
    "life_event_categories",
    "life_event_types",
    "gift_statuses",
    "reminder_frequencies",
)


class MappingLoadError(RuntimeError):
    """Raised when a mapping specification cannot be loaded or validated."""


@dataclass(frozen=True)
class MonicaMapping:
    """
    Immutable lookup tables consumed by the Monica translators.

    Every table is a read-only ``MappingProxyType`` keyed by the lower-cased
    Monica name. Translators receive an instance explicitly.
    """

    version: int
    genders: Mapping[str, str]
    contact_method_types: Mapping[str, str]
    relationship_types: Mapping[str, str]
    relationship_inverses: Mapping[str, str]
    life_event_categories: Mapping[str, str]
    life_event_types: Mapping[str, str]
    gift_statuses: Mapping[str, str]
    reminder_frequencies: Mapping[str, str]
    checksum: str = ""
    path: Path | None = None

    def inverse_relationship(self, name: str) -> str | None:
        """Return the static inverse for a Monica relationship name, either direction."""
        key = name.strip().lower()
        if key in self.relationship_inverses:
            return self.relationship_inverses[key]
        for forward, reverse in self.relationship_inverses.items():
            if reverse == key:
                return forward
        return None


def _freeze_table(name: str, payload: Any) -> Mapping[str, str]:
    if payload is None:
        return MappingProxyType({})
    if not isinstance(payload, Mapping):
        raise MappingLoadError(f"Mapping table '{name}' must be a mapping, got {type(payload).__name__}")
    table: dict[str, str] = {}
    for key, value in payload.items():
        if key is None or value is None:
            raise MappingLoadError(f"Mapping table '{name}' contains an empty entry: {key!r}: {value!r}")
        table[str(key).strip().lower()] = str(value).strip()
    return MappingProxyType(table)


def build_monica_mapping(raw: Mapping[str, Any], *, path: Path | None = None) -> MonicaMapping:
    """Validate a parsed YAML payload and freeze it into a :class:`MonicaMapping`."""
    try:
        version = int(raw["version"])
        adapter = str(raw["adapter"]).strip()
    except KeyError as exc:
        raise MappingLoadError(f"Missing required mapping attribute: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise MappingLoadError(f"Invalid mapping attribute: {exc}") from exc

    if adapter != "monica":
        raise MappingLoadError(f"Mapping adapter must be 'monica', got '{adapter}'.")

    tables = {key: _freeze_table(key, raw.get(key)) for key in _TABLE_KEYS}
    return MonicaMapping(version=version, checksum=_compute_checksum(raw), path=path, **tables)


def load_monica_mapping(path: str | Path | None = None) -> MonicaMapping:
    """Load and validate a Monica mapping YAML file."""
    path = Path(path) if path else DEFAULT_MONICA_MAPPING_PATH
    if not path.exists():
        raise MappingLoadError(f"Mapping file not found at {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:  # pragma: no cover - YAML parser errors
        raise MappingLoadError(f"Failed to parse mapping YAML at {path}: {exc}") from exc

    if not isinstance(raw, Mapping):
        raise MappingLoadError(f"Mapping file at {path} must contain a YAML mapping.")
    return build_monica_mapping(raw, path=path)


def get_active_monica_mapping() -> MonicaMapping:
    """
    Load the configured Monica mapping (cached per app).

    Outside an application context the bundled default file is loaded. The
    cache is invalidated when the file modification time changes.
    """
    if not has_app_context():
        return load_monica_mapping()

    config_path = Path(current_app.config.get("IMPORTER_MONICA_MAPPING_PATH") or DEFAULT_MONICA_MAPPING_PATH)
    cache: dict[str, tuple[MonicaMapping, float]] = current_app.extensions.setdefault(
        "_importer_monica_mapping_cache", {}
    )
    cache_key = str(config_path)

    cached_entry = cache.get(cache_key)
    if cached_entry:
        cached_mapping, cached_mtime = cached_entry
        if config_path.stat().st_mtime == cached_mtime:
            return cached_mapping
        current_app.logger.debug("Monica mapping file changed, reloading: %s", config_path)

    mapping = load_monica_mapping(config_path)
    cache[cache_key] = (mapping, config_path.stat().st_mtime)
    return mapping


def _compute_checksum(payload: Mapping[str, Any]) -> str:
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


__all__ = [
    "DEFAULT_MONICA_MAPPING_PATH",
    "MappingLoadError",
    "MonicaMapping",
    "build_monica_mapping",
    "get_active_monica_mapping",
    "load_monica_mapping",
]
