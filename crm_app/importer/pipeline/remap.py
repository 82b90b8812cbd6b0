"""Source-to-destination identifier bookkeeping for the Monica importer."""

from __future__ import annotations

from collections import defaultdict
from typing import Hashable, Tuple

RelationshipKey = Tuple[frozenset, frozenset]


class IdentifierRemapper:
    """
    Track Monica numeric ids against freshly created destination ids.

    One map is kept per entity kind (``"contact"``, ``"tag"``...). Source ids
    may also be excluded, which marks them as intentionally never imported
    (partial contacts); lookups for excluded ids resolve to ``None``.
    """

    def __init__(self) -> None:
        self._maps: dict[str, dict[int, int]] = defaultdict(dict)
        self._excluded: dict[str, set[int]] = defaultdict(set)

    def record(self, kind: str, source_id: int, destination_id: int) -> None:
        if source_id in self._excluded[kind]:
            raise ValueError(f"{kind} {source_id} is excluded and cannot be remapped")
        self._maps[kind][source_id] = destination_id

    def exclude(self, kind: str, source_id: int) -> None:
        self._excluded[kind].add(source_id)

    def is_excluded(self, kind: str, source_id: int | None) -> bool:
        return source_id is not None and source_id in self._excluded[kind]

    def resolve(self, kind: str, source_id: int | None) -> int | None:
        if source_id is None:
            return None
        return self._maps[kind].get(source_id)

    def count(self, kind: str) -> int:
        return len(self._maps[kind])


class RelationshipDeduplicator:
    """
    Admit each relationship pair once.

    Monica stores both directions of a relationship (``A parent of B`` and
    ``B child of A``). The identity of a pair is the unordered set of contacts
    plus the unordered set ``{type, inverse type}``, so both rows share a key.
    Type names are compared case-insensitively.
    """

    def __init__(self) -> None:
        self._seen: set[RelationshipKey] = set()

    @staticmethod
    def key(contact_a: Hashable, contact_b: Hashable, forward_type: str, reverse_type: str) -> RelationshipKey:
        types = frozenset((forward_type.casefold(), reverse_type.casefold()))
        return frozenset((contact_a, contact_b)), types

    def admit(self, contact_a: Hashable, contact_b: Hashable, forward_type: str, reverse_type: str) -> bool:
        """Return ``True`` the first time a pair is seen, ``False`` afterwards."""
        key = self.key(contact_a, contact_b, forward_type, reverse_type)
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __len__(self) -> int:
        return len(self._seen)
