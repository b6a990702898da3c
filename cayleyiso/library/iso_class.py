"""Isomorphism classes keyed on canonical form, and the name registry.

An IsoClass pairs a representative with its canonical key. Two classes
are equal iff their keys are equal, whatever their element names. The
registry is a plain lookup table from already-computed keys to
human-readable names; it never canonicalizes anything itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cayleyiso.core.errors import RegistryConflictError
from cayleyiso.core.permutations import MAX_CANONICAL_SIZE
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.models.cayley import CayleyTable, canonical_key, require_valid_table


@dataclass(frozen=True, eq=False)
class IsoClass:
    """An immutable (representative, canonical key, optional name) value."""

    representative: Any
    key: str
    size: int
    name: str | None = None

    def equals(self, other: IsoClass) -> bool:
        return self.key == other.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IsoClass):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.key)

    def with_name(self, name: str | None) -> IsoClass:
        return IsoClass(self.representative, self.key, self.size, name)

    def is_isomorphic_to_key(self, key: str) -> bool:
        return self.key == key

    def __str__(self) -> str:
        return f"{self.name or f'Group_{self.size}'} (key: {self.key})"


def _table_of(structure: Any):
    if isinstance(structure, FiniteGroup):
        return structure.table
    return structure


def iso_class(
    structure: Any,
    name: str | None = None,
    max_size: int = MAX_CANONICAL_SIZE,
    workers: int | None = None,
) -> IsoClass:
    """Validate `structure` (raw table, CayleyTable or FiniteGroup) and canonicalize it.

    Raises InvalidStructureError for a table that is not a Latin square and
    StructureTooLargeError above `max_size`.
    """
    arr = require_valid_table(_table_of(structure))
    key = canonical_key(arr, max_size=max_size, workers=workers)
    return IsoClass(representative=structure, key=key, size=int(arr.shape[0]), name=name)


def classes_equal(a: IsoClass, b: IsoClass) -> bool:
    return a.key == b.key


@dataclass(frozen=True)
class RegistryEntry:
    name: str
    description: str | None = None


class IsoClassRegistry:
    """Append-only map canonical key -> name.

    Registering a key again under the same name is a no-op; under a
    different name it raises RegistryConflictError.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}

    def register(self, key: str, name: str, description: str | None = None) -> bool:
        """Add `key`; returns False if it was already registered with this name."""
        existing = self._entries.get(key)
        if existing is not None:
            if existing.name != name:
                raise RegistryConflictError(key, existing.name, name)
            return False
        self._entries[key] = RegistryEntry(name, description)
        return True

    def is_registered(self, key: str) -> bool:
        return key in self._entries

    def get_name(self, key: str) -> str | None:
        entry = self._entries.get(key)
        return entry.name if entry else None

    def get_description(self, key: str) -> str | None:
        entry = self._entries.get(key)
        return entry.description if entry else None

    def list_keys(self) -> list[str]:
        return list(self._entries)

    def find_key(self, name: str) -> str | None:
        """Reverse lookup by name."""
        for key, entry in self._entries.items():
            if entry.name == name:
                return key
        return None

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"IsoClassRegistry({len(self._entries)} classes)"


def auto_classify(
    structure: Any,
    registry: IsoClassRegistry,
    max_size: int = MAX_CANONICAL_SIZE,
) -> IsoClass:
    """Canonicalize `structure` and attach its registered name, if any.

    Passing an IsoClass reuses its key, so re-classifying never changes it.
    """
    cls = structure if isinstance(structure, IsoClass) else iso_class(structure, max_size=max_size)
    known = registry.get_name(cls.key)
    if known is not None:
        return cls.with_name(known)
    return cls


def register_class(
    registry: IsoClassRegistry,
    structure: Any,
    name: str,
    description: str | None = None,
    max_size: int = MAX_CANONICAL_SIZE,
) -> IsoClass:
    """Canonicalize `structure`, register its key under `name`, return the named class."""
    cls = iso_class(structure, name=name, max_size=max_size)
    registry.register(cls.key, name, description)
    return cls


def group_of(structure: Any, name: str = "") -> FiniteGroup:
    """Coerce a table, CayleyTable or FiniteGroup into a FiniteGroup."""
    if isinstance(structure, FiniteGroup):
        return structure
    if isinstance(structure, IsoClass):
        return group_of(structure.representative, name or (structure.name or ""))
    if isinstance(structure, CayleyTable):
        return FiniteGroup.from_table(structure, name=name or structure.name)
    return FiniteGroup.from_table(structure, name=name)
