"""Exception taxonomy.

Only contract violations are exceptions. Mathematical negatives (not
injective, not isomorphic, no automorphism besides the identity) are
returned as data.
"""

from __future__ import annotations


class CayleyIsoError(Exception):
    """Base class for all errors raised by cayleyiso."""


class InvalidStructureError(CayleyIsoError, ValueError):
    """A table or structure failed validation (not a Latin square, no identity, ...)."""


class StructureTooLargeError(CayleyIsoError):
    """The carrier is larger than the factorial-search ceiling."""

    def __init__(self, size: int, limit: int, operation: str = "search"):
        self.size = size
        self.limit = limit
        self.operation = operation
        super().__init__(
            f"{operation}: carrier of size {size} exceeds the permutation-search "
            f"ceiling of {limit} ({size}! candidates)"
        )


class UndefinedInverseError(CayleyIsoError, LookupError):
    """Lookup of an element outside every known carrier, coset or class."""


class RegistryConflictError(CayleyIsoError, KeyError):
    """A canonical key is already registered under a different name."""

    def __init__(self, key: str, existing: str, requested: str):
        self.key = key
        self.existing = existing
        self.requested = requested
        super().__init__(
            f"key {key!r} is already registered as {existing!r}, refusing to rename to {requested!r}"
        )

    def __str__(self) -> str:
        return self.args[0]
