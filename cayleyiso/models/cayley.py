"""Cayley table validation, relabeling and canonicalization."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np

from cayleyiso.core.errors import InvalidStructureError
from cayleyiso.core.permutations import (
    MAX_CANONICAL_SIZE,
    Permutation,
    check_size,
    inverse_permutation,
    is_permutation,
    permutation_count,
    permutations,
)

log = logging.getLogger(__name__)

TableLike = Any  # nested sequences of ints, a 2-D ndarray, or a CayleyTable


def _rows(table: TableLike) -> list[list[Any]] | None:
    if isinstance(table, CayleyTable):
        table = table.table
    try:
        return [list(row) for row in table]
    except TypeError:
        return None


def validate_table(table: TableLike) -> bool:
    """True iff `table` is a non-empty n×n Latin square over range(n).

    Never raises on malformed input: ragged rows, non-integer entries and
    out-of-range entries all answer False.
    """
    rows = _rows(table)
    if not rows:
        return False
    n = len(rows)
    for row in rows:
        if len(row) != n:
            return False
        for v in row:
            if isinstance(v, (bool, np.bool_)) or not isinstance(v, (int, np.integer)):
                return False
            if not 0 <= v < n:
                return False
    full = set(range(n))
    for i in range(n):
        if set(rows[i]) != full:
            return False
        if {rows[j][i] for j in range(n)} != full:
            return False
    return True


def require_valid_table(table: TableLike) -> np.ndarray:
    """Validate and return the table as an int ndarray, or raise InvalidStructureError."""
    if not validate_table(table):
        raise InvalidStructureError("table is not a valid Latin square over its index carrier")
    if isinstance(table, CayleyTable):
        return table.table
    return np.asarray(_rows(table), dtype=np.intp)


def serialize_table(table: np.ndarray | Sequence[Sequence[int]]) -> str:
    """Row-major serialization: entries joined by ',', rows by '|'."""
    rows = table.tolist() if isinstance(table, np.ndarray) else table
    return "|".join(",".join(str(int(v)) for v in row) for row in rows)


def _relabel_array(arr: np.ndarray, p: np.ndarray, inv: np.ndarray) -> np.ndarray:
    # out[x][y] = p[arr[inv[x]][inv[y]]]
    return p[arr[np.ix_(inv, inv)]]


def relabel(table: TableLike, permutation: Sequence[int]) -> list[list[int]]:
    """Rename every element i to permutation[i].

    The result satisfies out[p[a]][p[b]] == p[table[a][b]].
    """
    arr = require_valid_table(table)
    n = arr.shape[0]
    if not is_permutation(permutation, n):
        raise InvalidStructureError(f"{list(permutation)!r} is not a permutation of range({n})")
    p = np.asarray(permutation, dtype=np.intp)
    inv = np.asarray(inverse_permutation(permutation), dtype=np.intp)
    return _relabel_array(arr, p, inv).tolist()


def min_serialization(arr: np.ndarray, perms: Iterable[Permutation]) -> str | None:
    """Smallest serialization of `arr` relabeled by each permutation in `perms`."""
    best: str | None = None
    for perm in perms:
        p = np.asarray(perm, dtype=np.intp)
        inv = np.asarray(inverse_permutation(perm), dtype=np.intp)
        s = serialize_table(_relabel_array(arr, p, inv))
        if best is None or s < best:
            best = s
    return best


def canonical_key(
    table: TableLike,
    max_size: int = MAX_CANONICAL_SIZE,
    workers: int | None = None,
) -> str:
    """Lexicographically smallest serialization over all relabelings.

    Two tables get the same key iff one is a relabeling of the other.
    Factorial time: raises StructureTooLargeError above `max_size`.
    """
    arr = require_valid_table(table)
    n = arr.shape[0]
    check_size(n, max_size, "canonical_key")
    log.debug("Canonicalizing table of size %d (%d relabelings)", n, permutation_count(n))

    if workers is not None and workers > 1 and n > 1:
        from cayleyiso.solvers.parallel import parallel_canonical_key
        return parallel_canonical_key(arr, max_size=max_size, max_workers=workers)

    best = min_serialization(arr, permutations(n, limit=max_size, operation="canonical_key"))
    if best is None:
        raise InvalidStructureError("no relabelings to compare for an empty table")
    return best


def find_identity(table: TableLike) -> int | None:
    """Return the two-sided identity index, or None."""
    arr = np.asarray(_rows(table))
    n = arr.shape[0]
    cols = np.arange(n)
    for e in range(n):
        if np.array_equal(arr[e], cols) and np.array_equal(arr[:, e], cols):
            return e
    return None


def element_order(table: TableLike, x: int) -> int:
    """Smallest k >= 1 with x^k == e, powers taken left to right."""
    arr = require_valid_table(table)
    e = find_identity(arr)
    if e is None:
        raise InvalidStructureError("element orders need an identity element")
    n = arr.shape[0]
    power = x
    for k in range(1, n + 1):
        if power == e:
            return k
        power = int(arr[power][x])
    raise InvalidStructureError(f"powers of element {x} never reach the identity")


def order_spectrum(table: TableLike) -> dict[int, int]:
    """Map element order -> number of elements of that order.

    Invariant under relabeling, so it is a cheap necessary condition for
    isomorphism.
    """
    arr = require_valid_table(table)
    spectrum: dict[int, int] = {}
    for x in range(arr.shape[0]):
        k = element_order(arr, x)
        spectrum[k] = spectrum.get(k, 0) + 1
    return dict(sorted(spectrum.items()))


@dataclass(eq=False)
class CayleyTable:
    """A finite binary operation given as its multiplication table.

    Entry [i][j] = i op j, with elements named by index 0..n-1.
    Construction does not validate; every analysis method that needs a
    Latin square checks it.
    """

    table: np.ndarray
    name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.table, np.ndarray):
            rows = _rows(self.table)
            if rows is None:
                raise InvalidStructureError(f"cannot read {self.table!r} as a table")
            try:
                self.table = np.asarray(rows, dtype=np.intp)
            except (TypeError, ValueError) as exc:
                raise InvalidStructureError(f"cannot read table rows: {exc}") from exc

    @property
    def size(self) -> int:
        return int(self.table.shape[0]) if self.table.ndim == 2 else 0

    def is_latin_square(self) -> bool:
        return validate_table(self)

    def is_commutative(self) -> bool:
        return bool(np.array_equal(self.table, self.table.T))

    def has_identity(self) -> int | None:
        """Return the identity element index, or None if no identity exists."""
        if not self.is_latin_square():
            return None
        return find_identity(self.table)

    def is_associative(self) -> bool:
        t = self.table
        n = self.size
        for a in range(n):
            for b in range(n):
                for c in range(n):
                    if t[t[a][b]][c] != t[a][t[b][c]]:
                        return False
        return True

    def is_group(self) -> bool:
        return self.is_latin_square() and self.has_identity() is not None and self.is_associative()

    def order_spectrum(self) -> dict[int, int]:
        return order_spectrum(self)

    def canonical_key(self, max_size: int = MAX_CANONICAL_SIZE, workers: int | None = None) -> str:
        return canonical_key(self, max_size=max_size, workers=workers)

    def relabel(self, permutation: Sequence[int]) -> CayleyTable:
        return CayleyTable(np.asarray(relabel(self, permutation), dtype=np.intp), name=self.name)

    def serialize(self) -> str:
        return serialize_table(self.table)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "size": self.size, "table": self.table.tolist()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CayleyTable:
        return cls(table=np.array(data["table"], dtype=np.intp), name=data.get("name", ""))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CayleyTable):
            return NotImplemented
        return self.table.shape == other.table.shape and bool(np.array_equal(self.table, other.table))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        label = f"{self.name}, " if self.name else ""
        return f"CayleyTable({label}size={self.size})"
