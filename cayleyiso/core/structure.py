"""The one concrete finite-structure type.

A FiniteGroup bundles a carrier with its operation, identity, inverse and
equality. Cyclic groups, automorphism groups and quotient groups are all
FiniteGroup values; every algorithm downstream works on element indices
obtained through `index_of` and the cached index-level `table`.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Sequence, TypeVar

import numpy as np

from cayleyiso.core.errors import InvalidStructureError, UndefinedInverseError

T = TypeVar("T")


@dataclass(eq=False)
class FiniteGroup(Generic[T]):
    """A finite group over an explicit, ordered carrier.

    `elements` fixes the index of each element. `eq` defaults to ==.
    """

    elements: Sequence[T]
    op: Callable[[T, T], T]
    identity: T
    inverse: Callable[[T], T]
    eq: Callable[[T, T], bool] = operator.eq
    name: str = ""
    _table: np.ndarray | None = field(default=None, init=False, repr=False)
    _index: dict[Any, int] | None = field(default=None, init=False, repr=False)
    _validated: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.elements = tuple(self.elements)
        if not self.elements:
            raise InvalidStructureError("a group needs a non-empty carrier")
        if self.eq is operator.eq:
            try:
                self._index = {x: i for i, x in enumerate(self.elements)}
            except TypeError:
                self._index = None
            if self._index is not None and len(self._index) != len(self.elements):
                raise InvalidStructureError(f"{self.label}: carrier lists an element twice")

    @property
    def label(self) -> str:
        return self.name or f"Group_{len(self.elements)}"

    @property
    def size(self) -> int:
        return len(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def find_index(self, x: T) -> int | None:
        """Index of `x` in the carrier, or None."""
        if self._index is not None:
            try:
                return self._index.get(x)
            except TypeError:
                return None
        for i, y in enumerate(self.elements):
            if self.eq(y, x):
                return i
        return None

    def index_of(self, x: T) -> int:
        """Index of `x` in the carrier; UndefinedInverseError if absent."""
        i = self.find_index(x)
        if i is None:
            raise UndefinedInverseError(f"{x!r} is not an element of {self.label}")
        return i

    def contains(self, x: T) -> bool:
        return self.find_index(x) is not None

    @property
    def identity_index(self) -> int:
        return self.index_of(self.identity)

    @property
    def table(self) -> np.ndarray:
        """Index-level Cayley table, computed once from `op`."""
        if self._table is None:
            n = len(self.elements)
            arr = np.empty((n, n), dtype=np.intp)
            for i, a in enumerate(self.elements):
                for j, b in enumerate(self.elements):
                    c = self.op(a, b)
                    k = self.find_index(c)
                    if k is None:
                        raise InvalidStructureError(
                            f"{self.label}: {a!r} * {b!r} = {c!r} leaves the carrier"
                        )
                    arr[i, j] = k
            arr.flags.writeable = False
            self._table = arr
        return self._table

    def require_valid(self) -> FiniteGroup[T]:
        """Raise InvalidStructureError unless the table is a Latin square whose
        two-sided identity is the declared `identity`. Returns self.
        """
        if self._validated:
            return self
        from cayleyiso.models.cayley import find_identity, validate_table

        t = self.table
        if not validate_table(t):
            raise InvalidStructureError(f"{self.label}: Cayley table is not a Latin square")
        e = self.find_index(self.identity)
        found = find_identity(t)
        if found is None:
            raise InvalidStructureError(f"{self.label}: table has no two-sided identity element")
        if e != found:
            raise InvalidStructureError(
                f"{self.label}: declared identity {self.identity!r} is not the identity "
                f"of the table ({self.elements[found]!r} is)"
            )
        self._validated = True
        return self

    def cayley_table(self):
        """This group's multiplication table as a CayleyTable."""
        from cayleyiso.models.cayley import CayleyTable
        return CayleyTable(np.array(self.table), name=self.label)

    def mul(self, i: int, j: int) -> int:
        """Product of two elements given by index."""
        return int(self.table[i, j])

    def verify_axioms(self) -> list[str]:
        """Return the names of group axioms that fail (empty list if none)."""
        t = self.table
        n = len(self.elements)
        e = self.find_index(self.identity)
        failures = []
        if e is None:
            return ["identity in carrier"]
        if not (np.array_equal(t[e], np.arange(n)) and np.array_equal(t[:, e], np.arange(n))):
            failures.append("identity")
        for i, x in enumerate(self.elements):
            k = self.find_index(self.inverse(x))
            if k is None or t[i, k] != e or t[k, i] != e:
                failures.append("inverse")
                break
        if any(
            t[t[a, b], c] != t[a, t[b, c]]
            for a in range(n) for b in range(n) for c in range(n)
        ):
            failures.append("associativity")
        return failures

    def is_group(self) -> bool:
        return not self.verify_axioms()

    @classmethod
    def from_table(cls, table: Any, name: str = "") -> FiniteGroup[int]:
        """Build an index-carrier group from a validated Cayley table.

        The identity is found, not assumed to be 0.
        """
        from cayleyiso.models.cayley import find_identity, require_valid_table

        arr = np.array(require_valid_table(table), dtype=np.intp)
        e = find_identity(arr)
        if e is None:
            raise InvalidStructureError("table has no two-sided identity element")
        n = arr.shape[0]
        inverses = [int(np.flatnonzero(arr[i] == e)[0]) for i in range(n)]
        arr.flags.writeable = False

        group: FiniteGroup[int] = cls(
            elements=tuple(range(n)),
            op=lambda a, b: int(arr[a, b]),
            identity=e,
            inverse=lambda a: inverses[a],
            name=name or f"Group_{n}",
        )
        group._table = arr
        group._validated = True
        return group

    def __repr__(self) -> str:
        return f"FiniteGroup({self.label}, order={len(self.elements)})"
