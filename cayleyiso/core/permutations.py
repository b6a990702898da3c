"""Permutation primitive shared by canonicalization and map search.

Every factorial-time loop in the package goes through `permutations()`,
which checks the size ceiling before yielding anything.
"""

from __future__ import annotations

from itertools import permutations as _itertools_permutations
from math import factorial
from typing import Iterator, Sequence

from cayleyiso.core.errors import StructureTooLargeError

# 8! = 40320 relabelings, each serialized; 10! = 3628800 candidate maps,
# most rejected on the identity check.
MAX_CANONICAL_SIZE = 8
MAX_SEARCH_SIZE = 10

Permutation = tuple[int, ...]


def check_size(n: int, limit: int, operation: str = "search") -> None:
    """Raise StructureTooLargeError if `n` exceeds `limit`."""
    if n > limit:
        raise StructureTooLargeError(n, limit, operation)


def permutations(
    n: int,
    limit: int = MAX_SEARCH_SIZE,
    first: int | None = None,
    operation: str = "search",
) -> Iterator[Permutation]:
    """Lazily yield every permutation of range(n) in lexicographic order.

    If `first` is given, only permutations with p[0] == first are yielded;
    this is the partition used by the parallel workers.
    """
    check_size(n, limit, operation)
    if first is None:
        yield from _itertools_permutations(range(n))
        return
    if not 0 <= first < n:
        return
    rest = [i for i in range(n) if i != first]
    for tail in _itertools_permutations(rest):
        yield (first,) + tail


def permutation_count(n: int) -> int:
    return factorial(n)


def is_permutation(p: Sequence[int], n: int) -> bool:
    """True iff `p` is a bijection of range(n) given as a sequence of ints."""
    try:
        if len(p) != n:
            return False
        values = [int(x) for x in p]
    except (TypeError, ValueError):
        return False
    if any(v != x for v, x in zip(values, p)):
        return False
    return sorted(values) == list(range(n))


def inverse_permutation(p: Sequence[int]) -> Permutation:
    """Return q with q[p[i]] == i."""
    inv = [0] * len(p)
    for i, pi in enumerate(p):
        inv[pi] = i
    return tuple(inv)


def compose_permutations(p: Sequence[int], q: Sequence[int]) -> Permutation:
    """Return p∘q, i.e. i -> p[q[i]]."""
    return tuple(p[qi] for qi in q)


def identity_permutation(n: int) -> Permutation:
    return tuple(range(n))
