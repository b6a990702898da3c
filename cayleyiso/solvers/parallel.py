"""Parallel permutation search via ProcessPoolExecutor.

The permutation space of range(n) is split by the image of element 0
into n independent partitions. Each worker computes a local minimum
serialization (canonical key) or a local list of accepted permutations
(isomorphism search); the parent reduces with a global minimum or an
ordered concatenation. Both reductions are order independent, so the
results are identical to the sequential ones.

Usage:
    from cayleyiso.solvers.parallel import parallel_canonical_key

    key = parallel_canonical_key(table, max_workers=4)
"""

from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor
from typing import TYPE_CHECKING

import numpy as np

from cayleyiso.core.permutations import (
    MAX_CANONICAL_SIZE,
    MAX_SEARCH_SIZE,
    Permutation,
    check_size,
    permutations,
)

if TYPE_CHECKING:
    from cayleyiso.core.structure import FiniteGroup


# ── Worker functions (top-level for pickling) ────────────────────────

def _canonical_worker(work_item: tuple) -> str | None:
    """Minimum serialization over the permutations with p[0] == first."""
    rows, first, max_size = work_item
    from cayleyiso.models.cayley import min_serialization

    arr = np.asarray(rows, dtype=np.intp)
    n = arr.shape[0]
    return min_serialization(
        arr, permutations(n, limit=max_size, first=first, operation="canonical_key"),
    )


def _isomorphism_worker(work_item: tuple) -> list[Permutation]:
    """Accepted permutations with p[0] == first.

    Groups are rebuilt from their index tables; element callables do not
    cross the process boundary.
    """
    source_rows, target_rows, first, max_size = work_item
    from cayleyiso.core.structure import FiniteGroup
    from cayleyiso.solvers.search import accepted_permutations

    source = FiniteGroup.from_table(source_rows)
    target = FiniteGroup.from_table(target_rows)
    n = len(source)
    return list(accepted_permutations(
        source, target, permutations(n, limit=max_size, first=first),
    ))


def _run(worker, work_items: list[tuple], max_workers: int | None) -> list:
    if max_workers is None:
        max_workers = min(len(work_items), os.cpu_count() or 4)
    max_workers = max(1, max_workers)

    # Sequential fast path: single item or single worker
    if max_workers == 1 or len(work_items) == 1:
        return [worker(item) for item in work_items]

    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(worker, work_items))


# ── Public API ───────────────────────────────────────────────────────

def parallel_canonical_key(
    table: np.ndarray,
    max_size: int = MAX_CANONICAL_SIZE,
    max_workers: int | None = None,
) -> str:
    """Canonical key of an already-validated table, computed in n partitions."""
    arr = np.asarray(table, dtype=np.intp)
    n = arr.shape[0]
    check_size(n, max_size, "canonical_key")
    rows = arr.tolist()
    work_items = [(rows, first, max_size) for first in range(n)]
    local = [s for s in _run(_canonical_worker, work_items, max_workers) if s is not None]
    return min(local)


def parallel_accepted_permutations(
    source: FiniteGroup,
    target: FiniteGroup,
    max_size: int = MAX_SEARCH_SIZE,
    max_workers: int | None = None,
) -> list[Permutation]:
    """Verified isomorphism permutations source -> target, in lexicographic order.

    Workers rebuild each group from its index table, so both groups are
    validated first: the declared identity must be the one the table has.
    """
    n = len(source)
    check_size(n, max_size, "isomorphism search")
    check_size(len(target), max_size, "isomorphism search")
    source.require_valid()
    target.require_valid()
    if len(target) != n:
        return []
    source_rows = source.table.tolist()
    target_rows = target.table.tolist()
    work_items = [(source_rows, target_rows, first, max_size) for first in range(n)]
    accepted: list[Permutation] = []
    for part in _run(_isomorphism_worker, work_items, max_workers):
        accepted.extend(part)
    return accepted
