"""Brute-force isomorphism and automorphism search.

Every permutation of the carrier is a candidate bijection G -> H. A
candidate is fast-rejected unless it sends identity to identity; the
survivors are accepted only when both the forward map and the map of
the inverse permutation are homomorphisms. Accepted maps are
deduplicated by pointwise equality of the forward map.

Only feasible for small carriers: the ceiling is checked before any
enumeration starts.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from cayleyiso.core.maps import Isomorphism
from cayleyiso.core.permutations import (
    MAX_SEARCH_SIZE,
    Permutation,
    check_size,
    inverse_permutation,
    permutations,
)
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.witness.protocol import images_are_homomorphic

log = logging.getLogger(__name__)


def accepted_permutations(
    source: FiniteGroup,
    target: FiniteGroup,
    candidates: Iterable[Permutation],
) -> Iterator[Permutation]:
    """Filter candidate permutations down to verified isomorphisms."""
    e_src = source.identity_index
    e_dst = target.identity_index
    checked = rejected = 0
    for p in candidates:
        if p[e_src] != e_dst:
            rejected += 1
            continue
        checked += 1
        if not images_are_homomorphic(source, target, p):
            continue
        if not images_are_homomorphic(target, source, inverse_permutation(p)):
            continue
        yield p
    log.debug(
        "%s -> %s: %d candidates fast-rejected, %d fully checked",
        source.label, target.label, rejected, checked,
    )


def dedupe(isos: Iterable[Isomorphism]) -> list[Isomorphism]:
    """Keep the first of each pointwise-equal forward map, preserving order."""
    seen: set[tuple[int, ...]] = set()
    out = []
    for iso in isos:
        key = iso.forward.images
        if key in seen:
            continue
        seen.add(key)
        out.append(iso)
    return out


def _check_pair(source: FiniteGroup, target: FiniteGroup, max_size: int) -> bool:
    """Size and validity guard; False when the carriers cannot be in bijection."""
    check_size(len(source), max_size, "isomorphism search")
    check_size(len(target), max_size, "isomorphism search")
    source.require_valid()
    target.require_valid()
    return len(source) == len(target)


def enumerate_isomorphisms(
    source: FiniteGroup,
    target: FiniteGroup,
    max_size: int = MAX_SEARCH_SIZE,
    workers: int | None = None,
) -> list[Isomorphism]:
    """All isomorphisms source -> target, each with its verified inverse."""
    if not _check_pair(source, target, max_size):
        return []
    n = len(source)
    log.debug("Searching isomorphisms %s -> %s over %d! permutations", source.label, target.label, n)

    if workers is not None and workers > 1 and n > 1:
        from cayleyiso.solvers.parallel import parallel_accepted_permutations
        perms = parallel_accepted_permutations(source, target, max_size=max_size, max_workers=workers)
    else:
        perms = accepted_permutations(source, target, permutations(n, limit=max_size))

    return dedupe(Isomorphism.from_permutation(source, target, p) for p in perms)


def enumerate_automorphisms(
    group: FiniteGroup,
    max_size: int = MAX_SEARCH_SIZE,
    workers: int | None = None,
) -> list[Isomorphism]:
    """Aut(G) as a list; the identity automorphism comes first."""
    return enumerate_isomorphisms(group, group, max_size=max_size, workers=workers)


def find_isomorphism(
    source: FiniteGroup,
    target: FiniteGroup,
    max_size: int = MAX_SEARCH_SIZE,
) -> Isomorphism | None:
    """First isomorphism found, or None. Stops at the first hit."""
    if not _check_pair(source, target, max_size):
        return None
    for p in accepted_permutations(source, target, permutations(len(source), limit=max_size)):
        return Isomorphism.from_permutation(source, target, p)
    return None


def are_isomorphic(source: FiniteGroup, target: FiniteGroup, max_size: int = MAX_SEARCH_SIZE) -> bool:
    """Decide G ≅ H; element-order spectra are compared before searching."""
    from cayleyiso.models.cayley import order_spectrum

    if not _check_pair(source, target, max_size):
        return False
    if order_spectrum(source.table) != order_spectrum(target.table):
        log.debug("%s and %s differ in order spectrum", source.label, target.label)
        return False
    return find_isomorphism(source, target, max_size=max_size) is not None


def count_isomorphisms(
    source: FiniteGroup,
    target: FiniteGroup,
    max_size: int = MAX_SEARCH_SIZE,
    workers: int | None = None,
) -> int:
    return len(enumerate_isomorphisms(source, target, max_size=max_size, workers=workers))


def automorphism_group(
    group: FiniteGroup,
    max_size: int = MAX_SEARCH_SIZE,
    workers: int | None = None,
) -> FiniteGroup[Isomorphism]:
    """Aut(G) under composition, as a FiniteGroup of automorphisms."""
    autos = enumerate_automorphisms(group, max_size=max_size, workers=workers)
    identity = Isomorphism.identity(group)
    return FiniteGroup(
        elements=autos,
        op=lambda a, b: a.compose(b),
        identity=identity,
        inverse=lambda a: a.inverse(),
        name=f"Aut({group.label})",
    )
