"""Named automorphism constructors.

Each constructor tabulates a candidate map, builds its inverse with
`try_build_inverse` and hands back an Isomorphism only when the witness
protocol accepts both directions. A candidate that is not an
automorphism raises InvalidStructureError naming the failure.

Negation (x -> x^-1) and scaling on a cyclic group (x -> kx) are the
power maps with k = -1 and k = k.
"""

from __future__ import annotations

from typing import Any

from cayleyiso.core.errors import InvalidStructureError
from cayleyiso.core.maps import FiniteMap, Isomorphism
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.witness.inverse import try_build_inverse


def _certify(group: FiniteGroup, images: list[int], what: str) -> Isomorphism:
    outcome = try_build_inverse(group, group, FiniteMap(group, group, tuple(images)))
    if not outcome.ok:
        raise InvalidStructureError(f"{what} is not an automorphism of {group.label}: {outcome.explain()}")
    return Isomorphism(outcome.forward, outcome.inverse)


def identity_automorphism(group: FiniteGroup) -> Isomorphism:
    return Isomorphism.identity(group.require_valid())


def inner_automorphism(group: FiniteGroup, g: Any) -> Isomorphism:
    """Conjugation x -> g x g^-1."""
    group.require_valid()
    t = group.table
    gi = group.index_of(g)
    g_inv = group.index_of(group.inverse(g))
    images = [int(t[t[gi, x], g_inv]) for x in range(len(group))]
    return _certify(group, images, f"conjugation by {g!r}")


def inner_automorphisms(group: FiniteGroup) -> list[Isomorphism]:
    """Inn(G), one entry per distinct conjugation map, in carrier order."""
    seen: set[Isomorphism] = set()
    out = []
    for g in group.elements:
        a = inner_automorphism(group, g)
        if a not in seen:
            seen.add(a)
            out.append(a)
    return out


def _power_index(group: FiniteGroup, i: int, k: int) -> int:
    t = group.table
    if k < 0:
        i = group.index_of(group.inverse(group.elements[i]))
        k = -k
    # x^|G| is the identity
    k %= len(group)
    result = group.identity_index
    for _ in range(k):
        result = int(t[result, i])
    return result


def power_automorphism(group: FiniteGroup, k: int) -> Isomorphism:
    """x -> x^k.

    An automorphism only when G is abelian and k is coprime to the
    exponent of G; otherwise InvalidStructureError.
    """
    group.require_valid()
    images = [_power_index(group, i, k) for i in range(len(group))]
    return _certify(group, images, f"the power map x -> x^{k}")


def negation_automorphism(group: FiniteGroup) -> Isomorphism:
    return power_automorphism(group, -1)
