"""Kernels, images, cosets and the first isomorphism theorem.

Supplies the coset data used by the well-definedness flavour of witness
checks: for f: G -> H, the induced map G/ker(f) -> im(f), [g] -> f(g),
must be well defined and bijective.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from cayleyiso.core.errors import InvalidStructureError, UndefinedInverseError
from cayleyiso.core.maps import FiniteMap, MapLike
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.witness.inverse import InverseOutcome, try_build_inverse
from cayleyiso.witness.protocol import WitnessReport, build_witness


class Coset:
    """The left coset g·N, stored as a set of carrier indices of G.

    Cosets compare by members; the representative is just a label.
    """

    __slots__ = ("representative", "members")

    def __init__(self, representative: Any, members: Iterable[int]):
        self.representative = representative
        self.members = frozenset(members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coset):
            return NotImplemented
        return self.members == other.members

    def __hash__(self) -> int:
        return hash(self.members)

    def __repr__(self) -> str:
        return f"[{self.representative!r}]"


def is_normal_subgroup(group: FiniteGroup, indices: Iterable[int]) -> bool:
    sub = set(indices)
    t = group.table
    if group.identity_index not in sub:
        return False
    if any(int(t[a, b]) not in sub for a in sub for b in sub):
        return False
    inv = [group.index_of(group.inverse(x)) for x in group.elements]
    return all(int(t[t[g, k], inv[g]]) in sub for g in range(len(group)) for k in sub)


class QuotientGroup(FiniteGroup):
    """G/N as a FiniteGroup whose elements are Coset values."""

    parent: FiniteGroup

    def coset_of(self, x: Any) -> Coset:
        """The coset containing `x`; UndefinedInverseError if `x` is not in G."""
        i = self.parent.find_index(x)
        if i is None:
            raise UndefinedInverseError(f"{x!r} lies in no coset of {self.label}")
        for c in self.elements:
            if i in c.members:
                return c
        raise UndefinedInverseError(f"{x!r} lies in no computed coset of {self.label}")

    def representative_of(self, coset: Coset) -> Any:
        for c in self.elements:
            if c == coset:
                return c.representative
        raise UndefinedInverseError(f"{coset!r} is not a coset of {self.label}")


def quotient_group(group: FiniteGroup, normal: Iterable[Any], name: str = "") -> QuotientGroup:
    """G/N for a normal subgroup N given by its elements."""
    n_idx = {group.index_of(x) for x in normal}
    if not is_normal_subgroup(group, n_idx):
        raise InvalidStructureError(f"{sorted(n_idx)} is not a normal subgroup of {group.label}")

    t = group.table
    seen: set[int] = set()
    cosets: list[Coset] = []
    for g in range(len(group)):
        if g in seen:
            continue
        members = {int(t[g, k]) for k in n_idx}
        seen |= members
        cosets.append(Coset(group.elements[g], members))

    quotient: QuotientGroup

    def op(a: Coset, b: Coset) -> Coset:
        return quotient.coset_of(group.op(a.representative, b.representative))

    def inverse(a: Coset) -> Coset:
        return quotient.coset_of(group.inverse(a.representative))

    identity = next(c for c in cosets if group.identity_index in c.members)
    quotient = QuotientGroup(
        elements=cosets,
        op=op,
        identity=identity,
        inverse=inverse,
        name=name or f"{group.label}/N",
    )
    quotient.parent = group
    return quotient


def kernel(source: FiniteGroup, target: FiniteGroup, f: MapLike) -> list[Any]:
    """Elements of G sent to the identity of H."""
    fm = FiniteMap.tabulate(source, target, f)
    e = target.identity_index
    return [source.elements[i] for i, j in enumerate(fm.images) if j == e]


def image(source: FiniteGroup, target: FiniteGroup, f: MapLike) -> FiniteGroup:
    """im(f) as a subgroup of H, elements in target carrier order."""
    fm = FiniteMap.tabulate(source, target, f)
    hit = sorted(set(fm.images))
    return FiniteGroup(
        elements=[target.elements[j] for j in hit],
        op=target.op,
        identity=target.identity,
        inverse=target.inverse,
        eq=target.eq,
        name=f"im({source.label} -> {target.label})",
    )


@dataclass(frozen=True)
class FirstIsomorphism:
    """G/ker(f) ≅ im(f), with the induced map and its verification."""

    kernel: list[Any]
    quotient: QuotientGroup
    image: FiniteGroup
    induced: FiniteMap
    well_defined: bool
    report: WitnessReport
    inverse: InverseOutcome

    @property
    def holds(self) -> bool:
        return self.well_defined and self.report.is_isomorphism and self.inverse.ok


def first_isomorphism(source: FiniteGroup, target: FiniteGroup, f: MapLike) -> FirstIsomorphism:
    """Build G/ker(f) -> im(f), [g] -> f(g), and certify it."""
    fm = FiniteMap.tabulate(source, target, f)
    ker = kernel(source, target, fm)
    quotient = quotient_group(source, ker, name=f"{source.label}/ker")
    im = image(source, target, fm)

    well_defined = all(
        len({fm.images[i] for i in c.members}) == 1 for c in quotient.elements
    )
    induced = FiniteMap.tabulate(quotient, im, lambda c: fm(c.representative))
    return FirstIsomorphism(
        kernel=ker,
        quotient=quotient,
        image=im,
        induced=induced,
        well_defined=well_defined,
        report=build_witness(quotient, im, induced),
        inverse=try_build_inverse(quotient, im, induced),
    )
