"""Homomorphism / isomorphism witness protocol.

`build_witness(G, H, f, g)` checks, over the entire carriers:

1. f is a homomorphism:         f(x∘y) = f(x)∘f(y)
2. g is a homomorphism:         g(x∘y) = g(x)∘g(y)      (g supplied)
3. left identity:               g(f(x)) = x             (g supplied)
4. right identity:              f(g(y)) = y             (g supplied)
5. f is injective
6. f is surjective

A negative answer is a report, never an exception. Structures whose table
is not a Latin square with the declared identity raise
InvalidStructureError before any check runs; maps that leave the target
carrier are ill-formed calls and raise UndefinedInverseError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

from cayleyiso.core.maps import FiniteMap, MapLike
from cayleyiso.core.structure import FiniteGroup

LAW_NAMES = {
    "is_homomorphism": "forward map is a homomorphism",
    "inverse_is_homomorphism": "inverse map is a homomorphism",
    "left_identity_holds": "inverse after forward is the identity",
    "right_identity_holds": "forward after inverse is the identity",
    "is_injective": "forward map is injective",
    "is_surjective": "forward map is surjective",
}


@dataclass(frozen=True)
class WitnessReport:
    """Verdicts of one verification call. Inverse-related fields are None
    when no inverse map was supplied.
    """

    is_homomorphism: bool
    is_injective: bool
    is_surjective: bool
    inverse_is_homomorphism: bool | None = None
    left_identity_holds: bool | None = None
    right_identity_holds: bool | None = None
    source_label: str = ""
    target_label: str = ""
    counterexamples: dict[str, tuple[Any, ...]] = field(default_factory=dict, compare=False)

    @property
    def is_isomorphism(self) -> bool:
        """Bijective homomorphism."""
        return self.is_homomorphism and self.is_injective and self.is_surjective

    @property
    def has_inverse(self) -> bool:
        return self.inverse_is_homomorphism is not None

    @property
    def is_isomorphism_by_inverse(self) -> bool | None:
        """Homomorphism with a homomorphic two-sided inverse; None without an inverse."""
        if not self.has_inverse:
            return None
        return bool(
            self.is_homomorphism
            and self.inverse_is_homomorphism
            and self.left_identity_holds
            and self.right_identity_holds
        )

    def failed_laws(self) -> list[str]:
        """Names of the checks that answered False, in protocol order."""
        order = [
            "is_homomorphism", "inverse_is_homomorphism",
            "left_identity_holds", "right_identity_holds",
            "is_injective", "is_surjective",
        ]
        return [name for name in order if getattr(self, name) is False]

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source_label,
            "target": self.target_label,
            "is_homomorphism": self.is_homomorphism,
            "inverse_is_homomorphism": self.inverse_is_homomorphism,
            "left_identity_holds": self.left_identity_holds,
            "right_identity_holds": self.right_identity_holds,
            "is_injective": self.is_injective,
            "is_surjective": self.is_surjective,
            "is_isomorphism": self.is_isomorphism,
            "is_isomorphism_by_inverse": self.is_isomorphism_by_inverse,
        }


# ── Index-level checks ────────────────────────────────────────────────

def homomorphism_counterexample(
    source: FiniteGroup, target: FiniteGroup, images: Sequence[int],
) -> tuple[int, int] | None:
    """First (i, j) with f(i∘j) != f(i)∘f(j), by index, or None."""
    f = np.asarray(images, dtype=np.intp)
    lhs = f[source.table]
    rhs = target.table[np.ix_(f, f)]
    bad = np.argwhere(lhs != rhs)
    if len(bad) == 0:
        return None
    i, j = bad[0]
    return int(i), int(j)


def images_are_homomorphic(source: FiniteGroup, target: FiniteGroup, images: Sequence[int]) -> bool:
    return homomorphism_counterexample(source, target, images) is None


def injectivity_counterexample(images: Sequence[int]) -> tuple[int, int] | None:
    """First pair of distinct source indices with the same image, or None."""
    seen: dict[int, int] = {}
    for i, j in enumerate(images):
        if j in seen:
            return seen[j], i
        seen[j] = i
    return None


def surjectivity_counterexample(images: Sequence[int], target_size: int) -> int | None:
    """Smallest target index with no preimage, or None."""
    hit = set(images)
    for j in range(target_size):
        if j not in hit:
            return j
    return None


# ── Public protocol ───────────────────────────────────────────────────

def is_homomorphism(source: FiniteGroup, target: FiniteGroup, f: MapLike) -> bool:
    """Check f(x∘y) = f(x)∘f(y) for every pair of source elements."""
    source.require_valid()
    target.require_valid()
    fm = FiniteMap.tabulate(source, target, f)
    return images_are_homomorphic(source, target, fm.images)


def build_witness(
    source: FiniteGroup,
    target: FiniteGroup,
    f: MapLike,
    g: MapLike | None = None,
) -> WitnessReport:
    """Run every law check for f (and g, when given) and report the verdicts."""
    source.require_valid()
    target.require_valid()
    fm = FiniteMap.tabulate(source, target, f)
    gm = FiniteMap.tabulate(target, source, g) if g is not None else None
    fi = fm.images
    xs, ys = source.elements, target.elements
    counterexamples: dict[str, tuple[Any, ...]] = {}

    hom = homomorphism_counterexample(source, target, fi)
    if hom is not None:
        counterexamples["is_homomorphism"] = (xs[hom[0]], xs[hom[1]])

    collision = injectivity_counterexample(fi)
    if collision is not None:
        counterexamples["is_injective"] = (xs[collision[0]], xs[collision[1]])

    missing = surjectivity_counterexample(fi, len(target))
    if missing is not None:
        counterexamples["is_surjective"] = (ys[missing],)

    inv_hom = left = right = None
    if gm is not None:
        gi = gm.images
        ghom = homomorphism_counterexample(target, source, gi)
        inv_hom = ghom is None
        if ghom is not None:
            counterexamples["inverse_is_homomorphism"] = (ys[ghom[0]], ys[ghom[1]])

        left_bad = [i for i in range(len(source)) if gi[fi[i]] != i]
        left = not left_bad
        if left_bad:
            counterexamples["left_identity_holds"] = (xs[left_bad[0]],)

        right_bad = [j for j in range(len(target)) if fi[gi[j]] != j]
        right = not right_bad
        if right_bad:
            counterexamples["right_identity_holds"] = (ys[right_bad[0]],)

    return WitnessReport(
        is_homomorphism=hom is None,
        is_injective=collision is None,
        is_surjective=missing is None,
        inverse_is_homomorphism=inv_hom,
        left_identity_holds=left,
        right_identity_holds=right,
        source_label=source.label,
        target_label=target.label,
        counterexamples=counterexamples,
    )
