"""Inverse construction: given only f, build g and certify it.

Phase one scans the source carrier once, building the reverse lookup and
stopping at the first collision; then every target element must have an
entry. Only a map that survives this cheap bijectivity scan goes through
the full witness protocol, which also checks that g is a homomorphism.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from cayleyiso.core.maps import FiniteMap, MapLike
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.witness.protocol import WitnessReport, build_witness


class InverseFailure(str, Enum):
    NOT_INJECTIVE = "NOT_INJECTIVE"
    NOT_SURJECTIVE = "NOT_SURJECTIVE"
    INVERSE_NOT_HOMOMORPHISM = "INVERSE_NOT_HOMOMORPHISM"


@dataclass(frozen=True)
class InverseOutcome:
    """Result of try_build_inverse.

    On success `inverse` is set and `failure` is None. On failure
    `failure` says why; `colliding` / `missing` carry the offending
    elements for the bijectivity failures.
    """

    forward: FiniteMap
    inverse: FiniteMap | None = None
    failure: InverseFailure | None = None
    report: WitnessReport | None = None
    colliding: tuple[Any, Any] | None = None
    missing: Any = None

    @property
    def ok(self) -> bool:
        return self.inverse is not None

    def __bool__(self) -> bool:
        return self.ok

    def explain(self) -> str:
        src, dst = self.forward.source.label, self.forward.target.label
        if self.failure is None:
            return f"{src} -> {dst} is an isomorphism; inverse constructed and verified"
        if self.failure is InverseFailure.NOT_INJECTIVE:
            x, y = self.colliding
            return f"no inverse: {x!r} and {y!r} have the same image in {dst}"
        if self.failure is InverseFailure.NOT_SURJECTIVE:
            return f"no inverse: {self.missing!r} in {dst} has no preimage in {src}"
        laws = ", ".join(self.report.failed_laws()) if self.report else ""
        return f"no inverse: the bijection {src} -> {dst} fails {laws}"

    def proof(self) -> dict[str, bool]:
        """The three steps: buildable, inverse is a homomorphism, round trip."""
        buildable = self.failure not in (InverseFailure.NOT_INJECTIVE, InverseFailure.NOT_SURJECTIVE)
        if self.report is None or not self.report.has_inverse:
            return {"buildable": buildable, "inverse_is_homomorphism": False, "round_trip": False}
        return {
            "buildable": buildable,
            "inverse_is_homomorphism": bool(self.report.inverse_is_homomorphism),
            "round_trip": bool(self.report.left_identity_holds and self.report.right_identity_holds),
        }


def try_build_inverse(source: FiniteGroup, target: FiniteGroup, f: MapLike) -> InverseOutcome:
    """Build g with g∘f = id and f∘g = id, then verify it with the witness protocol."""
    source.require_valid()
    target.require_valid()
    fm = FiniteMap.tabulate(source, target, f)

    reverse: dict[int, int] = {}
    for i, j in enumerate(fm.images):
        if j in reverse:
            return InverseOutcome(
                forward=fm,
                failure=InverseFailure.NOT_INJECTIVE,
                colliding=(source.elements[reverse[j]], source.elements[i]),
            )
        reverse[j] = i

    for j in range(len(target)):
        if j not in reverse:
            return InverseOutcome(
                forward=fm,
                failure=InverseFailure.NOT_SURJECTIVE,
                missing=target.elements[j],
            )

    candidate = FiniteMap(target, source, tuple(reverse[j] for j in range(len(target))))
    report = build_witness(source, target, fm, candidate)
    if report.is_isomorphism and report.is_isomorphism_by_inverse:
        return InverseOutcome(forward=fm, inverse=candidate, report=report)
    return InverseOutcome(
        forward=fm,
        failure=InverseFailure.INVERSE_NOT_HOMOMORPHISM,
        report=report,
    )
