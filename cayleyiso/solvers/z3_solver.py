"""Z3-based isomorphism finder.

Encodes a candidate bijection G -> H as an n×n boolean assignment
matrix x[a][i] ("a maps to i"), with exactly one true entry per row and
per column, identity sent to identity, and the homomorphism law as
implications x[a][i] ∧ x[b][j] -> x[a∘b][i∘j]. Every model z3 returns is
re-verified with the witness protocol before it is handed out, so this
finder serves as an independent cross-check of the brute-force search.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cayleyiso.core.maps import Isomorphism
from cayleyiso.core.permutations import MAX_SEARCH_SIZE, check_size
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.witness.protocol import build_witness

try:
    import z3
    Z3_AVAILABLE = True
except ImportError:
    Z3_AVAILABLE = False


@dataclass
class Z3SearchResult:
    """Isomorphisms found by z3 for one (source, target) pair."""

    isomorphisms: list[Isomorphism] = field(default_factory=list)
    timed_out: bool = False
    error: str = ""

    @property
    def found(self) -> bool:
        return bool(self.isomorphisms)


class Z3IsomorphismFinder:
    """Find isomorphisms between finite groups using Z3."""

    def __init__(self, timeout_ms: int = 30000, max_size: int = MAX_SEARCH_SIZE):
        self.timeout_ms = timeout_ms
        self.max_size = max_size

    def is_available(self) -> bool:
        return Z3_AVAILABLE

    def search(
        self,
        source: FiniteGroup,
        target: FiniteGroup,
        max_results: int | None = 1,
    ) -> Z3SearchResult:
        """Collect up to `max_results` isomorphisms (None = all)."""
        check_size(len(source), self.max_size, "z3 isomorphism search")
        check_size(len(target), self.max_size, "z3 isomorphism search")
        source.require_valid()
        target.require_valid()
        if not Z3_AVAILABLE:
            return Z3SearchResult(error="z3-solver not installed")
        if len(source) != len(target):
            return Z3SearchResult()

        n = len(source)
        ts, tt = source.table, target.table
        solver = z3.Solver()
        solver.set("timeout", self.timeout_ms)

        x = [[z3.Bool(f"x_{a}_{i}") for i in range(n)] for a in range(n)]
        for a in range(n):
            solver.add(z3.PbEq([(x[a][i], 1) for i in range(n)], 1))
        for i in range(n):
            solver.add(z3.PbEq([(x[a][i], 1) for a in range(n)], 1))
        solver.add(x[source.identity_index][target.identity_index])

        for a in range(n):
            for b in range(n):
                ab = int(ts[a, b])
                for i in range(n):
                    for j in range(n):
                        solver.add(z3.Implies(
                            z3.And(x[a][i], x[b][j]), x[ab][int(tt[i, j])],
                        ))

        result = Z3SearchResult()
        while max_results is None or len(result.isomorphisms) < max_results:
            status = solver.check()
            if status == z3.unknown:
                result.timed_out = True
                break
            if status != z3.sat:
                break

            model = solver.model()
            perm = tuple(
                next(i for i in range(n) if z3.is_true(model.evaluate(x[a][i], model_completion=True)))
                for a in range(n)
            )
            iso = Isomorphism.from_permutation(source, target, perm)
            report = build_witness(source, target, iso.forward, iso.backward)
            if not (report.is_isomorphism and report.is_isomorphism_by_inverse):
                result.error = f"z3 model {list(perm)} failed verification: {report.failed_laws()}"
                break
            result.isomorphisms.append(iso)

            # Block this bijection to find the next one
            solver.add(z3.Or([z3.Not(x[a][perm[a]]) for a in range(n)]))

        return result

    def find_isomorphism(self, source: FiniteGroup, target: FiniteGroup) -> Isomorphism | None:
        result = self.search(source, target, max_results=1)
        return result.isomorphisms[0] if result.isomorphisms else None

    def count_isomorphisms(self, source: FiniteGroup, target: FiniteGroup) -> int:
        return len(self.search(source, target, max_results=None).isomorphisms)
