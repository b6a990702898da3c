"""Tests for the parallel permutation search and the Z3 isomorphism finder."""

import pytest

from cayleyiso.core.errors import InvalidStructureError, StructureTooLargeError
from cayleyiso.core.permutations import permutations
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.library.known_structures import (
    cyclic, dihedral, direct_product, klein_four, symmetric,
)
from cayleyiso.models.cayley import canonical_key
from cayleyiso.solvers.parallel import parallel_accepted_permutations, parallel_canonical_key
from cayleyiso.solvers.search import (
    accepted_permutations, count_isomorphisms, enumerate_automorphisms, enumerate_isomorphisms,
)
from cayleyiso.witness.protocol import build_witness


class TestParallel:
    def test_canonical_key_matches_sequential(self):
        for g in [cyclic(5), symmetric(3), direct_product(cyclic(2), cyclic(3))]:
            assert parallel_canonical_key(g.table, max_workers=2) == canonical_key(g.table)

    def test_workers_option(self):
        t = dihedral(3).table
        assert canonical_key(t, workers=2) == canonical_key(t)

    def test_single_worker_fast_path(self):
        t = klein_four().table
        assert parallel_canonical_key(t, max_workers=1) == canonical_key(t)

    def test_isomorphisms_match_sequential(self):
        d3, s3 = dihedral(3), symmetric(3)
        assert enumerate_isomorphisms(d3, s3, workers=2) == enumerate_isomorphisms(d3, s3)

    def test_automorphisms_match_sequential(self):
        g = direct_product(cyclic(2), cyclic(4))
        parallel = enumerate_automorphisms(g, workers=2)
        assert parallel == enumerate_automorphisms(g)
        assert len(parallel) == 8

    def test_accepted_permutations_in_lexicographic_order(self):
        c5 = cyclic(5)
        sequential = list(accepted_permutations(c5, c5, permutations(5)))
        assert parallel_accepted_permutations(c5, c5, max_workers=2) == sequential

    def test_different_sizes(self):
        assert parallel_accepted_permutations(cyclic(2), cyclic(3), max_workers=2) == []

    def test_ceiling_checked_in_parent(self):
        with pytest.raises(StructureTooLargeError):
            parallel_canonical_key(cyclic(9).table, max_workers=2)
        with pytest.raises(StructureTooLargeError):
            parallel_accepted_permutations(cyclic(11), cyclic(11), max_workers=2)

    def test_invalid_structure_checked_in_parent(self):
        magma = FiniteGroup(elements=range(3), op=lambda a, b: 0, identity=0, inverse=lambda a: a)
        with pytest.raises(InvalidStructureError):
            parallel_accepted_permutations(magma, cyclic(3), max_workers=2)


class TestZ3Finder:
    """Z3 results are cross-checked against the brute-force search."""

    @pytest.fixture
    def finder(self):
        from cayleyiso.solvers.z3_solver import Z3IsomorphismFinder
        finder = Z3IsomorphismFinder(timeout_ms=10000)
        if not finder.is_available():
            pytest.skip("z3-solver not installed")
        return finder

    def test_finds_verified_isomorphism(self, finder):
        d3, s3 = dihedral(3), symmetric(3)
        iso = finder.find_isomorphism(d3, s3)
        assert iso is not None
        report = build_witness(d3, s3, iso.forward, iso.backward)
        assert report.is_isomorphism_by_inverse

    def test_no_isomorphism(self, finder):
        assert finder.find_isomorphism(cyclic(4), klein_four()) is None

    def test_different_sizes(self, finder):
        result = finder.search(cyclic(2), cyclic(3))
        assert not result.found
        assert not result.timed_out

    @pytest.mark.parametrize("g, h", [
        (klein_four(), klein_four()),
        (cyclic(6), cyclic(6)),
        (dihedral(3), symmetric(3)),
    ])
    def test_counts_match_brute_force(self, finder, g, h):
        assert finder.count_isomorphisms(g, h) == count_isomorphisms(g, h)

    def test_results_are_distinct(self, finder):
        result = finder.search(klein_four(), klein_four(), max_results=None)
        assert len(set(result.isomorphisms)) == len(result.isomorphisms) == 6

    def test_ceiling(self):
        from cayleyiso.solvers.z3_solver import Z3IsomorphismFinder
        with pytest.raises(StructureTooLargeError):
            Z3IsomorphismFinder(max_size=4).find_isomorphism(cyclic(5), cyclic(5))

    def test_invalid_structure(self):
        from cayleyiso.solvers.z3_solver import Z3IsomorphismFinder
        magma = FiniteGroup(elements=range(3), op=lambda a, b: 0, identity=0, inverse=lambda a: a)
        with pytest.raises(InvalidStructureError):
            Z3IsomorphismFinder().find_isomorphism(magma, cyclic(3))
