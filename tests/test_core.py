"""Tests for core data structures: permutations, FiniteGroup, maps, errors, config."""

import pytest

from cayleyiso.core.config import EngineConfig
from cayleyiso.core.errors import (
    CayleyIsoError, InvalidStructureError, RegistryConflictError,
    StructureTooLargeError, UndefinedInverseError,
)
from cayleyiso.core.maps import FiniteMap, Isomorphism
from cayleyiso.core.permutations import (
    compose_permutations, identity_permutation, inverse_permutation,
    is_permutation, permutation_count, permutations,
)
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.library.known_structures import (
    cyclic, dihedral, direct_product, klein_four, quaternion, symmetric,
)
from cayleyiso.models.cayley import CayleyTable

# A loop of order 5: Latin square with identity 0, but (1*1)*2 != 1*(1*2).
NON_ASSOCIATIVE_LOOP = [
    [0, 1, 2, 3, 4],
    [1, 0, 3, 4, 2],
    [2, 4, 0, 1, 3],
    [3, 2, 4, 0, 1],
    [4, 3, 1, 2, 0],
]


class TestPermutations:
    def test_count(self):
        assert len(list(permutations(4))) == permutation_count(4) == 24

    def test_lexicographic_starts_with_identity(self):
        assert next(permutations(5)) == identity_permutation(5)

    def test_first_partition(self):
        part = list(permutations(4, first=2))
        assert len(part) == 6
        assert all(p[0] == 2 for p in part)

    def test_partitions_cover_everything(self):
        everything = set(permutations(4))
        parts = set()
        for first in range(4):
            parts |= set(permutations(4, first=first))
        assert parts == everything

    def test_ceiling_checked_before_enumerating(self):
        with pytest.raises(StructureTooLargeError) as exc_info:
            list(permutations(11))
        assert exc_info.value.size == 11
        assert exc_info.value.limit == 10

    def test_is_permutation(self):
        assert is_permutation([2, 0, 1], 3)
        assert not is_permutation([0, 0, 1], 3)
        assert not is_permutation([0, 1], 3)
        assert not is_permutation([0, 1.5, 2], 3)
        assert not is_permutation(None, 3)

    def test_inverse_and_compose(self):
        p = (2, 0, 3, 1)
        q = inverse_permutation(p)
        assert compose_permutations(p, q) == identity_permutation(4)
        assert compose_permutations(q, p) == identity_permutation(4)


class TestFiniteGroup:
    def test_known_groups_satisfy_axioms(self):
        for g in [cyclic(1), cyclic(6), klein_four(), dihedral(4), symmetric(3), quaternion()]:
            assert g.verify_axioms() == [], g.label

    def test_direct_product(self):
        g = direct_product(cyclic(2), cyclic(3))
        assert len(g) == 6
        assert g.is_group()
        assert g.label == "C2xC3"

    def test_empty_carrier_rejected(self):
        with pytest.raises(InvalidStructureError):
            FiniteGroup(elements=[], op=lambda a, b: a, identity=0, inverse=lambda a: a)

    def test_duplicate_element_rejected(self):
        with pytest.raises(InvalidStructureError):
            FiniteGroup(elements=[0, 1, 1], op=lambda a, b: a, identity=0, inverse=lambda a: a)

    def test_op_leaving_carrier(self):
        g = FiniteGroup(elements=range(3), op=lambda a, b: a + b, identity=0, inverse=lambda a: -a)
        with pytest.raises(InvalidStructureError):
            g.table

    def test_index_of_missing_element(self):
        with pytest.raises(UndefinedInverseError):
            cyclic(4).index_of(7)
        with pytest.raises(LookupError):
            cyclic(4).index_of(7)
        assert cyclic(4).find_index(7) is None

    def test_table_is_read_only(self):
        t = cyclic(3).table
        with pytest.raises(ValueError):
            t[0, 0] = 1

    def test_custom_equality(self):
        g = FiniteGroup(
            elements=[0, 1],
            op=lambda a, b: (a + b) % 2,
            identity=0,
            inverse=lambda a: a,
            eq=lambda a, b: a % 2 == b % 2,
        )
        assert g.index_of(3) == 1
        assert g.is_group()

    def test_from_table_finds_identity(self):
        # element 1 is the identity here
        g = FiniteGroup.from_table([[1, 0], [0, 1]], name="flip")
        assert g.identity == 1
        assert g.is_group()
        assert g.label == "flip"

    def test_from_table_without_identity(self):
        with pytest.raises(InvalidStructureError):
            FiniteGroup.from_table([[0, 2, 1], [2, 1, 0], [1, 0, 2]])

    def test_from_table_rejects_non_latin(self):
        with pytest.raises(InvalidStructureError):
            FiniteGroup.from_table([[0, 0], [0, 0]])

    def test_non_associative_loop(self):
        g = FiniteGroup.from_table(NON_ASSOCIATIVE_LOOP)
        assert g.verify_axioms() == ["associativity"]
        assert not g.is_group()

    def test_cayley_table_roundtrip(self):
        ct = cyclic(3).cayley_table()
        assert ct == CayleyTable([[0, 1, 2], [1, 2, 0], [2, 0, 1]])
        assert ct.name == "C3"


class TestMaps:
    def test_tabulate(self):
        f = FiniteMap.tabulate(cyclic(8), cyclic(4), lambda x: x % 4)
        assert f.images == (0, 1, 2, 3, 0, 1, 2, 3)
        assert f(5) == 1
        assert not f.is_bijective()

    def test_tabulate_outside_target(self):
        with pytest.raises(UndefinedInverseError):
            FiniteMap.tabulate(cyclic(4), cyclic(4), lambda x: x + 10)

    def test_wrong_number_of_images(self):
        with pytest.raises(UndefinedInverseError):
            FiniteMap(cyclic(4), cyclic(4), (0, 1))

    def test_image_index_out_of_range(self):
        with pytest.raises(UndefinedInverseError):
            FiniteMap(cyclic(2), cyclic(2), (0, 5))

    def test_compose(self):
        c4 = cyclic(4)
        double = FiniteMap.tabulate(c4, c4, lambda x: (2 * x) % 4)
        triple = FiniteMap.tabulate(c4, c4, lambda x: (3 * x) % 4)
        assert triple.compose(triple) == FiniteMap.identity(c4)
        assert double.compose(triple).images == (0, 2, 0, 2)

    def test_compose_needs_matching_carriers(self):
        with pytest.raises(UndefinedInverseError):
            FiniteMap.identity(klein_four()).compose(FiniteMap.identity(cyclic(4)))
        c4 = cyclic(4)
        assert FiniteMap.identity(c4).compose(FiniteMap.identity(cyclic(4))) == FiniteMap.identity(c4)

    def test_pointwise_equality(self):
        c3 = cyclic(3)
        a = FiniteMap(c3, c3, (0, 2, 1))
        b = FiniteMap.tabulate(c3, c3, lambda x: (-x) % 3)
        assert a == b
        assert hash(a) == hash(b)

    def test_isomorphism_inverse(self):
        c5 = cyclic(5)
        iso = Isomorphism.from_permutation(c5, c5, (0, 2, 4, 1, 3))
        assert iso(1) == 2
        assert iso.inverse()(2) == 1
        assert iso.compose(iso.inverse()) == Isomorphism.identity(c5)
        assert iso.permutation == (0, 2, 4, 1, 3)

    def test_isomorphism_equality_by_forward(self):
        c3 = cyclic(3)
        a = Isomorphism.from_permutation(c3, c3, (0, 2, 1))
        b = Isomorphism(FiniteMap(c3, c3, (0, 2, 1)), FiniteMap.identity(c3))
        assert a == b
        assert len({a, b}) == 1


class TestErrorsAndConfig:
    def test_hierarchy(self):
        for cls in (InvalidStructureError, StructureTooLargeError,
                    UndefinedInverseError, RegistryConflictError):
            assert issubclass(cls, CayleyIsoError)
        assert issubclass(InvalidStructureError, ValueError)
        assert issubclass(RegistryConflictError, KeyError)

    def test_too_large_message(self):
        err = StructureTooLargeError(9, 8, "canonical_key")
        assert "canonical_key" in str(err)
        assert err.operation == "canonical_key"

    def test_conflict_message_is_readable(self):
        err = RegistryConflictError("0,1|1,0", "C2", "Z2")
        assert str(err).startswith("key '0,1|1,0'")

    def test_config_defaults(self):
        config = EngineConfig()
        assert config.max_canonical_size == 8
        assert config.max_search_size == 10
        assert config.workers is None

    def test_config_validation(self):
        with pytest.raises(ValueError):
            EngineConfig(max_search_size=0)
        with pytest.raises(ValueError):
            EngineConfig(workers=0)
