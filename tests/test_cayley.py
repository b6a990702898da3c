"""Tests for Cayley table validation, relabeling and canonical keys."""

import itertools

import numpy as np
import pytest

from cayleyiso.core.errors import InvalidStructureError, StructureTooLargeError
from cayleyiso.core.permutations import inverse_permutation
from cayleyiso.library.known_structures import cyclic, dihedral, klein_four, symmetric
from cayleyiso.models.cayley import (
    CayleyTable, canonical_key, element_order, find_identity, min_serialization,
    order_spectrum, relabel, serialize_table, validate_table,
)

Z3_TABLE = [[0, 1, 2], [1, 2, 0], [2, 0, 1]]


class TestValidateTable:
    def test_group_tables(self):
        assert validate_table(Z3_TABLE)
        assert validate_table(np.array(Z3_TABLE))
        assert validate_table(klein_four().table)

    @pytest.mark.parametrize("table", [
        [],
        [[0, 1], [1]],
        [[0, 1], [1, 1]],
        [[0, 1], [1, 2]],
        [[0, -1], [-1, 0]],
        [[0.0, 1], [1, 0]],
        [[True, False], [False, True]],
        [["0", "1"], ["1", "0"]],
        None,
        42,
        CayleyTable(np.array([0, 1])),
        CayleyTable(np.array(5)),
    ])
    def test_malformed_tables_answer_false(self, table):
        assert validate_table(table) is False

    def test_latin_square_without_identity_is_valid(self):
        assert validate_table([[0, 2, 1], [2, 1, 0], [1, 0, 2]])

    def test_cayley_table_object(self):
        assert CayleyTable(Z3_TABLE).is_latin_square()
        assert not CayleyTable([[0, 0], [0, 0]]).is_latin_square()


class TestRelabel:
    def test_swap_first_two_elements(self):
        assert relabel(Z3_TABLE, [1, 0, 2]) == [[2, 0, 1], [0, 1, 2], [1, 2, 0]]

    def test_identity_permutation(self):
        assert relabel(Z3_TABLE, [0, 1, 2]) == Z3_TABLE

    def test_relabel_law(self):
        t = dihedral(3).table.tolist()
        p = [3, 5, 0, 1, 4, 2]
        out = relabel(t, p)
        for a in range(6):
            for b in range(6):
                assert out[p[a]][p[b]] == p[t[a][b]]

    def test_round_trip(self):
        t = klein_four().table.tolist()
        for p in itertools.permutations(range(4)):
            assert relabel(relabel(t, p), inverse_permutation(p)) == t

    def test_bad_permutation(self):
        with pytest.raises(InvalidStructureError):
            relabel(Z3_TABLE, [0, 0, 1])
        with pytest.raises(InvalidStructureError):
            relabel(Z3_TABLE, [0, 1])

    def test_invalid_table(self):
        with pytest.raises(InvalidStructureError):
            relabel([[0, 0], [0, 0]], [1, 0])

    def test_cayley_table_relabel(self):
        ct = CayleyTable(Z3_TABLE, name="Z3")
        out = ct.relabel([1, 0, 2])
        assert out == CayleyTable([[2, 0, 1], [0, 1, 2], [1, 2, 0]])
        assert out.name == "Z3"


class TestCanonicalKey:
    def test_serialization_format(self):
        assert serialize_table(Z3_TABLE) == "0,1,2|1,2,0|2,0,1"

    def test_small_keys(self):
        assert canonical_key([[0]]) == "0"
        assert canonical_key([[0, 1], [1, 0]]) == "0,1|1,0"
        assert canonical_key(Z3_TABLE) == "0,1,2|1,2,0|2,0,1"
        assert canonical_key(klein_four().table) == "0,1,2,3|1,0,3,2|2,3,0,1|3,2,1,0"

    def test_small_groups_are_distinct(self):
        keys = {canonical_key(g.table) for g in [cyclic(2), cyclic(3), klein_four(), cyclic(4)]}
        assert len(keys) == 4

    def test_invariant_under_every_relabeling(self):
        t = cyclic(4).table.tolist()
        key = canonical_key(t)
        for p in itertools.permutations(range(4)):
            assert canonical_key(relabel(t, p)) == key

    def test_invariant_under_sampled_relabelings(self):
        t = symmetric(3).table.tolist()
        key = canonical_key(t)
        for p in [(1, 0, 2, 3, 4, 5), (5, 4, 3, 2, 1, 0), (2, 4, 0, 5, 1, 3)]:
            assert canonical_key(relabel(t, p)) == key

    def test_key_is_stable(self):
        t = dihedral(4).table
        assert canonical_key(t) == canonical_key(t.tolist())

    def test_relabeled_tables_share_a_key(self):
        assert canonical_key(dihedral(3).table) == canonical_key(symmetric(3).table)
        assert canonical_key(cyclic(6).table) != canonical_key(symmetric(3).table)

    def test_key_is_one_of_the_relabelings(self):
        t = cyclic(4).table.tolist()
        key = canonical_key(t)
        serials = {serialize_table(relabel(t, p)) for p in itertools.permutations(range(4))}
        assert key == min(serials)

    def test_too_large(self):
        with pytest.raises(StructureTooLargeError):
            canonical_key(cyclic(9).table)

    def test_custom_ceiling(self):
        with pytest.raises(StructureTooLargeError):
            canonical_key(cyclic(4).table, max_size=3)

    def test_invalid_table(self):
        with pytest.raises(InvalidStructureError):
            canonical_key([[0, 1], [0, 1]])

    def test_empty_table(self):
        with pytest.raises(InvalidStructureError):
            canonical_key([])
        assert min_serialization(np.array(Z3_TABLE), []) is None


class TestCayleyTableAnalysis:
    def test_identity(self):
        assert find_identity(Z3_TABLE) == 0
        assert CayleyTable([[1, 0], [0, 1]]).has_identity() == 1
        assert CayleyTable([[0, 2, 1], [2, 1, 0], [1, 0, 2]]).has_identity() is None

    def test_commutative(self):
        assert CayleyTable(Z3_TABLE).is_commutative()
        assert not symmetric(3).cayley_table().is_commutative()

    def test_is_group(self):
        assert CayleyTable(Z3_TABLE).is_group()
        assert not CayleyTable([[0, 2, 1], [2, 1, 0], [1, 0, 2]]).is_group()

    def test_element_order(self):
        assert element_order(Z3_TABLE, 0) == 1
        assert element_order(Z3_TABLE, 1) == 3

    def test_order_spectrum(self):
        assert order_spectrum(Z3_TABLE) == {1: 1, 3: 2}
        assert order_spectrum(klein_four().table) == {1: 1, 2: 3}
        assert CayleyTable(cyclic(4).table).order_spectrum() == {1: 1, 2: 1, 4: 2}

    def test_dict_roundtrip(self):
        ct = CayleyTable(Z3_TABLE, name="Z3")
        data = ct.to_dict()
        assert data == {"name": "Z3", "size": 3, "table": Z3_TABLE}
        assert CayleyTable.from_dict(data) == ct

    def test_unreadable_table(self):
        with pytest.raises(InvalidStructureError):
            CayleyTable(42)

    def test_flat_array_is_not_a_table(self):
        ct = CayleyTable(np.array([0, 1]))
        assert ct.size == 0
        assert not ct.is_latin_square()
        assert ct.has_identity() is None
