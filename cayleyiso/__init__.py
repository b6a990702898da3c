"""Canonical forms, isomorphism witnesses and automorphism search for small finite groups."""

from cayleyiso.core import (
    CayleyIsoError, EngineConfig, FiniteGroup, FiniteMap, InvalidStructureError,
    Isomorphism, RegistryConflictError, StructureTooLargeError, UndefinedInverseError,
)
from cayleyiso.core.permutations import MAX_CANONICAL_SIZE, MAX_SEARCH_SIZE, inverse_permutation
from cayleyiso.models.cayley import CayleyTable, canonical_key, order_spectrum, relabel, validate_table
from cayleyiso.library.iso_class import (
    IsoClass, IsoClassRegistry, auto_classify, classes_equal, iso_class,
)
from cayleyiso.witness import (
    InverseFailure, InverseOutcome, WitnessReport, build_witness, is_homomorphism, try_build_inverse,
)
from cayleyiso.solvers.search import (
    are_isomorphic, automorphism_group, enumerate_automorphisms, enumerate_isomorphisms,
    find_isomorphism,
)

__version__ = "0.1.0"

__all__ = [
    "CayleyIsoError", "InvalidStructureError", "StructureTooLargeError",
    "UndefinedInverseError", "RegistryConflictError",
    "EngineConfig", "FiniteGroup", "FiniteMap", "Isomorphism",
    "MAX_CANONICAL_SIZE", "MAX_SEARCH_SIZE", "inverse_permutation",
    "CayleyTable", "canonical_key", "order_spectrum", "relabel", "validate_table",
    "IsoClass", "IsoClassRegistry", "auto_classify", "classes_equal", "iso_class",
    "InverseFailure", "InverseOutcome", "WitnessReport", "build_witness",
    "is_homomorphism", "try_build_inverse",
    "are_isomorphic", "automorphism_group", "enumerate_automorphisms",
    "enumerate_isomorphisms", "find_isomorphism",
]
