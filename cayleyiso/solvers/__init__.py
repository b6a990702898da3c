from cayleyiso.solvers.search import (
    are_isomorphic, automorphism_group, count_isomorphisms,
    enumerate_automorphisms, enumerate_isomorphisms, find_isomorphism,
)
from cayleyiso.solvers.parallel import parallel_accepted_permutations, parallel_canonical_key
from cayleyiso.solvers.z3_solver import Z3IsomorphismFinder

__all__ = [
    "are_isomorphic", "automorphism_group", "count_isomorphisms",
    "enumerate_automorphisms", "enumerate_isomorphisms", "find_isomorphism",
    "parallel_accepted_permutations", "parallel_canonical_key",
    "Z3IsomorphismFinder",
]
