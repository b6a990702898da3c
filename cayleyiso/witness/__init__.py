from cayleyiso.witness.protocol import WitnessReport, build_witness, is_homomorphism
from cayleyiso.witness.inverse import InverseFailure, InverseOutcome, try_build_inverse

__all__ = [
    "WitnessReport", "build_witness", "is_homomorphism",
    "InverseFailure", "InverseOutcome", "try_build_inverse",
]
