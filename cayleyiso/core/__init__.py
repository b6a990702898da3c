from cayleyiso.core.errors import (
    CayleyIsoError, InvalidStructureError, RegistryConflictError,
    StructureTooLargeError, UndefinedInverseError,
)
from cayleyiso.core.structure import FiniteGroup
from cayleyiso.core.maps import FiniteMap, Isomorphism
from cayleyiso.core.config import EngineConfig

__all__ = [
    "CayleyIsoError", "InvalidStructureError", "RegistryConflictError",
    "StructureTooLargeError", "UndefinedInverseError",
    "FiniteGroup", "FiniteMap", "Isomorphism", "EngineConfig",
]
