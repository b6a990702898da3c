from cayleyiso.library.iso_class import (
    IsoClass, IsoClassRegistry, RegistryEntry, auto_classify, classes_equal, iso_class,
)
from cayleyiso.library.automorphisms import (
    identity_automorphism, inner_automorphism, inner_automorphisms,
    negation_automorphism, power_automorphism,
)

__all__ = [
    "IsoClass", "IsoClassRegistry", "RegistryEntry",
    "auto_classify", "classes_equal", "iso_class",
    "identity_automorphism", "inner_automorphism", "inner_automorphisms",
    "negation_automorphism", "power_automorphism",
]
