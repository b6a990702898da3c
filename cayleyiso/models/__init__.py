from cayleyiso.models.cayley import (
    CayleyTable, canonical_key, order_spectrum, relabel, validate_table,
)

__all__ = ["CayleyTable", "canonical_key", "order_spectrum", "relabel", "validate_table"]
