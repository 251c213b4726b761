from rna_nussinov.rules.constraints import (
    MIN_LOOP_UNPAIRED,
    can_pair,
    pairing_partner,
    loop_size,
    is_min_loop_size,
)

__all__ = [
    "MIN_LOOP_UNPAIRED",
    "can_pair",
    "pairing_partner",
    "loop_size",
    "is_min_loop_size",
]
