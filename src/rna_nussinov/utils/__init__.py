from rna_nussinov.utils.base_utils import normalize_base, normalize_sequence
from rna_nussinov.utils.iter_utils import iter_spans, count_spans

__all__ = [
    "normalize_base",
    "normalize_sequence",
    "iter_spans",
    "count_spans",
]
