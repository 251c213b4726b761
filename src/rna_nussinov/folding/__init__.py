from rna_nussinov.folding.fold_state import NussinovFoldState, make_fold_state
from rna_nussinov.folding.recurrences import NussinovFoldingConfig, NussinovFoldingEngine
from rna_nussinov.folding.common_traceback import TraceResult, pairs_to_dotbracket, dotbracket_to_pairs
from rna_nussinov.folding.traceback import traceback_nested, traceback_nested_interval

__all__ = [
    "NussinovFoldState",
    "make_fold_state",
    "NussinovFoldingConfig",
    "NussinovFoldingEngine",
    "TraceResult",
    "pairs_to_dotbracket",
    "dotbracket_to_pairs",
    "traceback_nested",
    "traceback_nested_interval",
]
