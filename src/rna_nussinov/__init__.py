from rna_nussinov.folding import NussinovFoldingConfig
from rna_nussinov.api import NussinovPrediction, encode, fold, predict
from rna_nussinov.structures import Pair

__all__ = [
    "NussinovFoldingConfig",
    "NussinovPrediction",
    "Pair",
    "encode",
    "fold",
    "predict",
]
