from rna_nussinov.structures.pairing import Pair
from rna_nussinov.structures.score_matrix import NussinovScoreMatrix

__all__ = [
    "Pair",
    "NussinovScoreMatrix",
]
