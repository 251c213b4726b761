from __future__ import annotations
from dataclasses import dataclass
import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Tuple

from rna_nussinov.folding import (
    NussinovFoldState,
    NussinovFoldingConfig,
    NussinovFoldingEngine,
    make_fold_state,
    pairs_to_dotbracket,
    traceback_nested,
)
from rna_nussinov.folding.common_traceback import PairLike
from rna_nussinov.structures import Pair

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NussinovPrediction:
    """
    Result of folding one sequence.

    Attributes
    ----------
    sequence : str
        The sequence exactly as it was folded.
    pairs : List[Pair]
        Base pairs in traceback-discovery order.
    score : int
        The optimal number of base pairs, equal to `S[0, N-1]` (0 when N = 0).
    dot_bracket : str
        Dot-bracket string of length N.
    """
    sequence: str
    pairs: List[Pair]
    score: int
    dot_bracket: str

    def as_dict(self) -> Dict[str, Any]:
        """JSON-ready view of the prediction."""
        return {
            "sequence": self.sequence,
            "length": len(self.sequence),
            "score": self.score,
            "pairs": [list(pr.as_tuple()) for pr in self.pairs],
            "dot_bracket": self.dot_bracket,
        }


def fold(
    sequence: str,
    config: Optional[NussinovFoldingConfig] = None,
) -> Tuple[NussinovPrediction, NussinovFoldState]:
    """
    Folds `sequence` and also hands back the filled fold state.

    Use this when the score table itself is needed, e.g. for diagnostic
    printing; otherwise call `predict`.

    Parameters
    ----------
    sequence : str
        RNA sequence over {A, C, G, U}. Not validated; other symbols never pair.
    config : Optional[NussinovFoldingConfig]
        Folding settings. Defaults to a minimum loop of 4.

    Returns
    -------
    Tuple[NussinovPrediction, NussinovFoldState]
        The prediction and the state it was traced from.
    """
    if config is None:
        config = NussinovFoldingConfig()

    start_time = time.perf_counter()
    seq_len = len(sequence)

    # 1. Allocate the score table.
    state = make_fold_state(seq_len, min_loop_unpaired=config.min_loop_unpaired)

    # 2. Fill it bottom-up.
    engine = NussinovFoldingEngine(config=config)
    engine.fill_all_matrices(sequence, state)

    # 3. Trace one optimal structure back out of it.
    trace_result = traceback_nested(sequence, state, min_loop_unpaired=config.min_loop_unpaired)

    score = state.score_matrix.get(0, seq_len - 1) if seq_len else 0

    elapsed = time.perf_counter() - start_time
    logger.info(f"Prediction completed in {elapsed:.3f}s: {score} base pairs")

    prediction = NussinovPrediction(
        sequence=sequence,
        pairs=trace_result.pairs,
        score=score,
        dot_bracket=trace_result.dot_bracket,
    )
    return prediction, state


def predict(sequence: str, config: Optional[NussinovFoldingConfig] = None) -> NussinovPrediction:
    """
    Predicts the maximum-pairing secondary structure of an RNA sequence.

    Parameters
    ----------
    sequence : str
        RNA sequence over {A, C, G, U}.
    config : Optional[NussinovFoldingConfig]
        Folding settings.

    Returns
    -------
    NussinovPrediction
        Pairs, optimal pair count and dot-bracket string.

    Examples
    --------
    >>> predict("GAAAAC").dot_bracket
    '(....)'
    """
    prediction, _ = fold(sequence, config)
    return prediction


def encode(sequence: str, structure: Iterable[PairLike]) -> str:
    """Dot-bracket string for `structure` over `sequence`."""
    return pairs_to_dotbracket(len(sequence), structure)
