from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from rna_nussinov.structures import NussinovScoreMatrix


@dataclass(frozen=True, slots=True)
class NussinovFoldState:
    """
    Holds the DP arrays for one Nussinov prediction.

    The state is created at the start of a prediction and discarded after the
    traceback. It is never shared between predictions.

    Attributes
    ----------
    score_matrix : NussinovScoreMatrix
        S[i, j] stores the maximum number of nested base pairs on `[i, j]`.
    resolved : np.ndarray
        Boolean N x N mask. `resolved[i, j]` is True once S[i, j] holds its
        final value, so the evaluator can read it instead of recursing.
    """
    score_matrix: NussinovScoreMatrix
    resolved: np.ndarray

    @property
    def seq_len(self) -> int:
        return self.score_matrix.size

    def is_resolved(self, i: int, j: int) -> bool:
        return bool(self.resolved[i, j])

    def store(self, i: int, j: int, value: int) -> None:
        """Write a final score for `(i, j)` and mark the cell resolved."""
        self.score_matrix.set(i, j, value)
        self.resolved[i, j] = True


def make_fold_state(seq_len: int, min_loop_unpaired: int = 4) -> NussinovFoldState:
    """
    Allocates and initializes the Nussinov DP arrays for a sequence.

    Parameters
    ----------
    seq_len : int
        The length of the RNA sequence (N).
    min_loop_unpaired : int, optional
        Minimum number of unpaired positions inside a pair. Intervals with
        `j - i <= min_loop_unpaired` cannot hold a pair; their zero score is
        final from the start and they are marked resolved here.

    Returns
    -------
    NussinovFoldState
        A new state with every score set to zero.
    """
    score_matrix = NussinovScoreMatrix(seq_len, fill=0)
    resolved = np.zeros((seq_len, seq_len), dtype=bool)

    # Base case: every interval too short for a pair is already final at 0.
    for i in range(seq_len):
        resolved[i, i:min(seq_len, i + min_loop_unpaired + 1)] = True

    return NussinovFoldState(score_matrix=score_matrix, resolved=resolved)
