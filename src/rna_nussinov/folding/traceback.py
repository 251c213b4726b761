from __future__ import annotations
import logging
from typing import List, Tuple

from rna_nussinov.folding.common_traceback import TraceResult, pairs_to_dotbracket
from rna_nussinov.folding.fold_state import NussinovFoldState
from rna_nussinov.rules import can_pair, is_min_loop_size, MIN_LOOP_UNPAIRED
from rna_nussinov.structures import Pair

logger = logging.getLogger(__name__)


def traceback_nested(
    seq: str,
    state: NussinovFoldState,
    min_loop_unpaired: int = MIN_LOOP_UNPAIRED,
) -> TraceResult:
    """
    Reconstructs one optimal nested structure for the whole sequence.

    Starts from the top-level cell `S[0, N-1]` of a filled fold state.

    Parameters
    ----------
    seq : str
        The RNA sequence that was folded.
    state : NussinovFoldState
        The state holding the filled score matrix.
    min_loop_unpaired : int, optional
        The loop constraint the matrix was filled with. Defaults to 4.

    Returns
    -------
    TraceResult
        Pairs in discovery order and the dot-bracket string.
    """
    seq_len = len(seq)
    if seq_len == 0:
        return TraceResult(pairs=[], dot_bracket="")

    return _traceback_core(seq, state, [(0, seq_len - 1)], min_loop_unpaired)


def traceback_nested_interval(
    seq: str,
    state: NussinovFoldState,
    i: int,
    j: int,
    min_loop_unpaired: int = MIN_LOOP_UNPAIRED,
) -> TraceResult:
    """
    Reconstructs the optimal structure of the sub-interval `[i, j]` only.

    The dot-bracket string still spans the full sequence; positions outside
    `[i, j]` are dots.
    """
    if len(seq) == 0:
        return TraceResult(pairs=[], dot_bracket="")

    return _traceback_core(seq, state, [(i, j)], min_loop_unpaired)


def _traceback_core(
    seq: str,
    state: NussinovFoldState,
    seed_frames: List[Tuple[int, int]],
    min_loop_unpaired: int,
) -> TraceResult:
    """
    Stack-based traceback over the score matrix.

    Each frame is an interval `[i, j]`:

    - `j <= i`: nothing to do.
    - `S[i, j] == S[i, j-1]`: `j` is unpaired, continue with `[i, j-1]`.
    - otherwise scan `k = i, i+1, ...` while `k < j - min_loop` and take the
      first `k` that pairs with `j` and satisfies
      `S[i, j] == S[i, k-1] + S[k+1, j-1] + 1` (`S[i, k-1]` is 0 when
      `k == i`). Emit `(k, j)` and continue with `[i, k-1]` then `[k+1, j-1]`.

    The left interval is pushed last so it is popped first; pairs come out in
    the same order as the recursive pre-order walk.
    """
    seq_len = len(seq)
    scores = state.score_matrix

    pairs: List[Pair] = []
    stack: List[Tuple[int, int]] = list(seed_frames)

    while stack:
        i, j = stack.pop()

        # Terminal: the interval is out of range or too short to enclose a pair.
        if i < 0 or j >= seq_len or not is_min_loop_size(i, j, min_loop_unpaired):
            continue

        target = scores.score(i, j)

        # Rule: j unpaired.
        if target == scores.score(i, j - 1):
            stack.append((i, j - 1))
            continue

        # Rule: j paired with the smallest admissible k. The range ends at the
        # last k with is_min_loop_size(k, j, min_loop_unpaired).
        base_j = seq[j]
        for k in range(i, j - min_loop_unpaired):
            if not can_pair(seq[k], base_j):
                continue

            left = scores.score(i, k - 1) if k > i else 0
            if target == left + scores.score(k + 1, j - 1) + 1:
                pairs.append(Pair(k, j))
                stack.append((k + 1, j - 1))
                if k > i:
                    stack.append((i, k - 1))
                break
        else:
            logger.warning(f"Traceback found no decomposition for S[{i},{j}]={target}; skipping interval.")

    return TraceResult(pairs=pairs, dot_bracket=pairs_to_dotbracket(seq_len, pairs))
