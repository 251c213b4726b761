from __future__ import annotations
from dataclasses import dataclass, field
import time
import logging

from tqdm import tqdm

from rna_nussinov.folding.fold_state import NussinovFoldState
from rna_nussinov.rules import MIN_LOOP_UNPAIRED, is_min_loop_size, pairing_partner
from rna_nussinov.utils.iter_utils import iter_spans, count_spans

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NussinovFoldingConfig:
    """
    Configuration settings for the Nussinov folding algorithm.

    Attributes
    ----------
    min_loop_unpaired : int
        Minimum number of unpaired positions a pair must enclose. Defaults to 4,
        so a pair (i, j) needs `j - i >= 5`.
    verbose : bool
        If True, shows a progress bar during the table fill.
    """
    min_loop_unpaired: int = MIN_LOOP_UNPAIRED
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.min_loop_unpaired < 0:
            raise ValueError(f"min_loop_unpaired must be >= 0, got {self.min_loop_unpaired}")


@dataclass(slots=True)
class NussinovFoldingEngine:
    """
    Implements the Nussinov base-pair maximisation recurrence.

    `evaluate_interval` is the recursive OPT computation; every sub-interval
    it needs is read from (or written to) the fold state, so each interval is
    computed once. `fill_all_matrices` drives it over all intervals by
    increasing length, which makes every lookup a hit.

    Attributes
    ----------
    config : NussinovFoldingConfig
        Loop-length constraint and progress settings.
    """
    config: NussinovFoldingConfig = field(default_factory=NussinovFoldingConfig)

    def fill_all_matrices(self, seq: str, state: NussinovFoldState) -> None:
        """
        Populates the score matrix for every interval of `seq`.

        Intervals are visited by increasing length `k = min_loop + 1 .. N - 1`
        and, within one length, by increasing start index. Shorter intervals
        keep their initial score of 0.

        Parameters
        ----------
        seq : str
            The RNA sequence to fold.
        state : NussinovFoldState
            The state object whose score matrix is filled in place.
        """
        start_time = time.perf_counter()
        n = len(seq)
        min_span = self.config.min_loop_unpaired + 1

        if n <= min_span:
            logger.info(f"Nussinov DP: sequence length N={n} is too short to hold a pair; nothing to fill.")
            return

        total_cells = count_spans(n, min_span)
        logger.info("=" * 60)
        logger.info(f"Nussinov DP for sequence length N={n}")
        logger.info(f"Cells to fill: {total_cells:,}; expected complexity O(N³) ≈ {n ** 3:,} operations")
        logger.info("=" * 60)

        show_progress = self.config.verbose or logger.isEnabledFor(logging.INFO)
        cell_iter = tqdm(iter_spans(n, min_span), total=total_cells, desc="Nussinov DP",
                         leave=True, disable=not show_progress)

        for i, j in cell_iter:
            self.evaluate_interval(seq, i, j, state)

        elapsed = time.perf_counter() - start_time
        logger.info(f"Nussinov DP completed in {elapsed:.2f}s ({elapsed * 1000:.0f}ms)")
        logger.info(f"Final S[0,{n - 1}] = {state.score_matrix.get(0, n - 1)} base pairs")

    def evaluate_interval(self, seq: str, i: int, j: int, state: NussinovFoldState) -> int:
        """
        Returns OPT(i, j), the maximum number of nested pairs on `[i, j]`.

        Resolved cells are read straight from the score matrix. An unresolved
        cell is computed from its sub-intervals (each again going through this
        method), stored, and marked resolved.

        Parameters
        ----------
        seq : str
            The RNA sequence.
        i : int
            5' start index of the interval.
        j : int
            3' end index of the interval. `j < i` denotes an empty interval.
        state : NussinovFoldState
            The state holding the memoised scores.

        Returns
        -------
        int
            The optimal pair count for the interval.

        Notes
        -----
        On a state filled by `fill_all_matrices` this is a single lookup. On a
        fresh state the call recurses down the `(i, j - 1)` chain, about three
        Python frames per position, so intervals longer than roughly 300 nt
        exceed the default recursion limit (`sys.getrecursionlimit()`). Fill
        the state first for long sequences.
        """
        # Empty or too short for a pair: the base case, scored 0.
        if not is_min_loop_size(i, j, self.config.min_loop_unpaired):
            return 0

        if state.is_resolved(i, j):
            return state.score_matrix.get(i, j)

        value = self._compute_cell(seq, i, j, state)
        state.store(i, j, value)
        return value

    def _compute_cell(self, seq: str, i: int, j: int, state: NussinovFoldState) -> int:
        """
        Applies the recurrence to one interval `[i, j]`.

        Notes
        -----
        S(i, j) is the maximum of two cases:
        1.  `S(i, j-1)`: base `j` stays unpaired.
        2.  `max_t 1 + S(i, t-1) + S(t+1, j-1)` over every `t` in
            `[i, j - min_loop - 1]` that pairs with `j`. `S(i, i-1)` is the
            empty interval and scores 0.
        """
        min_loop = self.config.min_loop_unpaired
        scores = state.score_matrix
        resolved = state.resolved

        def sub_score(a: int, b: int) -> int:
            # Empty intervals and resolved cells are read directly; anything
            # else goes back through the memoised evaluator.
            if a > b or resolved[a, b]:
                return scores.score(a, b)
            return self.evaluate_interval(seq, a, b, state)

        # --- Case 1: j unpaired ---
        unpaired = sub_score(i, j - 1)

        # --- Case 2: j paired with some t ---
        partner = pairing_partner(seq[j])
        if partner is None:
            return unpaired

        # Only positions holding the partner base can pair with j. The search
        # stops at the last t with is_min_loop_size(t, j, min_loop).
        stop = j - min_loop
        best_paired = 0
        t = seq.find(partner, i, stop)
        while t != -1:
            cand = 1 + sub_score(i, t - 1) + sub_score(t + 1, j - 1)
            if cand > best_paired:
                best_paired = cand
            t = seq.find(partner, t + 1, stop)

        return max(unpaired, best_paired)
