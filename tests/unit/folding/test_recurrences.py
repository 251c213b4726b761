"""
Unit tests for the Nussinov recurrence and table fill.

The engine has two entry points:

1.  `evaluate_interval`: the recursive OPT(i, j) computation, memoised through
    the fold state.
2.  `fill_all_matrices`: the bottom-up driver that visits intervals by
    increasing length.

The tests pin exact table values on a hand-checked sequence, verify the
memoisation contract, and check the fill on edge-case inputs.
"""
import random

import numpy as np
import pytest

from rna_nussinov.folding.fold_state import make_fold_state
from rna_nussinov.folding.recurrences import NussinovFoldingEngine, NussinovFoldingConfig


# ---------------------- Fixtures ----------------------

@pytest.fixture
def engine():
    return NussinovFoldingEngine(config=NussinovFoldingConfig())


def _filled_state(engine, seq):
    state = make_fold_state(len(seq), min_loop_unpaired=engine.config.min_loop_unpaired)
    engine.fill_all_matrices(seq, state)
    return state


# ---------------------- Config ----------------------

def test_config_defaults():
    config = NussinovFoldingConfig()
    assert config.min_loop_unpaired == 4
    assert config.verbose is False


def test_config_rejects_negative_min_loop():
    with pytest.raises(ValueError):
        NussinovFoldingConfig(min_loop_unpaired=-1)


# ---------------------- Table values ----------------------

def test_fill_hand_checked_table(engine):
    """
    GGAAAACC (0-based):

    - S[1,6] = 1 via (1,6)
    - S[0,6] = 1 via (0,6) or (1,6)
    - S[1,7] = 1, S[2,7] = 0, S[0,5] = 0
    - S[0,7] = 2 via (0,7) enclosing (1,6)
    """
    state = _filled_state(engine, "GGAAAACC")
    scores = state.score_matrix

    assert scores.get(0, 5) == 0
    assert scores.get(1, 6) == 1
    assert scores.get(2, 7) == 0
    assert scores.get(0, 6) == 1
    assert scores.get(1, 7) == 1
    assert scores.get(0, 7) == 2


def test_fill_minimal_hairpin(engine):
    """GAAAAC: the smallest admissible pair (0,5) at the left boundary."""
    state = _filled_state(engine, "GAAAAC")
    assert state.score_matrix.get(0, 5) == 1


def test_fill_respects_min_loop(engine):
    """GAAAC would need a 3-nt loop, which the default constraint forbids."""
    state = _filled_state(engine, "GAAACAAAAAA")
    assert state.score_matrix.get(0, 4) == 0


def test_fill_with_custom_min_loop():
    """With a minimum loop of 3, GAAAC folds into one pair."""
    engine = NussinovFoldingEngine(config=NussinovFoldingConfig(min_loop_unpaired=3))
    state = _filled_state(engine, "GAAAC")
    assert state.score_matrix.get(0, 4) == 1


def test_fill_ignores_wobble_pairs(engine):
    """G-U would pair in other models; here it scores nothing."""
    state = _filled_state(engine, "GAAAAU")
    assert state.score_matrix.get(0, 5) == 0


@pytest.mark.parametrize("seq", ["", "A", "GAAC", "AAAAU"])
def test_fill_short_sequences_is_noop(engine, seq):
    """Sequences with N <= 5 have no interval long enough for a pair."""
    state = _filled_state(engine, seq)
    assert not state.score_matrix.as_array().any()


def test_fill_resolves_every_upper_cell_and_leaves_lower_triangle(engine):
    seq = "GGGAAAUCCCAGCUAGCUUU"
    state = _filled_state(engine, seq)
    n = len(seq)

    upper = np.triu(np.ones((n, n), dtype=bool))
    assert np.array_equal(state.resolved, upper)
    assert np.all(np.tril(state.score_matrix.as_array(), k=-1) == 0)


def test_scores_are_monotone_in_interval(engine):
    """Growing an interval can never lose pairs: S[i,j] >= S[i,j-1] and S[i+1,j]."""
    seq = "GGCAUAGCUAGCAUGCAUCGAUGC"
    state = _filled_state(engine, seq)
    scores = state.score_matrix
    n = len(seq)

    for i in range(n):
        for j in range(i + 1, n):
            assert scores.get(i, j) >= scores.get(i, j - 1)
            if i + 1 <= j:
                assert scores.get(i, j) >= scores.get(i + 1, j)


# ---------------------- Memoisation ----------------------

def test_evaluate_interval_reads_resolved_cells():
    """
    A resolved cell is returned as stored, without re-deriving it. Planting a
    value the sequence could never produce makes this observable.
    """
    engine = NussinovFoldingEngine()
    state = make_fold_state(6)
    state.store(0, 5, 7)

    assert engine.evaluate_interval("AAAAAA", 0, 5, state) == 7


def test_evaluate_interval_base_cases():
    engine = NussinovFoldingEngine()
    state = make_fold_state(6)

    # Empty interval to the left of a pair at index 0.
    assert engine.evaluate_interval("GAAAAC", 0, -1, state) == 0
    # Spans of length <= 4 cannot hold a pair.
    assert engine.evaluate_interval("GAAAAC", 0, 4, state) == 0


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_cold_evaluation_matches_bottom_up_fill(seed):
    """
    Calling `evaluate_interval` top-down on an empty state gives the same
    table as the length-ascending fill.
    """
    rng = random.Random(seed)
    seq = "".join(rng.choices("ACGU", k=28))
    engine = NussinovFoldingEngine()

    filled = _filled_state(engine, seq)

    cold = make_fold_state(len(seq))
    top = engine.evaluate_interval(seq, 0, len(seq) - 1, cold)

    assert top == filled.score_matrix.get(0, len(seq) - 1)
    # Every cell the cold run resolved agrees with the filled table.
    cold_scores = cold.score_matrix.as_array()
    filled_scores = filled.score_matrix.as_array()
    assert np.array_equal(cold_scores[cold.resolved], filled_scores[cold.resolved])


def test_unknown_symbols_are_inert(engine):
    """Symbols outside {A, C, G, U} never pair but do not raise."""
    state = _filled_state(engine, "GNNNNC")
    assert state.score_matrix.get(0, 5) == 1

    state = _filled_state(engine, "NAAAAN")
    assert state.score_matrix.get(0, 5) == 0


def test_filled_state_evaluation_is_a_lookup(engine, monkeypatch):
    """After the fill, OPT over the whole sequence is read, not recomputed."""
    seq = "GGGAAAUCCCAGCUAGCUUU"
    state = _filled_state(engine, seq)

    def fail(*args, **kwargs):
        raise AssertionError("filled cell was recomputed")

    monkeypatch.setattr(NussinovFoldingEngine, "_compute_cell", fail)
    assert engine.evaluate_interval(seq, 0, len(seq) - 1, state) == state.score_matrix.get(0, len(seq) - 1)


def test_compute_cell_reads_filled_sub_intervals_directly(engine, monkeypatch):
    """
    With every sub-interval resolved, a cell is computed from direct table
    reads alone, without calling back into `evaluate_interval`.
    """
    seq = "GGCAUAGCUAGCAUGCAUCGAUGC"
    state = _filled_state(engine, seq)
    expected = state.score_matrix.get(0, len(seq) - 1)

    def fail(*args, **kwargs):
        raise AssertionError("resolved sub-interval went through evaluate_interval")

    monkeypatch.setattr(NussinovFoldingEngine, "evaluate_interval", fail)
    assert engine._compute_cell(seq, 0, len(seq) - 1, state) == expected


def test_fill_handles_sequences_deeper_than_recursion_limit(engine):
    """
    The length-ascending fill keeps every lookup shallow, so sequences much
    longer than the cold-recursion limit still fold.
    """
    seq = "GAAAAC" + "A" * 694
    state = _filled_state(engine, seq)
    assert state.score_matrix.get(0, len(seq) - 1) == 1
