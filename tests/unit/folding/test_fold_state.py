"""
Unit tests for the Nussinov fold state and its factory.

`make_fold_state` allocates the score matrix and the `resolved` mask. Every
interval too short to hold a pair is final at 0 from the start; all longer
intervals are left for the recurrence.
"""
import numpy as np
import pytest

from rna_nussinov.folding.fold_state import NussinovFoldState, make_fold_state


def test_make_fold_state_shapes_and_defaults():
    seq_len = 9
    fold_state = make_fold_state(seq_len)

    assert isinstance(fold_state, NussinovFoldState)
    assert fold_state.seq_len == seq_len
    assert fold_state.score_matrix.shape == (seq_len, seq_len)
    assert fold_state.resolved.shape == (seq_len, seq_len)
    assert fold_state.resolved.dtype == np.bool_

    for i, j in fold_state.score_matrix.iter_upper_indices():
        assert fold_state.score_matrix.get(i, j) == 0


@pytest.mark.parametrize("min_loop", [4, 3, 0])
def test_short_intervals_start_resolved(min_loop):
    """
    Cells with `j - i <= min_loop` are resolved; longer ones are not. The lower
    triangle is never marked.
    """
    seq_len = 8
    fold_state = make_fold_state(seq_len, min_loop_unpaired=min_loop)

    for i in range(seq_len):
        for j in range(seq_len):
            expected = i <= j and j - i <= min_loop
            assert fold_state.is_resolved(i, j) is expected


def test_store_writes_score_and_marks_resolved():
    fold_state = make_fold_state(7)
    assert fold_state.is_resolved(0, 6) is False

    fold_state.store(0, 6, 2)

    assert fold_state.score_matrix.get(0, 6) == 2
    assert fold_state.is_resolved(0, 6) is True


def test_make_fold_state_empty_sequence():
    fold_state = make_fold_state(0)
    assert fold_state.seq_len == 0
    assert fold_state.resolved.shape == (0, 0)


def test_fold_state_is_frozen():
    fold_state = make_fold_state(3)
    with pytest.raises(Exception):
        fold_state.score_matrix = None
