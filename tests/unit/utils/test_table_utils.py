"""
Unit tests for the diagnostic score-table printer.
"""
import pytest

from rna_nussinov.api import fold
from rna_nussinov.structures import NussinovScoreMatrix
from rna_nussinov.utils.table_utils import format_score_table, score_table_array


@pytest.fixture
def hairpin_state():
    _, state = fold("GAAAAC")
    return state


def test_format_score_table_with_labels(hairpin_state):
    text = format_score_table(hairpin_state.score_matrix, "GAAAAC")
    lines = text.splitlines()

    # Header plus one row per position.
    assert len(lines) == 7
    assert lines[0].split() == list("GAAAAC")
    assert lines[1].split() == ["G", "0", "0", "0", "0", "0", "1"]
    assert lines[6].split() == ["C", "0", "0", "0", "0", "0", "0"]


def test_format_score_table_mirrored(hairpin_state):
    lines = format_score_table(hairpin_state.score_matrix, mirror=True).splitlines()

    assert len(lines) == 6
    assert lines[0].split()[-1] == "1"
    assert lines[5].split()[0] == "1"


def test_format_does_not_mutate_matrix(hairpin_state):
    format_score_table(hairpin_state.score_matrix, mirror=True)
    assert hairpin_state.score_matrix.as_array()[5, 0] == 0


def test_score_table_array_variants(hairpin_state):
    assert score_table_array(hairpin_state.score_matrix)[5, 0] == 0
    assert score_table_array(hairpin_state.score_matrix, mirror=True)[5, 0] == 1


def test_format_rejects_mismatched_sequence(hairpin_state):
    with pytest.raises(ValueError):
        format_score_table(hairpin_state.score_matrix, "GAAC")


def test_format_empty_table():
    assert format_score_table(NussinovScoreMatrix(0)) == ""
