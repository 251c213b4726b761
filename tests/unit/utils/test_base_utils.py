"""
Unit tests for input normalisation used by the command line.
"""
import pytest

from rna_nussinov.utils.base_utils import normalize_base, normalize_sequence


@pytest.mark.parametrize("raw, expected", [
    ("a", "A"),
    ("u", "U"),
    ("T", "U"),
    ("t", "U"),
    ("n", "N"),
])
def test_normalize_base(raw, expected):
    assert normalize_base(raw) == expected


def test_normalize_base_passes_through_odd_input():
    assert normalize_base("AU") == "AU"
    assert normalize_base(None) is None


def test_normalize_sequence_strips_and_converts():
    assert normalize_sequence("  gaaaat\n") == "GAAAAU"
    assert normalize_sequence("   ") == ""
