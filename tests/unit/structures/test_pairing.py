"""
Unit tests for the `Pair` data structure.

`Pair` is the element type of every predicted structure. The tests cover its
coordinates, the arc relations used to check structures, and the
dataclass guarantees (immutability, hashability).
"""
import pytest
from dataclasses import FrozenInstanceError

from rna_nussinov.structures.pairing import Pair


def test_pair_as_tuple_returns_coordinates():
    assert Pair(base_i=10, base_j=20).as_tuple() == (10, 20)


@pytest.mark.parametrize("first, second, expected", [
    (Pair(0, 10), Pair(2, 8), False),    # nested
    (Pair(2, 8), Pair(0, 10), False),    # nested, reversed
    (Pair(0, 5), Pair(6, 11), False),    # disjoint
    (Pair(0, 6), Pair(3, 10), True),     # crossing
    (Pair(3, 10), Pair(0, 6), True),     # crossing, reversed
])
def test_pair_crosses(first, second, expected):
    """Only arcs with exactly one endpoint inside the other cross."""
    assert first.crosses(second) is expected


def test_pair_shares_base():
    assert Pair(0, 5).shares_base(Pair(5, 11)) is True
    assert Pair(0, 5).shares_base(Pair(0, 9)) is True
    assert Pair(0, 5).shares_base(Pair(6, 11)) is False


def test_pair_is_frozen_and_slotted():
    """A `Pair` cannot be modified and has no instance `__dict__`."""
    base_pair = Pair(base_i=1, base_j=7)

    with pytest.raises(FrozenInstanceError):
        base_pair.base_i = 2

    with pytest.raises((AttributeError, TypeError)):
        setattr(base_pair, "new_field", 123)


def test_pair_hashable_and_equality():
    """Equal coordinates give equal, interchangeable set members."""
    p1 = Pair(5, 11)
    p2 = Pair(5, 11)
    p3 = Pair(5, 10)

    assert p1 == p2
    assert p1 != p3
    assert len({p1, p2, p3}) == 2
