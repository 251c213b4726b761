from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Pair:
    """
    Immutable (i, j) index pair representing one base pair of a structure.

    Parameters
    ----------
    base_i : int
        5' index (0-based).
    base_j : int
        3' index (0-based), j > i for pairs emitted by the traceback.
    """
    base_i: int
    base_j: int

    def as_tuple(self) -> tuple[int, int]:
        """
        Pair indices as a plain ``(i, j)`` tuple.

        Handy for JSON output and for comparing against literal expectations.
        """
        return self.base_i, self.base_j

    def shares_base(self, other: Pair) -> bool:
        """True if the two pairs use at least one common position."""
        return bool({self.base_i, self.base_j} & {other.base_i, other.base_j})

    def crosses(self, other: Pair) -> bool:
        """
        Check whether two arcs cross when drawn over the sequence.

        Two pairs (a, b) and (c, d) cross when exactly one endpoint of one
        pair lies strictly inside the other, e.g. a < c < b < d. Nested and
        disjoint pairs do not cross.

        Parameters
        ----------
        other : Pair
            The pair to compare against.

        Returns
        -------
        bool
            True for a pseudoknotted (crossing) arrangement.
        """
        a, b = sorted(self.as_tuple())
        c, d = sorted(other.as_tuple())
        return a < c < b < d or c < a < d < b
