from __future__ import annotations
from typing import Iterator, Tuple

import numpy as np


class NussinovScoreMatrix:
    """
    Dense N x N integer matrix holding Nussinov pair counts.

    Cell `(i, j)` with `i <= j` stores the maximum number of non-crossing base
    pairs on the closed interval `[i, j]`. Only the upper triangle is
    authoritative; the lower triangle stays zero and is never consulted by the
    recurrence or the traceback. A display-only mirror is available through
    `mirrored()`, which returns a separate copy.
    """
    __slots__ = ("_seq_len", "_cells")

    def __init__(self, seq_len: int, fill: int = 0):
        self._seq_len = seq_len
        self._cells = np.full((seq_len, seq_len), fill, dtype=np.int64)

    @property
    def size(self) -> int:
        """Returns the sequence length N that defines the matrix dimensions."""
        return self._seq_len

    @property
    def shape(self) -> Tuple[int, int]:
        """Returns the matrix shape as a tuple `(N, N)`."""
        return self._seq_len, self._seq_len

    def _check(self, base_i: int, base_j: int) -> None:
        if base_i < 0 or base_j < 0 or base_i >= self._seq_len or base_j >= self._seq_len or base_j < base_i:
            raise IndexError(f"ScoreMatrix invalid index: (i={base_i}, j={base_j}) for N={self._seq_len}")

    def get(self, base_i: int, base_j: int) -> int:
        """
        Retrieves the score stored at cell `(i, j)`.

        Parameters
        ----------
        base_i : int
            The row index (0-based).
        base_j : int
            The column index (0-based), `base_j >= base_i`.

        Returns
        -------
        int
            The stored pair count.

        Raises
        ------
        IndexError
            If `(i, j)` lies outside the upper triangle.
        """
        self._check(base_i, base_j)
        return int(self._cells[base_i, base_j])

    def set(self, base_i: int, base_j: int, value: int) -> None:
        """
        Stores `value` at cell `(i, j)` of the upper triangle.

        Raises
        ------
        IndexError
            If `(i, j)` lies outside the upper triangle.
        """
        self._check(base_i, base_j)
        self._cells[base_i, base_j] = value

    def score(self, base_i: int, base_j: int) -> int:
        """
        Interval lookup used by the recurrence and the traceback.

        An empty interval (`i > j`), such as `[i, i - 1]` left of a pair that
        starts at `i`, scores 0 instead of touching the lower triangle or
        indexing out of range.
        """
        if base_i > base_j:
            return 0
        return int(self._cells[base_i, base_j])

    def iter_upper_indices(self) -> Iterator[Tuple[int, int]]:
        """
        Yields all valid `(i, j)` index tuples in the upper triangle, row-major.
        """
        n = self._seq_len
        for i in range(n):
            for j in range(i, n):
                yield i, j

    def as_array(self) -> np.ndarray:
        """Returns a copy of the underlying array."""
        return self._cells.copy()

    def mirrored(self) -> np.ndarray:
        """
        Returns a display copy with the upper triangle mirrored into the lower.

        `out[i, j] = out[j, i]` for every `j < i`. The matrix itself is left
        untouched.
        """
        upper = np.triu(self._cells)
        return upper + np.triu(self._cells, k=1).T
