from typing import Optional

import numpy as np

from rna_nussinov.structures import NussinovScoreMatrix


def score_table_array(matrix: NussinovScoreMatrix, mirror: bool = False) -> np.ndarray:
    """
    Returns a display copy of the score table.

    Parameters
    ----------
    matrix : NussinovScoreMatrix
        The filled score matrix.
    mirror : bool, optional
        If True, the lower triangle is filled with the transposed upper
        triangle. The matrix itself is never modified.

    Returns
    -------
    np.ndarray
        An N x N integer array.
    """
    return matrix.mirrored() if mirror else matrix.as_array()


def format_score_table(matrix: NussinovScoreMatrix, seq: Optional[str] = None, mirror: bool = False) -> str:
    """
    Renders the score table as right-aligned text, one row per line.

    When `seq` is given its bases label the columns and rows.

    Parameters
    ----------
    matrix : NussinovScoreMatrix
        The filled score matrix.
    seq : Optional[str]
        The folded sequence, used for labels. Must have length N when given.
    mirror : bool, optional
        Show the mirrored lower triangle as well.

    Returns
    -------
    str
        The formatted table (empty string for N = 0).
    """
    table = score_table_array(matrix, mirror=mirror)
    n = matrix.size
    if n == 0:
        return ""

    if seq is not None and len(seq) != n:
        raise ValueError(f"Sequence length {len(seq)} does not match table size {n}")

    width = max(len(str(int(table.max()))), 1) + 1

    lines = []
    if seq is not None:
        lines.append("  " + "".join(base.rjust(width) for base in seq))

    for i in range(n):
        row = "".join(str(int(v)).rjust(width) for v in table[i])
        lines.append((f"{seq[i]} " if seq is not None else "") + row)

    return "\n".join(lines)
