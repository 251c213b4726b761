from __future__ import annotations
from typing import Final, Optional

# Minimum number of unpaired nucleotides that a base pair must enclose.
# A pair (i, j) is only admissible when j - i - 1 >= 4, i.e. j - i >= 5.
MIN_LOOP_UNPAIRED: Final[int] = 4

# ---- Pairing rules (RNA) -----------------------------------------------------

# Watson-Crick pairs only; no G-U wobble. Both orientations are listed for
# quick membership checks.
_WATSON_CRICK_PAIRS: Final[frozenset[str]] = frozenset({"AU", "UA", "CG", "GC"})

# Each base has exactly one Watson-Crick partner.
_PARTNER_OF: Final[dict[str, str]] = {pair[0]: pair[1] for pair in _WATSON_CRICK_PAIRS}


def can_pair(base_i: str, base_j: str) -> bool:
    """
    Return True if nucleotide bases `base_i` and `base_j` form a Watson-Crick pair.

    Only A-U and C-G (in either order) are recognised. The check is
    case-sensitive and performs no normalisation, so lowercase letters, `T`,
    `N` or any other symbol simply never pair.

    Parameters
    ----------
    base_i, base_j : str
        Single-character nucleotides. Expected in {A, C, G, U}.

    Returns
    -------
    bool
        True if (base_i, base_j) is in {AU, UA, CG, GC}; False otherwise.
    """
    if not isinstance(base_i, str) or not isinstance(base_j, str):
        return False

    if len(base_i) != 1 or len(base_j) != 1:
        return False

    return (base_i + base_j) in _WATSON_CRICK_PAIRS


def pairing_partner(base: str) -> Optional[str]:
    """
    Return the single base that pairs with `base`, or None if nothing does.

    `can_pair(x, base)` holds exactly when `x == pairing_partner(base)`.

    Parameters
    ----------
    base : str
        A single-character nucleotide.

    Returns
    -------
    Optional[str]
        "U" for "A", "A" for "U", "G" for "C", "C" for "G"; None otherwise.
    """
    if not isinstance(base, str):
        return None
    return _PARTNER_OF.get(base)


def loop_size(i: int, j: int) -> int:
    """
    Number of unpaired nucleotides enclosed by a candidate pair (i, j).

    Parameters
    ----------
    i, j : int
        Zero-based indices with i < j.

    Returns
    -------
    int
        `j - i - 1`.
    """
    return j - i - 1


def is_min_loop_size(i: int, j: int, min_unpaired: int = MIN_LOOP_UNPAIRED) -> bool:
    """
    Check whether a candidate pair (i, j) encloses enough unpaired positions.

    Parameters
    ----------
    i, j : int
        Zero-based indices with i < j.
    min_unpaired : int, optional
        Minimum allowed unpaired nucleotides inside the pair. Defaults to 4.

    Returns
    -------
    bool
        True if `j - i - 1 >= min_unpaired`, else False.
    """
    return loop_size(i, j) >= min_unpaired
