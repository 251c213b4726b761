from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple, Union

from rna_nussinov.structures import Pair

PairLike = Union[Pair, Tuple[int, int]]


@dataclass(frozen=True, slots=True)
class TraceResult:
    """
    Container for the result of a Nussinov traceback.

    Attributes
    ----------
    pairs : List[Pair]
        Base pairs (i, j) with i < j, in the order the traceback found them.
    dot_bracket : str
        The dot-bracket string of the structure.
    """
    pairs: List[Pair]
    dot_bracket: str


def pair_indices(pair: PairLike) -> Tuple[int, int]:
    if isinstance(pair, Pair):
        return pair.as_tuple()
    a, b = pair
    return int(a), int(b)


def pairs_to_dotbracket(seq_len: int, pairs: Iterable[PairLike]) -> str:
    """
    Converts base pairs into a single-layer dot-bracket string.

    Starts from `seq_len` dots and, for each pair, writes '(' at the smaller
    index and ')' at the larger one. Pairs are applied in order, so if two
    pairs ever share a position the later write wins. Pairs reaching outside
    `[0, seq_len)` are skipped.

    Parameters
    ----------
    seq_len : int
        The total length of the RNA sequence.
    pairs : Iterable[Pair | tuple[int, int]]
        The structure, as `Pair` objects or `(i, j)` tuples in either orientation.

    Returns
    -------
    str
        The dot-bracket string, always of length `seq_len`.
    """
    chars = ['.'] * seq_len
    for pr in pairs:
        a, b = pair_indices(pr)
        i, j = min(a, b), max(a, b)
        if 0 <= i and j < seq_len:
            chars[i] = '('
            chars[j] = ')'
    return ''.join(chars)


def dotbracket_to_pairs(db: str) -> Set[Tuple[int, int]]:
    """
    Parses a single-layer dot-bracket string back into base pairs.

    Unmatched brackets are ignored. Characters other than '(' and ')' count
    as unpaired.

    Parameters
    ----------
    db : str
        The dot-bracket string to parse.

    Returns
    -------
    Set[Tuple[int, int]]
        The `(i, j)` pairs, i < j.
    """
    stack: List[int] = []
    out: Set[Tuple[int, int]] = set()
    for idx, ch in enumerate(db):
        if ch == '(':
            stack.append(idx)
        elif ch == ')':
            if stack:
                i = stack.pop()
                out.add((i, idx))
    return out
