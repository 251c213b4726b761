from typing import Iterator, Tuple


def iter_spans(n: int, min_span: int = 0) -> Iterator[Tuple[int, int]]:
    """
    Iterates through contiguous spans `(i, j)` of a sequence of length `n`.

    Spans are yielded by increasing span length `j - i`, starting at
    `min_span`, then by increasing start index. Every span shorter than the
    current one has therefore been yielded before it, which is the order a
    bottom-up interval DP needs.

    Parameters
    ----------
    n : int
        The length of the sequence.
    min_span : int, optional
        Smallest value of `j - i` to yield. Defaults to 0 (single positions).

    Yields
    ------
    Iterator[Tuple[int, int]]
        `(i, j)` tuples with `0 <= i <= j < n` and `j - i >= min_span`.
    """
    for span_length in range(max(min_span, 0), n):
        for i in range(0, n - span_length):
            yield i, i + span_length


def count_spans(n: int, min_span: int = 0) -> int:
    """Number of spans `iter_spans(n, min_span)` yields."""
    m = n - max(min_span, 0)
    return m * (m + 1) // 2 if m > 0 else 0
