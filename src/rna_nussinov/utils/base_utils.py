def normalize_base(base_raw: str) -> str:
    """
    Upper-case a nucleotide base and map T->U so DNA input folds like RNA.

    Used by the input layer only; the pairing predicate itself never
    normalises.

    Parameters
    ----------
    base_raw : str
        Raw single-character nucleotide base.

    Returns
    -------
    str
        Normalized base, typically in {A, C, G, U, N}.
    """
    if not isinstance(base_raw, str):
        return base_raw

    if len(base_raw) != 1:
        return base_raw

    base_norm = base_raw.upper()

    return "U" if base_norm == "T" else base_norm


def normalize_sequence(raw_sequence: str) -> str:
    """Strip surrounding whitespace and normalize every base of a sequence."""
    return "".join(normalize_base(base) for base in raw_sequence.strip())
