from __future__ import annotations
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from rna_nussinov.folding.common_traceback import PairLike, pair_indices

BASE_COLORS: Dict[str, str] = {
    'A': '#e74c3c',
    'U': '#3498db',
    'G': '#2ecc71',
    'C': '#f39c12',
}
UNKNOWN_BASE_COLOR = '#95a5a6'


def circular_layout(seq_len: int, radius: float = 1.0) -> np.ndarray:
    """
    Places `seq_len` positions evenly on a circle, 5' end at the top, clockwise.

    Returns
    -------
    np.ndarray
        A `(seq_len, 2)` array of x, y coordinates.
    """
    if seq_len == 0:
        return np.zeros((0, 2))
    angles = np.pi / 2 - 2 * np.pi * np.arange(seq_len) / seq_len
    return np.column_stack((radius * np.cos(angles), radius * np.sin(angles)))


def plot_structure(
    seq: str,
    pairs: Iterable[PairLike],
    ax: Optional[Axes] = None,
    title: Optional[str] = None,
    show_labels: bool = True,
) -> Figure:
    """
    Draws a node-link diagram of a structure.

    One node per position, a backbone line through consecutive positions, and
    one chord per base pair. Only the sequence and the pair list are used, so
    any structure (not only Nussinov output) can be drawn.

    Parameters
    ----------
    seq : str
        The RNA sequence.
    pairs : Iterable[Pair | tuple[int, int]]
        The base pairs to draw.
    ax : Optional[Axes]
        Axes to draw into. A new figure is created when omitted.
    title : Optional[str]
        Axes title. Defaults to the pair count.
    show_labels : bool, optional
        Write the base letter next to each node.

    Returns
    -------
    Figure
        The figure holding the drawing.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))
    else:
        fig = ax.figure

    coords = circular_layout(len(seq))
    pair_list = [pair_indices(pr) for pr in pairs]

    # Backbone
    if len(seq) > 1:
        ax.plot(coords[:, 0], coords[:, 1], color='#9e9e9e', linewidth=1.5, zorder=1)

    # Base pairs
    for i, j in pair_list:
        ax.plot([coords[i, 0], coords[j, 0]], [coords[i, 1], coords[j, 1]],
                color='#34495e', linewidth=1.2, zorder=2)

    # Nucleotides
    if len(seq):
        colors = [BASE_COLORS.get(base, UNKNOWN_BASE_COLOR) for base in seq]
        ax.scatter(coords[:, 0], coords[:, 1], c=colors, s=80, edgecolors='black', zorder=3)

    if show_labels:
        for idx, base in enumerate(seq):
            x, y = coords[idx] * 1.12
            ax.text(x, y, base, ha='center', va='center', fontsize=8)

    ax.set_title(title if title is not None else f"{len(pair_list)} base pairs")
    ax.set_aspect('equal')
    ax.axis('off')

    return fig


def save_structure_plot(seq: str, pairs: Iterable[PairLike], path: Union[str, Path], dpi: int = 150) -> Path:
    """Render `plot_structure` to an image file and close the figure."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig = plot_structure(seq, pairs)
    fig.savefig(out_path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
    return out_path
