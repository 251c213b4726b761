from rna_nussinov.visualization.structure_plot import (
    circular_layout,
    plot_structure,
    save_structure_plot,
)

__all__ = [
    "circular_layout",
    "plot_structure",
    "save_structure_plot",
]
