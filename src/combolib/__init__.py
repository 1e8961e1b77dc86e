"""
combolib: combinatorial CRISPR guide library design.

Pairs genes from a single-gene design table (all-by-all, row x column grid,
reference vs query, explicit pairs), expands gene pairs into guide pairs,
and optionally shuffles guide positions.

Usage:
    python -m combolib.cli --help
"""
__version__ = "0.1.0"

from .errors import ComboLibError, ConfigurationError, DataError
from .genes import add_reverse_orientation, design_gene_combos, get_combos
from .guides import design_guide_combos
from .library import design_combo_lib
from .shuffle import shuffle_combo_lib

__all__ = [
    "ComboLibError",
    "ConfigurationError",
    "DataError",
    "add_reverse_orientation",
    "design_gene_combos",
    "get_combos",
    "design_guide_combos",
    "design_combo_lib",
    "shuffle_combo_lib",
]
