"""
Randomise which guide of each pair sits in position 1 vs position 2.

Guide order within a combinatorial construct can bias screen readouts;
shuffling per row spreads each gene across both positions.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from .errors import DataError

SHUFFLED_COLS = ["gene_1", "guide_1", "gene_2", "guide_2"]


def shuffle_combo_lib(
    combo_lib: pd.DataFrame,
    rng: np.random.Generator | int | None = None,
) -> pd.DataFrame:
    """
    Flip a fair coin per row: "x" keeps (x, y) as (1, 2), "y" swaps them.

    Parameters
    ----------
    combo_lib:
      Table with gene_x, gene_y, guide_x, guide_y.
    rng:
      numpy Generator, integer seed, or None for fresh entropy. The same seed
      and input always give the same output.

    Returns
    -------
    pd.DataFrame
      gene_1, guide_1, gene_2, guide_2 with the same number of rows.
    """
    required = ["gene_x", "gene_y", "guide_x", "guide_y"]
    missing = [c for c in required if c not in combo_lib.columns]
    if missing:
        raise DataError(f"Library is missing required columns: {missing}")

    rng = np.random.default_rng(rng)
    first_x = rng.choice(np.array(["x", "y"]), size=len(combo_lib)) == "x"

    gx = combo_lib["gene_x"].to_numpy(dtype=object)
    gy = combo_lib["gene_y"].to_numpy(dtype=object)
    sx = combo_lib["guide_x"].to_numpy(dtype=object)
    sy = combo_lib["guide_y"].to_numpy(dtype=object)

    return pd.DataFrame(
        {
            "gene_1": np.where(first_x, gx, gy),
            "guide_1": np.where(first_x, sx, sy),
            "gene_2": np.where(first_x, gy, gx),
            "guide_2": np.where(first_x, sy, sx),
        },
        columns=SHUFFLED_COLS,
        index=combo_lib.index,
    )
