"""
Guide-level expansion of gene pairs.

Input tables
------------
- gene_combos : gene_x, gene_y (from genes.design_gene_combos)
- guide_table : gene, guide, rank (one row per guide; rank may be NaN)

Output table
------------
- gene_x, gene_y, guide_x, guide_y
  guide_* is "" when the gene has no guide in the design table.

Pairing policies
----------------
- "all"  : keep every guide_x x guide_y combination
- "rank" : keep combinations with equal ranks, or where exactly one rank is missing

Rows pairing a guide with itself are dropped unless one of the ranks is missing.
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd
from tqdm.auto import tqdm

from .errors import ConfigurationError, DataError

GUIDE_PAIRINGS = ("all", "rank")
GUIDE_TABLE_COLS = ["gene", "guide", "rank"]
OUTPUT_COLS = ["gene_x", "gene_y", "guide_x", "guide_y"]

# Stands in for a gene that has no guide in the design table.
MISSING_GUIDE: Tuple[Any, float] = (None, np.nan)


def check_guide_pairing(guide_pairing: str) -> str:
    if guide_pairing not in GUIDE_PAIRINGS:
        raise ConfigurationError(
            f"guide_pairing argument not recognized: {guide_pairing!r}. Options: {', '.join(GUIDE_PAIRINGS)}"
        )
    return guide_pairing


def check_guide_table(guide_table: pd.DataFrame) -> None:
    """Raise DataError if required columns are missing or join keys are null."""
    missing = [c for c in GUIDE_TABLE_COLS if c not in guide_table.columns]
    if missing:
        raise DataError(f"Guide table is missing required columns: {missing}")
    for col in ("gene", "guide"):
        n_null = int(guide_table[col].isna().sum())
        if n_null:
            raise DataError(f"Guide table has {n_null} null value(s) in column '{col}'")


def build_guide_index(guide_table: pd.DataFrame) -> Dict[Any, List[Tuple[Any, Any]]]:
    """Map gene -> [(guide, rank), ...] in design-table order."""
    check_guide_table(guide_table)
    index: Dict[Any, List[Tuple[Any, Any]]] = {}
    for gene, guide, rank in guide_table[GUIDE_TABLE_COLS].itertuples(index=False, name=None):
        index.setdefault(gene, []).append((guide, rank))
    return index


def _keep_pair(guide_x, rank_x, guide_y, rank_y, guide_pairing: str) -> bool:
    na_x = pd.isna(rank_x)
    na_y = pd.isna(rank_y)

    if guide_pairing == "rank":
        if na_x and na_y:
            return False
        if not (na_x or na_y) and rank_x != rank_y:
            return False

    # Self-pair exclusion: only when both ranks are known.
    if guide_x == guide_y and not (na_x or na_y):
        return False
    return True


def design_guide_combos(
    gene_combos: pd.DataFrame,
    guide_table: pd.DataFrame,
    guide_pairing: str = "all",
    *,
    show_progress: bool = False,
) -> pd.DataFrame:
    """
    Expand gene pairs into guide pairs.

    Parameters
    ----------
    gene_combos:
      Table with gene_x, gene_y.
    guide_table:
      Table with gene, guide, rank.
    guide_pairing:
      "all" | "rank"
    show_progress:
      Show a tqdm bar over gene pairs.

    Returns
    -------
    pd.DataFrame
      gene_x, gene_y, guide_x, guide_y; rows ordered by gene pair, then by
      gene_x guide, then by gene_y guide (design-table order).
    """
    check_guide_pairing(guide_pairing)
    missing = [c for c in ("gene_x", "gene_y") if c not in gene_combos.columns]
    if missing:
        raise DataError(f"Gene pair table is missing required columns: {missing}")

    index = build_guide_index(guide_table)
    placeholder = [MISSING_GUIDE]

    rows: List[tuple] = []
    iterator = gene_combos[["gene_x", "gene_y"]].itertuples(index=False, name=None)
    if show_progress:
        iterator = tqdm(iterator, total=len(gene_combos), desc="Pairing guides", leave=False)

    for gene_x, gene_y in iterator:
        for guide_x, rank_x in index.get(gene_x, placeholder):
            for guide_y, rank_y in index.get(gene_y, placeholder):
                if _keep_pair(guide_x, rank_x, guide_y, rank_y, guide_pairing):
                    rows.append((gene_x, gene_y, guide_x, guide_y))

    df = pd.DataFrame(rows, columns=OUTPUT_COLS, dtype=object)
    df[["guide_x", "guide_y"]] = df[["guide_x", "guide_y"]].fillna("")
    return df
