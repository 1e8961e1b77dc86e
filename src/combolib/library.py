"""
Design a combinatorial guide library from a single-gene design table.

Defaults for column names follow the GPP CRISPick output format.
"""
from __future__ import annotations

from typing import Iterable

import pandas as pd

from .errors import ConfigurationError, DataError
from .genes import design_gene_combos
from .guides import check_guide_pairing, design_guide_combos

DEFAULT_GENE_COL = "Target Gene Symbol"
DEFAULT_GUIDE_COL = "sgRNA Sequence"
DEFAULT_RANK_COL = "Pick Order"


def validate_config(
    all_by_all_gene: bool = False,
    row_genes: Iterable | None = None,
    col_genes: Iterable | None = None,
    ref_genes: Iterable | None = None,
    gene_pairs=None,
    guide_pairing: str = "all",
) -> None:
    """Fail fast on configuration problems before any data is read."""
    check_guide_pairing(guide_pairing)
    if (row_genes is None) != (col_genes is None):
        raise ConfigurationError("row_genes and col_genes must be given together")
    if not all_by_all_gene and row_genes is None and ref_genes is None and gene_pairs is None:
        raise ConfigurationError(
            "No pairing strategy selected: set all_by_all_gene, row_genes/col_genes, gene_pairs or ref_genes"
        )


def extract_guide_table(
    design_df: pd.DataFrame,
    gene_col: str = DEFAULT_GENE_COL,
    guide_col: str = DEFAULT_GUIDE_COL,
    rank_col: str = DEFAULT_RANK_COL,
) -> pd.DataFrame:
    """
    Select the gene, guide and rank columns and rename them to gene/guide/rank.

    Raises DataError if a column is missing or gene/guide hold nulls.
    """
    cols = [gene_col, guide_col, rank_col]
    missing = [c for c in cols if c not in design_df.columns]
    if missing:
        raise DataError(f"Design table is missing required columns: {missing}")

    guides = design_df[cols].copy()
    guides.columns = ["gene", "guide", "rank"]

    for col, src in (("gene", gene_col), ("guide", guide_col)):
        n_null = int(guides[col].isna().sum())
        if n_null:
            raise DataError(f"Design table has {n_null} null value(s) in column '{src}'")

    return guides.reset_index(drop=True)


def design_combo_lib(
    design_df: pd.DataFrame,
    all_by_all_gene: bool = False,
    row_genes: Iterable | None = None,
    col_genes: Iterable | None = None,
    ref_genes: Iterable | None = None,
    gene_pairs=None,
    guide_pairing: str = "all",
    dual_orientation: bool = False,
    *,
    self_pairs: bool = True,
    gene_col: str = DEFAULT_GENE_COL,
    guide_col: str = DEFAULT_GUIDE_COL,
    rank_col: str = DEFAULT_RANK_COL,
    show_progress: bool = False,
) -> pd.DataFrame:
    """
    Design a combinatorial library.

    Parameters
    ----------
    design_df:
      Single-gene design table (e.g. from CRISPick).
    all_by_all_gene:
      Pair all genes in the design table with all other genes (and themselves
      unless self_pairs is False).
    row_genes, col_genes:
      Genes to be paired with each other in a grid.
    ref_genes:
      All other genes are paired with these.
    gene_pairs:
      Programmed gene pairs (list of 2-tuples or two-column DataFrame).
    guide_pairing:
      "all" or "rank".
    dual_orientation:
      Pair guides in both directions.
    gene_col, guide_col, rank_col:
      Column names holding genes, guides and guide ranks.

    Returns
    -------
    pd.DataFrame
      gene_x, gene_y, guide_x, guide_y
    """
    validate_config(
        all_by_all_gene=all_by_all_gene,
        row_genes=row_genes,
        col_genes=col_genes,
        ref_genes=ref_genes,
        gene_pairs=gene_pairs,
        guide_pairing=guide_pairing,
    )

    guide_table = extract_guide_table(design_df, gene_col, guide_col, rank_col)
    all_genes = guide_table["gene"].unique().tolist()

    gene_combos = design_gene_combos(
        all_genes,
        all_by_all_gene=all_by_all_gene,
        row_genes=row_genes,
        col_genes=col_genes,
        gene_pairs=gene_pairs,
        ref_genes=ref_genes,
        dual_orientation=dual_orientation,
        self_pairs=self_pairs,
    )

    return design_guide_combos(
        gene_combos,
        guide_table,
        guide_pairing=guide_pairing,
        show_progress=show_progress,
    )
