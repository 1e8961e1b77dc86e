"""
End-to-end orchestrator for combolib.

High-level flow
--------------
1) Validate the pairing configuration (fail before touching any file)
2) Read the single-gene design file and extract gene/guide/rank columns
3) Build gene pairs from the requested strategies (+ reverse orientation)
4) Expand gene pairs into guide pairs under the guide pairing policy
5) Optionally shuffle guide positions 1/2 per row
6) Write CSV (+ optional Parquet) snapshots and print a summary
"""
from __future__ import annotations

import os

import numpy as np
import pandas as pd

from .helpers import read_design_file
from .library import (
    DEFAULT_GENE_COL,
    DEFAULT_GUIDE_COL,
    DEFAULT_RANK_COL,
    design_combo_lib,
    validate_config,
)
from .shuffle import shuffle_combo_lib


def run_pipeline(
    design_file: str,
    *,
    all_by_all_gene: bool = False,
    row_genes: list[str] | None = None,
    col_genes: list[str] | None = None,
    ref_genes: list[str] | None = None,
    gene_pairs: list[tuple[str, str]] | None = None,
    guide_pairing: str = "all",
    dual_orientation: bool = False,
    self_pairs: bool = True,
    gene_col: str = DEFAULT_GENE_COL,
    guide_col: str = DEFAULT_GUIDE_COL,
    rank_col: str = DEFAULT_RANK_COL,
    # Shuffling
    shuffle: bool = False,
    seed: int | None = None,
    # Outputs
    basename: str = "combo_lib",
    outdir: str = "out",
    write_csv: bool = True,
    write_parquet: bool = False,
    show_progress: bool = True,
) -> pd.DataFrame:
    """
    Run the combolib pipeline and return the final library.

    guide_pairing:
      - "all": every guide of gene_x with every guide of gene_y
      - "rank": only guides of equal rank (or paired with a missing guide)

    shuffle:
      - False: columns gene_x, gene_y, guide_x, guide_y
      - True: columns gene_1, guide_1, gene_2, guide_2, drawn with
        numpy.random.default_rng(seed)
    """
    validate_config(
        all_by_all_gene=all_by_all_gene,
        row_genes=row_genes,
        col_genes=col_genes,
        ref_genes=ref_genes,
        gene_pairs=gene_pairs,
        guide_pairing=guide_pairing,
    )

    os.makedirs(outdir, exist_ok=True)

    design_df = read_design_file(design_file, rank_col=rank_col)

    if gene_pairs is not None and gene_col in design_df.columns:
        known = set(design_df[gene_col].dropna())
        missing = list(dict.fromkeys(g for pair in gene_pairs for g in pair if g not in known))
        if missing:
            print(
                f"Warning: {len(missing)} genes in gene_pairs not found in design file "
                f"(paired with empty guides; showing first 10): {missing[:10]}"
            )

    library = design_combo_lib(
        design_df,
        all_by_all_gene=all_by_all_gene,
        row_genes=row_genes,
        col_genes=col_genes,
        ref_genes=ref_genes,
        gene_pairs=gene_pairs,
        guide_pairing=guide_pairing,
        dual_orientation=dual_orientation,
        self_pairs=self_pairs,
        gene_col=gene_col,
        guide_col=guide_col,
        rank_col=rank_col,
        show_progress=show_progress,
    )
    if library.empty:
        print("No guide pairs designed.")

    if shuffle:
        library = shuffle_combo_lib(library, np.random.default_rng(seed))

    csv_path = os.path.join(outdir, basename + ".csv")
    parquet_path = os.path.join(outdir, basename + ".parquet")
    if write_csv:
        library.to_csv(csv_path, index=False)
    if write_parquet:
        library.to_parquet(parquet_path, index=False)

    n_genes = design_df[gene_col].nunique()
    print(f"Finished. Designed {len(library)} guide pairs from {n_genes} genes.")
    if write_csv:
        print(f"   - {csv_path}")
    if write_parquet:
        print(f"   - {parquet_path}")

    return library
