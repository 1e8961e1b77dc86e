"""
CLI for combolib.
"""
from __future__ import annotations

import argparse
import sys

from .errors import ComboLibError
from .helpers import parse_gene_pairs_arg, parse_genes_arg
from .library import DEFAULT_GENE_COL, DEFAULT_GUIDE_COL, DEFAULT_RANK_COL
from .pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Design combinatorial CRISPR guide libraries")

    # Inputs
    ap.add_argument("--design", required=True, help="Single-gene design file (CRISPick .txt/.tsv, or .csv).")
    ap.add_argument("--gene-col", default=DEFAULT_GENE_COL, help="Column with gene symbols.")
    ap.add_argument("--guide-col", default=DEFAULT_GUIDE_COL, help="Column with guide sequences.")
    ap.add_argument("--rank-col", default=DEFAULT_RANK_COL, help="Column with guide ranks (pick order).")

    # Gene pairing strategies
    ap.add_argument("--all-by-all", dest="all_by_all", action="store_true", help="Pair every gene with every other gene.")
    ap.add_argument("--no-self-pairs", dest="self_pairs", action="store_false", help="Do not pair genes with themselves in --all-by-all.")
    ap.set_defaults(self_pairs=True)
    ap.add_argument("--row-genes", default=None, help="File (one gene per line) or comma-separated genes; requires --col-genes.")
    ap.add_argument("--col-genes", default=None, help="File (one gene per line) or comma-separated genes; requires --row-genes.")
    ap.add_argument("--ref-genes", default=None, help="File or comma-separated genes every other gene is paired with.")
    ap.add_argument("--gene-pairs", default=None, help="Two-column file of gene pairs, or inline 'A:B,C:D'.")
    ap.add_argument("--dual-orientation", action="store_true", help="Include both (a,b) and (b,a) for every gene pair.")

    # Guide pairing
    ap.add_argument("--guide-pairing", choices=["all", "rank"], default="all", help="Pair all guides, or only guides of equal rank.")

    # Shuffling
    ap.add_argument("--shuffle", dest="shuffle", action="store_true", help="Randomise guide positions 1/2 per pair.")
    ap.add_argument("--no-shuffle", dest="shuffle", action="store_false", help="Keep gene_x/gene_y order (default).")
    ap.set_defaults(shuffle=False)
    ap.add_argument("--seed", type=int, default=None, help="Random seed for --shuffle.")

    # Outputs
    ap.add_argument("--basename", default="combo_lib", help="Base name for output files.")
    ap.add_argument("--outdir", default="out", help="Output directory.")
    ap.add_argument("--write-csv", dest="write_csv", action="store_true", help="Write output table as CSV.")
    ap.add_argument("--no-write-csv", dest="write_csv", action="store_false", help="Do not write output table as CSV.")
    ap.set_defaults(write_csv=True)
    ap.add_argument("--write-parquet", dest="write_parquet", action="store_true", help="Also write output table as Parquet.")
    ap.add_argument("--no-write-parquet", dest="write_parquet", action="store_false", help="Do not write output table as Parquet.")
    ap.set_defaults(write_parquet=False)

    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        run_pipeline(
            args.design,
            all_by_all_gene=args.all_by_all,
            row_genes=parse_genes_arg(args.row_genes),
            col_genes=parse_genes_arg(args.col_genes),
            ref_genes=parse_genes_arg(args.ref_genes),
            gene_pairs=parse_gene_pairs_arg(args.gene_pairs),
            guide_pairing=args.guide_pairing,
            dual_orientation=args.dual_orientation,
            self_pairs=args.self_pairs,
            gene_col=args.gene_col,
            guide_col=args.guide_col,
            rank_col=args.rank_col,
            shuffle=args.shuffle,
            seed=args.seed,
            basename=args.basename,
            outdir=args.outdir,
            write_csv=args.write_csv,
            write_parquet=args.write_parquet,
        )
    except ComboLibError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
