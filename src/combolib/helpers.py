from __future__ import annotations

import os
import re

import pandas as pd

from .errors import ConfigurationError

_FIELD_SPLIT = re.compile(r"[\s,]+")
_PAIR_HEADER = ("gene_x", "gene_y")


def _unique(values) -> list[str]:
    return list(dict.fromkeys(values))


def parse_genes_arg(genes: str | None) -> list[str] | None:
    """
    Parse a gene set for the row/col/ref strategies.

    None or blank text means the strategy was not requested. An existing file
    holds genes separated by newlines, tabs, spaces or commas; anything else is
    a comma-separated list. Repeated genes are collapsed in first-seen order.
    """
    if genes is None or not str(genes).strip():
        return None

    text = str(genes).strip()
    if os.path.exists(text):
        with open(text) as fh:
            text = fh.read()
        fields = _FIELD_SPLIT.split(text)
    else:
        fields = text.split(",")

    return _unique(f.strip() for f in fields if f.strip())


def _split_pair(text: str, sep: re.Pattern) -> tuple[str, str]:
    fields = [f for f in sep.split(text.strip()) if f]
    if len(fields) != 2:
        raise ConfigurationError(f"Expected exactly 2 genes per pair, got {text.strip()!r}")
    return fields[0], fields[1]


def parse_gene_pairs_arg(pairs: str | None) -> list[tuple[str, str]] | None:
    """
    Parse an explicit gene pairs argument, accepting:
      - None / empty -> None
      - path to a file -> two columns per non-empty line (tab, comma or space
        separated); only a first line reading exactly "gene_x gene_y" is
        treated as a header, any other first line is a gene pair
      - inline text -> "A:B,C:D"

    The first gene of each pair becomes gene_x. Genes are not checked against
    the design table here; run_pipeline warns about unknown ones.
    """
    if pairs is None:
        return None

    pairs = str(pairs).strip()
    if not pairs:
        return None

    if os.path.exists(pairs):
        with open(pairs) as fh:
            lines = [ln for ln in fh if ln.strip()]
        out = [_split_pair(ln, _FIELD_SPLIT) for ln in lines]
        if out and out[0] == _PAIR_HEADER:
            out = out[1:]
        return out

    return [_split_pair(p, re.compile(":")) for p in pairs.split(",") if p.strip()]


def _coerce_rank(rank: pd.Series) -> pd.Series:
    """Numeric ranks when every non-null value parses, otherwise the values as read."""
    numeric = pd.to_numeric(rank, errors="coerce")
    if (numeric.isna() & rank.notna()).any():
        return rank
    return numeric


def read_design_file(path: str, rank_col: str | None = None) -> pd.DataFrame:
    """
    Read a single-gene design table.

    ".csv" files are comma-separated; anything else (CRISPick ".txt", ".tsv")
    is read as tab-separated. Columns are read as strings and only empty
    cells count as missing, so symbols such as "NA" or "None" survive.
    `rank_col` is converted to numbers only when all of its values are
    numeric; ranks like "first"/"second" are kept as text and compared as is.
    """
    sep = "," if path.lower().endswith(".csv") else "\t"
    df = pd.read_csv(path, sep=sep, dtype=str, keep_default_na=False, na_values=[""])
    if rank_col is not None and rank_col in df.columns:
        df[rank_col] = _coerce_rank(df[rank_col])
    return df
