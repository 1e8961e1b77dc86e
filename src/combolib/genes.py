"""
Gene-level pairing strategies.

Output table (`gene_combos`) is the contract for guides.design_guide_combos:
- gene_x, gene_y : one row per (directed) gene pair, no duplicate rows

Strategies
----------
- all-by-all  : every 2-combination of all genes, plus self-pairs (optional)
- row x col   : column gene -> gene_x, row gene -> gene_y
- reference   : query (non-reference) gene -> gene_x, reference gene -> gene_y
- gene pairs  : explicit pairs, taken by position (first column -> gene_x)

Rows keep first-appearance order of the strategies above, with the
explicit pairs placed before the reference pairs.
"""
from __future__ import annotations

from itertools import combinations, product
from typing import Iterable, Sequence

import pandas as pd

from .errors import ConfigurationError

GENE_COLS = ["gene_x", "gene_y"]


def _empty_combos() -> pd.DataFrame:
    return pd.DataFrame({c: pd.Series(dtype=object) for c in GENE_COLS})


def _unique(values: Iterable) -> list:
    """Unique values in first-appearance order."""
    return list(dict.fromkeys(values))


def get_combos(elements: Iterable, self_pairs: bool = True) -> pd.DataFrame:
    """
    Return all 2-combinations of `elements` as a table with columns el1, el2.

    >>> get_combos(["A", "B", "C"]).values.tolist()
    [['A', 'B'], ['A', 'C'], ['B', 'C'], ['A', 'A'], ['B', 'B'], ['C', 'C']]
    """
    elements = _unique(elements)
    rows = [(a, b) for a, b in combinations(elements, 2)]
    if self_pairs:
        rows += [(a, a) for a in elements]
    return pd.DataFrame(rows, columns=["el1", "el2"], dtype=object)


def _crossing(x_genes: Iterable, y_genes: Iterable) -> pd.DataFrame:
    """Sorted, de-duplicated cross product (x -> gene_x, y -> gene_y)."""
    rows = list(product(sorted(set(x_genes)), sorted(set(y_genes))))
    return pd.DataFrame(rows, columns=GENE_COLS, dtype=object)


def normalize_gene_pairs(gene_pairs) -> pd.DataFrame:
    """
    Coerce explicit gene pairs to a gene_x/gene_y table.

    Accepts a DataFrame with exactly two columns (renamed by position) or an
    iterable of 2-tuples.
    """
    if isinstance(gene_pairs, pd.DataFrame):
        if gene_pairs.shape[1] != 2:
            raise ConfigurationError(
                f"gene_pairs must have exactly 2 columns, got {gene_pairs.shape[1]}: {list(gene_pairs.columns)}"
            )
        df = gene_pairs.copy()
        df.columns = GENE_COLS
        return df.astype(object).reset_index(drop=True)

    rows: list[tuple] = []
    for pair in gene_pairs:
        pair = tuple(pair)
        if len(pair) != 2:
            raise ConfigurationError(f"Each gene pair must have exactly 2 genes, got {pair!r}")
        rows.append(pair)
    return pd.DataFrame(rows, columns=GENE_COLS, dtype=object)


def add_reverse_orientation(gene_combos: pd.DataFrame) -> pd.DataFrame:
    """
    Append the swapped (gene_y, gene_x) pair of every row and de-duplicate.

    Idempotent: applying it to its own output adds no rows.
    """
    rev = gene_combos.rename(columns={"gene_x": "gene_y", "gene_y": "gene_x"})[GENE_COLS]
    out = pd.concat([gene_combos[GENE_COLS], rev], ignore_index=True)
    return out.drop_duplicates().reset_index(drop=True)


def design_gene_combos(
    all_genes: Sequence,
    all_by_all_gene: bool = False,
    row_genes: Iterable | None = None,
    col_genes: Iterable | None = None,
    gene_pairs=None,
    ref_genes: Iterable | None = None,
    dual_orientation: bool = False,
    *,
    self_pairs: bool = True,
) -> pd.DataFrame:
    """
    Build the gene pair table from the requested strategies.

    Parameters
    ----------
    all_genes:
      Gene universe of the design table (used by all-by-all and reference).
    all_by_all_gene:
      Pair every gene with every other gene (and itself when self_pairs).
    row_genes, col_genes:
      Grid strategy; both or neither must be given.
    gene_pairs:
      Explicit pairs (list of 2-tuples or a two-column DataFrame).
    ref_genes:
      Every non-reference gene of all_genes is paired with every reference gene.
    dual_orientation:
      Also include (gene_y, gene_x) for every pair.
    self_pairs:
      Include (g, g) rows in the all-by-all strategy.

    Returns
    -------
    pd.DataFrame
      Unique gene_x/gene_y rows.

    Raises
    ------
    ConfigurationError
      No strategy requested, or row/col genes given without their counterpart.
    """
    if (row_genes is None) != (col_genes is None):
        raise ConfigurationError("row_genes and col_genes must be given together")
    if not all_by_all_gene and row_genes is None and gene_pairs is None and ref_genes is None:
        raise ConfigurationError(
            "No pairing strategy selected: set all_by_all_gene, row_genes/col_genes, gene_pairs or ref_genes"
        )

    all_genes = _unique(all_genes)
    parts: list[pd.DataFrame] = []

    if all_by_all_gene:
        parts.append(get_combos(all_genes, self_pairs=self_pairs).set_axis(GENE_COLS, axis=1))

    if row_genes is not None:
        parts.append(_crossing(col_genes, row_genes))

    if gene_pairs is not None:
        parts.append(normalize_gene_pairs(gene_pairs))

    if ref_genes is not None:
        ref_set = set(ref_genes)
        query_genes = [g for g in all_genes if g not in ref_set]
        parts.append(_crossing(query_genes, ref_set))

    parts = [p for p in parts if not p.empty]
    if not parts:
        return _empty_combos()

    gene_combos = pd.concat(parts, ignore_index=True).drop_duplicates().reset_index(drop=True)

    if dual_orientation:
        gene_combos = add_reverse_orientation(gene_combos)

    return gene_combos
