from __future__ import annotations

import pandas as pd
import pytest

from combolib.cli import main
from combolib.errors import ConfigurationError
from combolib.helpers import parse_gene_pairs_arg, parse_genes_arg, read_design_file
from combolib.pipeline import run_pipeline


@pytest.fixture
def design_file(tmp_path, design_df):
    path = tmp_path / "design.txt"
    design_df.to_csv(path, sep="\t", index=False)
    return str(path)


def test_parse_genes_arg_inline_and_file(tmp_path) -> None:
    assert parse_genes_arg(None) is None
    assert parse_genes_arg("  ") is None
    assert parse_genes_arg("A, B,,C") == ["A", "B", "C"]

    path = tmp_path / "genes.txt"
    path.write_text("A\n\nB\n")
    assert parse_genes_arg(str(path)) == ["A", "B"]


def test_parse_gene_pairs_arg_inline() -> None:
    assert parse_gene_pairs_arg(None) is None
    assert parse_gene_pairs_arg("A:B, C:D") == [("A", "B"), ("C", "D")]
    with pytest.raises(ConfigurationError):
        parse_gene_pairs_arg("A:B:C")


def test_parse_gene_pairs_arg_file_skips_header(tmp_path) -> None:
    path = tmp_path / "pairs.tsv"
    path.write_text("gene_x\tgene_y\nA\tB\n\nC,D\n")
    assert parse_gene_pairs_arg(str(path)) == [("A", "B"), ("C", "D")]


def test_read_design_file_keeps_guides_as_strings(tmp_path) -> None:
    path = tmp_path / "design.csv"
    path.write_text("Target Gene Symbol,sgRNA Sequence,Pick Order\nA,0123,1\nB,ACGT,\n")
    df = read_design_file(str(path), rank_col="Pick Order")
    assert df["sgRNA Sequence"].tolist() == ["0123", "ACGT"]
    assert df["Pick Order"].iloc[0] == 1
    assert pd.isna(df["Pick Order"].iloc[1])


def test_parse_genes_arg_file_mixed_separators(tmp_path) -> None:
    path = tmp_path / "genes.txt"
    path.write_text("A\tB\nC, A\n\nB\n")
    assert parse_genes_arg(str(path)) == ["A", "B", "C"]
    assert parse_genes_arg("B,A,B") == ["B", "A"]


def test_parse_gene_pairs_arg_keeps_other_first_lines(tmp_path) -> None:
    path = tmp_path / "pairs.tsv"
    path.write_text("gene_a\tgene_b\nA\tB\n")
    assert parse_gene_pairs_arg(str(path)) == [("gene_a", "gene_b"), ("A", "B")]


def test_read_design_file_keeps_na_like_symbols(tmp_path) -> None:
    path = tmp_path / "design.txt"
    path.write_text("Target Gene Symbol\tsgRNA Sequence\tPick Order\nNA\tnan\t1\nNone\tACGT\t\n")
    df = read_design_file(str(path), rank_col="Pick Order")
    assert df["Target Gene Symbol"].tolist() == ["NA", "None"]
    assert df["sgRNA Sequence"].tolist() == ["nan", "ACGT"]
    assert pd.isna(df["Pick Order"].iloc[1])


def test_read_design_file_keeps_text_ranks(tmp_path) -> None:
    path = tmp_path / "design.txt"
    path.write_text("Target Gene Symbol\tsgRNA Sequence\tPick Order\nA\ta1\tfirst\nA\ta2\tsecond\nB\tb1\tfirst\n")
    df = read_design_file(str(path), rank_col="Pick Order")
    assert df["Pick Order"].tolist() == ["first", "second", "first"]


def test_run_pipeline_rank_pairing_with_text_ranks(tmp_path) -> None:
    path = tmp_path / "design.txt"
    path.write_text("Target Gene Symbol\tsgRNA Sequence\tPick Order\nA\ta1\tfirst\nA\ta2\tsecond\nB\tb1\tfirst\n")
    lib = run_pipeline(
        str(path),
        gene_pairs=[("A", "B")],
        guide_pairing="rank",
        outdir=str(tmp_path / "out"),
        write_csv=False,
        show_progress=False,
    )
    assert lib.values.tolist() == [["A", "B", "a1", "b1"]]


def test_run_pipeline_warns_on_unknown_pair_genes(tmp_path, design_file, capsys) -> None:
    lib = run_pipeline(
        design_file,
        gene_pairs=[("gene_a", "gene_b"), ("A", "B")],
        outdir=str(tmp_path),
        write_csv=False,
        show_progress=False,
    )
    out = capsys.readouterr().out
    assert "Warning: 2 genes in gene_pairs not found" in out
    assert "['gene_a', 'gene_b']" in out
    assert lib.values.tolist()[0] == ["gene_a", "gene_b", "", ""]


def test_run_pipeline_writes_csv(tmp_path, design_file, capsys) -> None:
    outdir = tmp_path / "out"
    lib = run_pipeline(
        design_file,
        all_by_all_gene=True,
        guide_pairing="rank",
        outdir=str(outdir),
        basename="lib",
        show_progress=False,
    )
    written = pd.read_csv(outdir / "lib.csv", dtype=str, keep_default_na=False)
    assert list(written.columns) == ["gene_x", "gene_y", "guide_x", "guide_y"]
    assert len(written) == len(lib)
    assert "Finished. Designed" in capsys.readouterr().out


def test_run_pipeline_shuffle_is_seeded(tmp_path, design_file) -> None:
    kwargs = dict(all_by_all_gene=True, shuffle=True, seed=3, write_csv=False, show_progress=False)
    a = run_pipeline(design_file, outdir=str(tmp_path / "a"), **kwargs)
    b = run_pipeline(design_file, outdir=str(tmp_path / "b"), **kwargs)
    assert list(a.columns) == ["gene_1", "guide_1", "gene_2", "guide_2"]
    pd.testing.assert_frame_equal(a, b)


def test_run_pipeline_fails_before_reading(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        run_pipeline(str(tmp_path / "missing.txt"), outdir=str(tmp_path))


def test_cli_end_to_end(tmp_path, design_file) -> None:
    outdir = tmp_path / "cli"
    rc = main(
        [
            "--design", design_file,
            "--gene-pairs", "A:B",
            "--ref-genes", "C",
            "--guide-pairing", "rank",
            "--outdir", str(outdir),
            "--basename", "combo",
        ]
    )
    assert rc == 0
    written = pd.read_csv(outdir / "combo.csv", dtype=str)
    assert written.values.tolist() == [["A", "B", "a1", "b1"], ["A", "C", "a1", "c1"], ["B", "C", "b1", "c1"]]


def test_cli_reports_configuration_errors(tmp_path, design_file, capsys) -> None:
    rc = main(["--design", design_file, "--row-genes", "A", "--outdir", str(tmp_path)])
    assert rc == 2
    assert "row_genes and col_genes" in capsys.readouterr().err
