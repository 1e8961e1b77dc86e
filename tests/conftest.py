import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def design_df() -> pd.DataFrame:
    """CRISPick-style design table: A has two ranked guides, B and C one each."""
    return pd.DataFrame(
        {
            "Target Gene Symbol": ["A", "A", "B", "C"],
            "sgRNA Sequence": ["a1", "a2", "b1", "c1"],
            "Pick Order": [1, 2, 1, 1],
            "On-Target Efficacy Score": [0.7, 0.5, 0.6, 0.9],
        }
    )


@pytest.fixture
def guide_table() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "gene": ["A", "A", "B"],
            "guide": ["a1", "a2", "b1"],
            "rank": [1, 2, 1],
        }
    )


@pytest.fixture
def unranked_guide_table() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "gene": ["G1", "G2", "G3"],
            "guide": ["g1", "g2", "g3"],
            "rank": [np.nan, np.nan, np.nan],
        }
    )
