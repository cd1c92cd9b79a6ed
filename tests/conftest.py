"""Pytest fixtures for VenueGoals tests."""

from pathlib import Path
from typing import List, Tuple

import matplotlib
import numpy as np
import pandas as pd
import pytest

matplotlib.use("Agg")

from venue_goals.data.transform_matches import transform_matches  # noqa: E402


def make_raw_matches(rows: List[Tuple]) -> pd.DataFrame:
    """Build a loaded-style frame from (date, home_score, away_score, neutral) tuples."""
    return pd.DataFrame(
        {
            "date": [r[0] for r in rows],
            "home_team": [f"Team {i}" for i in range(len(rows))],
            "away_team": [f"Team {i + 100}" for i in range(len(rows))],
            "home_score": pd.Series([r[1] for r in rows], dtype="int64"),
            "away_score": pd.Series([r[2] for r in rows], dtype="int64"),
            "neutral": pd.Series([r[3] for r in rows], dtype=bool),
        }
    )


def _goals_with_exact_sum(rng: np.random.Generator, n: int, lam: float, target_sum: int) -> np.ndarray:
    """Poisson draws nudged by +/-1 so the sample sums to target_sum."""
    goals = rng.poisson(lam, size=n)
    deficit = target_sum - int(goals.sum())
    if deficit > 0:
        goals[:deficit] += 1
    elif deficit < 0:
        positive = np.flatnonzero(goals > 0)[: -deficit]
        goals[positive] -= 1
    return goals


@pytest.fixture
def raw_matches_factory():
    """Factory building loaded-style frames from (date, home_score, away_score, neutral) tuples."""
    return make_raw_matches


@pytest.fixture
def small_matches() -> pd.DataFrame:
    """Eight processed matches, four per venue type, one unparseable date."""
    raw = make_raw_matches(
        [
            ("01/15/2001", 2, 1, False),
            ("06/02/2001", 0, 0, False),
            ("03/09/2002", 1, 3, False),
            ("not a date", 4, 2, False),
            ("07/01/2001", 1, 1, True),
            ("07/04/2001", 3, 2, True),
            ("08/20/2002", 0, 2, True),
            ("11/11/2002", 5, 1, True),
        ]
    )
    return transform_matches(raw)


@pytest.fixture(scope="session")
def realistic_matches() -> pd.DataFrame:
    """
    9,761 processed matches: 5,600 at home venues averaging 3.74 goals and
    4,161 at neutral venues averaging about 3.79 goals.
    """
    rng = np.random.default_rng(20240101)
    home_goals = _goals_with_exact_sum(rng, 5600, 3.74, 20944)
    neutral_goals = _goals_with_exact_sum(rng, 4161, 3.79, 15770)

    goals = np.concatenate([home_goals, neutral_goals])
    home_share = rng.integers(0, goals + 1)
    neutral = np.array([False] * len(home_goals) + [True] * len(neutral_goals))
    years = rng.integers(1990, 2024, size=len(goals))
    dates = [f"{m:02d}/{d:02d}/{y}" for m, d, y in zip(
        rng.integers(1, 13, size=len(goals)), rng.integers(1, 29, size=len(goals)), years
    )]

    raw = make_raw_matches(list(zip(dates, home_share, goals - home_share, neutral)))
    return transform_matches(raw)


@pytest.fixture
def results_csv(tmp_path: Path) -> Path:
    """A small results file in the published column layout."""
    path = tmp_path / "results.csv"
    path.write_text(
        "date,home_team,away_team,home_score,away_score,tournament,city,country,neutral\n"
        "03/08/1872,Scotland,England,0,0,Friendly,Glasgow,Scotland,FALSE\n"
        "03/06/1873,England,Scotland,4,2,Friendly,London,England,FALSE\n"
        "03/07/1874,Scotland,England,2,1,Friendly,Glasgow,Scotland,FALSE\n"
        "01/18/1876,Wales,Scotland,0,4,Friendly,Glasgow,Scotland,TRUE\n"
        "03/25/1876,Scotland,Wales,4,0,Friendly,Glasgow,Scotland,TRUE\n"
        "02/05/1877,Wales,England,1,2,Friendly,London,England,TRUE\n"
        "13/45/1878,England,Scotland,2,7,Friendly,London,England,FALSE\n",
        encoding="utf-8",
    )
    return path
