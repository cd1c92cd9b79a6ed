"""Tests for the JSON snapshot of an analysis run."""

import json
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from venue_goals.analysis.descriptive_stats import outcome_breakdown, outcome_shares, summarize_by_venue
from venue_goals.analysis.hypothesis_tests import (
    NotComputed,
    cohens_d,
    rank_sum_test,
    run_assumption_checks,
    welch_t_test,
)
from venue_goals.analysis.snapshot import (
    AnalysisResult,
    convert_numpy_types,
    load_snapshot,
    result_from_dict,
    result_to_dict,
    save_snapshot,
)
from venue_goals.data.transform_matches import split_by_venue
from venue_goals.errors import DataLoadError, RenderError


@pytest.fixture
def analysis_result(small_matches: pd.DataFrame) -> AnalysisResult:
    summaries, notes = summarize_by_venue(small_matches)
    samples = split_by_venue(small_matches)
    checks = run_assumption_checks(samples)
    home, neutral = samples["Home"], samples["Neutral"]

    return AnalysisResult(
        n_matches=len(small_matches),
        summaries=tuple(summaries),
        summary_notes=tuple(notes),
        outcomes=tuple(outcome_shares(outcome_breakdown(small_matches))),
        normality=checks["normality"],
        equal_variance=checks["equal_variance"],
        welch=welch_t_test(home, neutral),
        rank_sum=rank_sum_test(home, neutral),
        effect_size=cohens_d(home, neutral),
        excluded_dates=1,
        figures=("figures/goal_distribution.png",),
    )


def test_snapshot_round_trip(analysis_result: AnalysisResult, tmp_path: Path) -> None:
    path = save_snapshot(analysis_result, tmp_path / "tables" / "analysis_snapshot.json")

    restored = load_snapshot(path)

    assert restored.summaries == analysis_result.summaries
    assert restored == analysis_result


def test_snapshot_is_plain_json(analysis_result: AnalysisResult, tmp_path: Path) -> None:
    path = save_snapshot(analysis_result, tmp_path / "snapshot.json")
    data = json.loads(path.read_text(encoding="utf-8"))

    assert data["n_matches"] == 8
    assert data["comparison"] == ["Home", "Neutral"]
    assert data["normality"]["Home"]["status"] == "computed"
    assert data["summaries"][0]["venue_type"] == "Home"


def test_not_computed_and_missing_results_round_trip() -> None:
    result = AnalysisResult(
        n_matches=2,
        normality={"Home": NotComputed(reason="sample size 1 outside [3, 5000]")},
        equal_variance=NotComputed(reason="needs at least 2 observations per group (got 1 and 1)"),
        failures=("Welch's t-test needs at least 2 observations per group (got 1 and 1)",),
    )

    restored = result_from_dict(json.loads(json.dumps(result_to_dict(result))))

    assert restored == result
    assert not restored.succeeded


def test_nan_std_becomes_null_and_back(raw_matches_factory) -> None:
    from venue_goals.data.transform_matches import transform_matches

    df = transform_matches(raw_matches_factory([("01/01/2000", 2, 0, False), ("01/02/2000", 3, 1, True)]))
    summaries, _ = summarize_by_venue(df)
    data = result_to_dict(AnalysisResult(n_matches=2, summaries=tuple(summaries)))

    assert data["summaries"][0]["std"] is None
    assert np.isnan(result_from_dict(data).summaries[0].std)


def test_convert_numpy_types() -> None:
    converted = convert_numpy_types({"a": np.int64(3), "b": np.float64(0.5), "c": np.array([1, 2]),
                                     "d": float("nan"), "e": ("x", None)})
    assert converted == {"a": 3, "b": 0.5, "c": [1, 2], "d": None, "e": ["x", None]}
    assert type(converted["a"]) is int


def test_save_snapshot_unwritable_path(analysis_result: AnalysisResult, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("occupied")

    with pytest.raises(RenderError):
        save_snapshot(analysis_result, blocker / "snapshot.json")


def test_one_match_groups_round_trip_with_nan_std(raw_matches_factory, tmp_path: Path) -> None:
    from venue_goals.data.transform_matches import transform_matches

    df = transform_matches(raw_matches_factory([("01/01/2000", 2, 0, False), ("01/02/2000", 3, 1, True)]))
    summaries, _ = summarize_by_venue(df)
    result = AnalysisResult(n_matches=2, summaries=tuple(summaries))

    restored = load_snapshot(save_snapshot(result, tmp_path / "snapshot.json"))

    assert len(restored.summaries) == len(result.summaries)
    for before, after in zip(result.summaries, restored.summaries):
        assert np.isnan(before.std) and np.isnan(after.std)
        assert (after.venue_type, after.count, after.mean, after.median, after.min, after.max) == (
            before.venue_type, before.count, before.mean, before.median, before.min, before.max
        )
    assert restored.n_matches == result.n_matches


def test_load_snapshot_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DataLoadError):
        load_snapshot(tmp_path / "missing.json")


@pytest.mark.parametrize("content", ["{not json", "[]", "{}"])
def test_load_snapshot_malformed_content(content: str, tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(DataLoadError):
        load_snapshot(path)
