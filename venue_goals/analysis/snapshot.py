"""
Analysis result container and JSON snapshot for VenueGoals.

The pipeline returns one immutable AnalysisResult. It can be written to JSON
for later inspection and read back without loss of the summary statistics.

Author: VenueGoals Project
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np
import pandas as pd

from venue_goals.analysis.descriptive_stats import GroupSummary, OutcomeShare
from venue_goals.analysis.hypothesis_tests import (
    EffectSizeResult,
    NormalityComputed,
    NormalityResult,
    NotComputed,
    RankSumTestResult,
    VarianceTestResult,
    WelchTestResult,
)
from venue_goals.config import VENUE_TYPES
from venue_goals.errors import DataLoadError, RenderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """
    Everything one pipeline run produced.

    Two-sample results compare comparison[0] minus comparison[1]. A result is
    None when its stage failed; the reason is listed in failures.
    """

    n_matches: int
    comparison: Tuple[str, str] = tuple(VENUE_TYPES)
    summaries: Tuple[GroupSummary, ...] = ()
    summary_notes: Tuple[str, ...] = ()
    outcomes: Tuple[OutcomeShare, ...] = ()
    normality: Dict[str, NormalityResult] = field(default_factory=dict)
    equal_variance: Optional[Union[VarianceTestResult, NotComputed]] = None
    welch: Optional[WelchTestResult] = None
    rank_sum: Optional[RankSumTestResult] = None
    effect_size: Optional[EffectSizeResult] = None
    excluded_dates: int = 0
    figures: Tuple[str, ...] = ()
    failures: Tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return len(self.failures) == 0


def convert_numpy_types(obj: Any) -> Any:
    """
    Convert numpy types to native Python types for JSON serialization.

    NaN becomes None.
    """
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, (np.floating, float)):
        return None if np.isnan(obj) else float(obj)
    elif isinstance(obj, np.ndarray):
        return [convert_numpy_types(item) for item in obj.tolist()]
    elif isinstance(obj, dict):
        return {key: convert_numpy_types(value) for key, value in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_numpy_types(item) for item in obj]
    elif obj is not None and not isinstance(obj, str) and pd.isna(obj):
        return None
    else:
        return obj


def _tagged(result) -> Optional[Dict]:
    if result is None:
        return None
    status = 'not_computed' if isinstance(result, NotComputed) else 'computed'
    return {'status': status, **asdict(result)}


def _untagged(data: Optional[Dict], computed_type):
    if data is None:
        return None
    fields = {key: value for key, value in data.items() if key != 'status'}
    if data['status'] == 'not_computed':
        return NotComputed(**fields)
    return computed_type(**_restore_floats(fields))


def _restore_floats(fields: Dict) -> Dict:
    return {key: (float('nan') if value is None else value) for key, value in fields.items()}


def _optional(data: Optional[Dict], result_type):
    return None if data is None else result_type(**_restore_floats(data))


def result_to_dict(result: AnalysisResult) -> Dict:
    """Flatten an AnalysisResult into JSON-compatible data."""
    data = {
        'n_matches': result.n_matches,
        'comparison': list(result.comparison),
        'summaries': [asdict(summary) for summary in result.summaries],
        'summary_notes': list(result.summary_notes),
        'outcomes': [asdict(outcome) for outcome in result.outcomes],
        'normality': {venue: _tagged(check) for venue, check in result.normality.items()},
        'equal_variance': _tagged(result.equal_variance),
        'welch': None if result.welch is None else asdict(result.welch),
        'rank_sum': None if result.rank_sum is None else asdict(result.rank_sum),
        'effect_size': None if result.effect_size is None else asdict(result.effect_size),
        'excluded_dates': result.excluded_dates,
        'figures': list(result.figures),
        'failures': list(result.failures)
    }
    return convert_numpy_types(data)


def result_from_dict(data: Dict) -> AnalysisResult:
    """Rebuild an AnalysisResult from result_to_dict output."""
    return AnalysisResult(
        n_matches=data['n_matches'],
        comparison=tuple(data['comparison']),
        summaries=tuple(GroupSummary(**_restore_floats(s)) for s in data['summaries']),
        summary_notes=tuple(data['summary_notes']),
        outcomes=tuple(OutcomeShare(**o) for o in data['outcomes']),
        normality={venue: _untagged(check, NormalityComputed) for venue, check in data['normality'].items()},
        equal_variance=_untagged(data['equal_variance'], VarianceTestResult),
        welch=_optional(data['welch'], WelchTestResult),
        rank_sum=_optional(data['rank_sum'], RankSumTestResult),
        effect_size=_optional(data['effect_size'], EffectSizeResult),
        excluded_dates=data['excluded_dates'],
        figures=tuple(data['figures']),
        failures=tuple(data['failures'])
    )


def save_snapshot(result: AnalysisResult, path: Path) -> Path:
    """
    Write the analysis result to a JSON file.

    Raises:
        RenderError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(result_to_dict(result), f, indent=2)
    except OSError as e:
        raise RenderError(f"Could not write snapshot to {path}: {e}") from e

    logger.info(f"Saved analysis snapshot to {path}")
    return path


def load_snapshot(path: Path) -> AnalysisResult:
    """
    Read an analysis result written by save_snapshot.

    Statistics stored as null (e.g. the std of a one-match group) come back as
    NaN. NaN never compares equal to itself, so such a result is not == to the
    one that was saved; compare those fields with np.isnan.

    Raises:
        DataLoadError: If the file is missing, unreadable or not a snapshot
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise DataLoadError(f"Could not read snapshot {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Snapshot {path} is not valid JSON: {e}") from e

    try:
        return result_from_dict(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise DataLoadError(f"Snapshot {path} does not describe an analysis result: {e}") from e
