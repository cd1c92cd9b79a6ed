"""
Descriptive Statistics for VenueGoals

Summarizes total goals per venue type (home venue vs neutral venue) and breaks
down match outcomes per venue type. Results are returned as plain objects and
can be written as CSV tables for the report.

Usage:
    from venue_goals.analysis.descriptive_stats import summarize_by_venue

    summaries, notes = summarize_by_venue(processed_df)

Output:
    - Tables: reports/tables/venue_goal_summary.csv
    - Tables: reports/tables/venue_outcome_breakdown.csv

Author: VenueGoals Project
"""

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List, Tuple

import pandas as pd

from venue_goals.config import MATCH_OUTCOMES, OUTCOME_TABLE, SUMMARY_TABLE, VENUE_TYPES
from venue_goals.errors import RenderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupSummary:
    """Total goals summary for one venue type. std uses ddof=1 (NaN when count is 1)."""

    venue_type: str
    count: int
    mean: float
    std: float
    median: float
    min: float
    max: float


@dataclass(frozen=True)
class OutcomeShare:
    venue_type: str
    match_outcome: str
    matches: int
    share: float


def summarize_by_venue(df: pd.DataFrame) -> Tuple[List[GroupSummary], List[str]]:
    """
    Compute count, mean, standard deviation, median, min and max of total goals
    per venue type.

    Venue types without any match are left out of the summary and reported in
    the returned notes instead.

    Args:
        df: Processed match DataFrame

    Returns:
        Tuple of (group summaries in venue order, notes about omitted groups)
    """
    logger.info("Computing total goals summary by venue type")

    stats = df.groupby('venue_type', observed=False)['total_goals'].agg(
        ['count', 'mean', 'std', 'median', 'min', 'max']
    )

    summaries = []
    notes = []
    for venue in VENUE_TYPES:
        if venue not in stats.index or stats.loc[venue, 'count'] == 0:
            note = f"No {venue} matches in the data; {venue} group omitted from the summary"
            logger.warning(note)
            notes.append(note)
            continue

        row = stats.loc[venue]
        summaries.append(GroupSummary(
            venue_type=venue,
            count=int(row['count']),
            mean=float(row['mean']),
            std=float(row['std']),
            median=float(row['median']),
            min=float(row['min']),
            max=float(row['max'])
        ))

    return summaries, notes


def outcome_breakdown(df: pd.DataFrame) -> pd.DataFrame:
    """
    Count home wins, away wins and draws per venue type.

    Returns:
        Long DataFrame with columns venue_type, match_outcome, matches, share.
        Shares sum to 1 within each venue type that has matches.
    """
    counts = pd.crosstab(df['venue_type'], df['match_outcome'], dropna=False)
    counts = counts.reindex(index=VENUE_TYPES, columns=MATCH_OUTCOMES, fill_value=0)

    breakdown = pd.DataFrame([
        {'venue_type': venue, 'match_outcome': outcome, 'matches': int(counts.loc[venue, outcome])}
        for venue in VENUE_TYPES
        for outcome in MATCH_OUTCOMES
    ])

    totals = breakdown.groupby('venue_type')['matches'].transform('sum')
    breakdown['share'] = (breakdown['matches'] / totals.where(totals > 0)).fillna(0.0)

    return breakdown


def outcome_shares(breakdown: pd.DataFrame) -> List[OutcomeShare]:
    """Convert an outcome breakdown table into OutcomeShare records."""
    return [
        OutcomeShare(
            venue_type=row.venue_type,
            match_outcome=row.match_outcome,
            matches=int(row.matches),
            share=float(row.share)
        )
        for row in breakdown.itertuples(index=False)
    ]


def save_summary_tables(summaries: List[GroupSummary], breakdown: pd.DataFrame, tables_dir: Path) -> List[Path]:
    """
    Write the venue summary and outcome breakdown as CSV.

    Raises:
        RenderError: If the tables directory is not writable
    """
    summary_path = tables_dir / SUMMARY_TABLE
    outcome_path = tables_dir / OUTCOME_TABLE

    try:
        tables_dir.mkdir(parents=True, exist_ok=True)
        pd.DataFrame([asdict(s) for s in summaries]).to_csv(summary_path, index=False)
        breakdown.to_csv(outcome_path, index=False)
    except OSError as e:
        raise RenderError(f"Could not write summary tables to {tables_dir}: {e}") from e

    logger.info(f"Saved {SUMMARY_TABLE} and {OUTCOME_TABLE}")

    return [summary_path, outcome_path]
