"""
Derived match columns for VenueGoals.

Adds venue type, goal totals, outcome labels and the match year to the loaded
results. The input DataFrame is never modified.

Author: VenueGoals Project
"""

import logging
from typing import Dict

import numpy as np
import pandas as pd

from venue_goals.config import (
    DATE_FORMAT,
    MATCH_OUTCOMES,
    OUTCOME_AWAY_WIN,
    OUTCOME_DRAW,
    OUTCOME_HOME_WIN,
    VENUE_HOME,
    VENUE_NEUTRAL,
    VENUE_TYPES,
)

logger = logging.getLogger(__name__)


def transform_matches(df: pd.DataFrame) -> pd.DataFrame:
    """
    Derive the analysis columns from the loaded match results.

    Adds:
        match_date: parsed date, NaT where the text does not match month/day/year
        year: nullable Int64, <NA> where match_date is NaT
        venue_type: 'Home' or 'Neutral'
        total_goals: home_score + away_score
        goal_difference: home_score - away_score
        match_outcome: 'Home Win', 'Away Win' or 'Draw'

    Rows with unparseable dates are kept; only date-based analyses drop them.

    Args:
        df: DataFrame returned by load_match_results

    Returns:
        New DataFrame with the derived columns
    """
    logger.info(f"Transforming {len(df)} matches")

    processed = df.copy()

    processed['match_date'] = pd.to_datetime(
        processed['date'].astype(str).str.strip(), format=DATE_FORMAT, errors='coerce'
    )
    processed['year'] = processed['match_date'].dt.year.astype('Int64')

    missing_dates = int(processed['match_date'].isna().sum())
    if missing_dates > 0:
        logger.warning(f"{missing_dates} matches have an unparseable date (kept with missing year)")

    processed['venue_type'] = pd.Categorical(
        np.where(processed['neutral'], VENUE_NEUTRAL, VENUE_HOME),
        categories=VENUE_TYPES
    )

    processed['total_goals'] = processed['home_score'] + processed['away_score']
    processed['goal_difference'] = processed['home_score'] - processed['away_score']

    processed['match_outcome'] = pd.Categorical(
        np.select(
            [processed['goal_difference'] > 0, processed['goal_difference'] < 0],
            [OUTCOME_HOME_WIN, OUTCOME_AWAY_WIN],
            default=OUTCOME_DRAW
        ),
        categories=MATCH_OUTCOMES
    )

    logger.info(f"Venue counts: {processed['venue_type'].value_counts().to_dict()}")

    return processed


def split_by_venue(df: pd.DataFrame) -> Dict[str, np.ndarray]:
    """
    Partition total goals into one float sample per venue type.

    Every row lands in exactly one sample. Venue types without matches map to
    an empty array.
    """
    return {
        venue: df.loc[df['venue_type'] == venue, 'total_goals'].to_numpy(dtype=float)
        for venue in VENUE_TYPES
    }
