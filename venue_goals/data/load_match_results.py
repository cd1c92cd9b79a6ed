"""
Match Results Loader for VenueGoals

This module reads the international match results file and validates it against
the expected schema before any analysis runs. Loading is all-or-nothing: either
every row is returned or a DataLoadError is raised.

Usage:
    from venue_goals.data.load_match_results import load_match_results

    df = load_match_results(Path("data/raw/results.csv"))

Input:
    Delimited text file with columns:
    date (month/day/year), home_team, away_team, home_score, away_score, neutral

Output:
    DataFrame with one row per match, scores as int64 and neutral as bool.
    The date column is kept as text; parsing happens in the transformer.

Author: VenueGoals Project
"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from venue_goals.config import DATE_FORMAT, FALSE_VALUES, REQUIRED_COLUMNS, TRUE_VALUES
from venue_goals.errors import DataLoadError

logger = logging.getLogger(__name__)


def _parse_score_column(df: pd.DataFrame, column: str) -> pd.Series:
    """
    Convert a score column to non-negative integers.

    Args:
        df: Raw DataFrame
        column: Name of the score column

    Returns:
        Series of int64 scores

    Raises:
        DataLoadError: If any value is missing, fractional or negative
    """
    numeric = pd.to_numeric(df[column], errors='coerce')

    bad_rows = df.index[numeric.isna() | (numeric % 1 != 0) | (numeric < 0)]
    if len(bad_rows) > 0:
        first = bad_rows[0]
        raise DataLoadError(
            f"Column '{column}' has {len(bad_rows)} invalid value(s); "
            f"first at row {first}: {df.at[first, column]!r}"
        )

    return numeric.astype('int64')


def _parse_neutral_column(df: pd.DataFrame) -> pd.Series:
    """
    Convert the boolean-like neutral column to bool.

    Accepts TRUE/FALSE, T/F, yes/no and 1/0 in any case.
    """
    text = df['neutral'].astype(str).str.strip().str.lower()
    mapped = text.map(lambda value: True if value in TRUE_VALUES else (False if value in FALSE_VALUES else None))

    bad_rows = df.index[mapped.isna()]
    if len(bad_rows) > 0:
        first = bad_rows[0]
        raise DataLoadError(
            f"Column 'neutral' has {len(bad_rows)} non-boolean value(s); "
            f"first at row {first}: {df.at[first, 'neutral']!r}"
        )

    return mapped.astype(bool)


def load_match_results(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load and validate the match results file.

    The delimiter is detected automatically. Extra columns (tournament, city,
    country, ...) are kept as they are.

    Args:
        path: Path to the delimited results file

    Returns:
        DataFrame with the required columns validated

    Raises:
        DataLoadError: If the file is missing or unreadable, a required column
            is absent, a score or neutral flag cannot be parsed, or no date in
            the file matches the month/day/year format
    """
    path = Path(path)
    logger.info(f"Loading match results from {path}")

    if not path.is_file():
        raise DataLoadError(f"Input file not found: {path}")

    try:
        df = pd.read_csv(path, sep=None, engine='python', dtype=str, keep_default_na=False)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise DataLoadError(f"Could not read {path}: {e}") from e

    df.columns = [str(col).strip() for col in df.columns]

    missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing_columns:
        raise DataLoadError(f"Missing required column(s) {missing_columns} in {path}")

    if df.empty:
        raise DataLoadError(f"No match rows found in {path}")

    df['home_score'] = _parse_score_column(df, 'home_score')
    df['away_score'] = _parse_score_column(df, 'away_score')
    df['neutral'] = _parse_neutral_column(df)

    # A date column where nothing parses is a schema mismatch, not a few bad rows
    parsed_dates = pd.to_datetime(df['date'].str.strip(), format=DATE_FORMAT, errors='coerce')
    if parsed_dates.notna().sum() == 0:
        raise DataLoadError(
            f"Column 'date' in {path} has no values in the expected format ({DATE_FORMAT})"
        )

    logger.info(f"Loaded {len(df)} matches with columns: {list(df.columns)}")

    return df
