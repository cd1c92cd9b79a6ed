"""
Shared constants for the VenueGoals analysis.

Paths default to the project layout:
    data/raw/results.csv     input match results
    reports/figures/         rendered plots
    reports/tables/          CSV tables, text report and snapshot

Author: VenueGoals Project
"""

from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_INPUT_PATH = PROJECT_ROOT / 'data' / 'raw' / 'results.csv'
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / 'reports'

# Input schema
REQUIRED_COLUMNS = ['date', 'home_team', 'away_team', 'home_score', 'away_score', 'neutral']
DATE_FORMAT = '%m/%d/%Y'

TRUE_VALUES = {'true', 't', 'yes', 'y', '1'}
FALSE_VALUES = {'false', 'f', 'no', 'n', '0'}

# Derived labels
VENUE_HOME = 'Home'
VENUE_NEUTRAL = 'Neutral'
VENUE_TYPES = [VENUE_HOME, VENUE_NEUTRAL]

OUTCOME_HOME_WIN = 'Home Win'
OUTCOME_AWAY_WIN = 'Away Win'
OUTCOME_DRAW = 'Draw'
MATCH_OUTCOMES = [OUTCOME_HOME_WIN, OUTCOME_AWAY_WIN, OUTCOME_DRAW]

# Statistics
CONFIDENCE_LEVEL = 0.95
SIGNIFICANCE_LEVEL = 0.05
SHAPIRO_MIN_N = 3
SHAPIRO_MAX_N = 5000
MIN_TWO_SAMPLE_N = 2
# Largest group size for the exact rank-sum distribution, as in scipy method="auto".
# Ties always use the normal approximation.
EXACT_RANK_SUM_MAX_N = 8

# Plotting
PLOT_DPI = 300
JITTER_SEED = 42

# Output file names
DISTRIBUTION_PLOT = 'goal_distribution.png'
VENUE_PLOT = 'venue_comparison.png'
TEMPORAL_PLOT = 'goals_over_time.png'
SUMMARY_TABLE = 'venue_goal_summary.csv'
OUTCOME_TABLE = 'venue_outcome_breakdown.csv'
REPORT_FILE = 'analysis_report.txt'
SNAPSHOT_FILE = 'analysis_snapshot.json'
