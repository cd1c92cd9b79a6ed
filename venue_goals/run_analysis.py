"""
Venue Goals Analysis: home venues vs neutral venues

This script runs the complete analysis of international football results once,
top to bottom:
1. Load and validate the match results file
2. Derive venue type, total goals, goal difference, outcome and year
3. Descriptive statistics and outcome breakdown per venue type
4. Assumption checks (Shapiro-Wilk, Levene)
5. Welch's t-test, Wilcoxon rank-sum test and Cohen's d
6. Distribution, venue comparison and time plots
7. Text report to stdout plus a JSON snapshot of the results

Usage:
    # Run from project root
    python -m venue_goals.run_analysis

    # Custom paths
    python -m venue_goals.run_analysis --input data/raw/results.csv --output-dir reports

Input:
    data/raw/results.csv (date, home_team, away_team, home_score, away_score, neutral)

Output:
    - Figures: reports/figures/*.png
    - Tables: reports/tables/*.csv
    - Report: reports/tables/analysis_report.txt
    - Snapshot: reports/tables/analysis_snapshot.json

Author: VenueGoals Project
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from venue_goals.analysis.descriptive_stats import (
    outcome_breakdown,
    outcome_shares,
    save_summary_tables,
    summarize_by_venue,
)
from venue_goals.analysis.hypothesis_tests import (
    cohens_d,
    rank_sum_test,
    run_assumption_checks,
    welch_t_test,
)
from venue_goals.analysis.report import print_report, save_report
from venue_goals.analysis.snapshot import AnalysisResult, save_snapshot
from venue_goals.config import (
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_DIR,
    REPORT_FILE,
    SNAPSHOT_FILE,
    VENUE_TYPES,
)
from venue_goals.data.load_match_results import load_match_results
from venue_goals.data.transform_matches import split_by_venue, transform_matches
from venue_goals.errors import DataLoadError, InsufficientDataError, RenderError
from venue_goals.visualization.plot_results import (
    plot_goal_distribution,
    plot_goals_over_time,
    plot_venue_comparison,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_pipeline(input_path: Path, output_dir: Path) -> AnalysisResult:
    """
    Run every analysis stage once and collect the results.

    Loading and transforming must succeed; a DataLoadError is raised to the
    caller. Later stages are independent: an InsufficientDataError or
    RenderError in one of them is logged and recorded in the result's
    failures while the remaining stages still run.

    Args:
        input_path: Match results file
        output_dir: Root directory for figures and tables

    Returns:
        AnalysisResult of the run
    """
    figures_dir = output_dir / 'figures'
    tables_dir = output_dir / 'tables'
    failures: List[str] = []

    logger.info("Part 1: Load & Transform")
    df = transform_matches(load_match_results(input_path))

    logger.info("Part 2: Descriptive Statistics")
    summaries, notes = summarize_by_venue(df)
    breakdown = outcome_breakdown(df)
    try:
        save_summary_tables(summaries, breakdown, tables_dir)
    except RenderError as e:
        logger.error(str(e))
        failures.append(str(e))

    logger.info("Part 3: Assumption Checks & Hypothesis Tests")
    samples = split_by_venue(df)
    first, second = (samples[venue] for venue in VENUE_TYPES)
    assumptions = run_assumption_checks(samples)

    test_results = {}
    for name, test in [('welch', welch_t_test), ('rank_sum', rank_sum_test), ('effect_size', cohens_d)]:
        try:
            test_results[name] = test(first, second)
        except InsufficientDataError as e:
            logger.error(str(e))
            failures.append(str(e))
            test_results[name] = None

    logger.info("Part 4: Plots")
    figures = []
    excluded_dates = int(df['year'].isna().sum())
    for plot in [plot_goal_distribution, plot_venue_comparison]:
        try:
            figures.append(str(plot(df, figures_dir)))
        except RenderError as e:
            logger.error(str(e))
            failures.append(str(e))
    try:
        temporal_plot, excluded_dates = plot_goals_over_time(df, figures_dir)
        figures.append(str(temporal_plot))
    except RenderError as e:
        logger.error(str(e))
        failures.append(str(e))

    return AnalysisResult(
        n_matches=len(df),
        comparison=tuple(VENUE_TYPES),
        summaries=tuple(summaries),
        summary_notes=tuple(notes),
        outcomes=tuple(outcome_shares(breakdown)),
        normality=assumptions['normality'],
        equal_variance=assumptions['equal_variance'],
        welch=test_results['welch'],
        rank_sum=test_results['rank_sum'],
        effect_size=test_results['effect_size'],
        excluded_dates=excluded_dates,
        figures=tuple(figures),
        failures=tuple(failures)
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    parser = argparse.ArgumentParser(description='Compare total goals at home venues and neutral venues')
    parser.add_argument(
        '--input',
        type=str,
        default=str(DEFAULT_INPUT_PATH),
        help=f'Path to the match results file (default: {DEFAULT_INPUT_PATH})'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        default=str(DEFAULT_OUTPUT_DIR),
        help=f'Directory for figures, tables and the report (default: {DEFAULT_OUTPUT_DIR})'
    )
    args = parser.parse_args(argv)

    output_dir = Path(args.output_dir)
    tables_dir = output_dir / 'tables'

    logger.info("=" * 80)
    logger.info("Starting Venue Goals Analysis")
    logger.info("=" * 80)

    try:
        result = run_pipeline(Path(args.input), output_dir)
    except DataLoadError as e:
        logger.error(f"Failed to load match results: {e}")
        return 1

    report = print_report(result)

    write_failed = False
    try:
        save_report(report, tables_dir / REPORT_FILE)
        save_snapshot(result, tables_dir / SNAPSHOT_FILE)
    except RenderError as e:
        logger.error(str(e))
        write_failed = True

    if result.failures or write_failed:
        logger.error("Analysis finished with failures")
        return 1

    logger.info("Analysis complete!")
    logger.info(f"Figures saved to: {output_dir / 'figures'}")
    logger.info(f"Tables saved to: {tables_dir}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
