"""
Visualization for VenueGoals

Renders the three figures of the venue analysis:
- Distribution of total goals with density and fitted normal curve
- Total goals per venue type (box plot with jittered matches)
- Mean total goals per year and venue type

Usage:
    from venue_goals.visualization.plot_results import plot_goal_distribution

    plot_goal_distribution(processed_df, Path("reports/figures"))

Output:
    - reports/figures/goal_distribution.png
    - reports/figures/venue_comparison.png
    - reports/figures/goals_over_time.png

Author: VenueGoals Project
"""

import logging
from pathlib import Path
from typing import Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from scipy import stats

from venue_goals.config import (
    DISTRIBUTION_PLOT,
    JITTER_SEED,
    PLOT_DPI,
    TEMPORAL_PLOT,
    VENUE_HOME,
    VENUE_NEUTRAL,
    VENUE_PLOT,
    VENUE_TYPES,
)
from venue_goals.errors import RenderError

logger = logging.getLogger(__name__)

# Set seaborn style for publication-quality plots
sns.set_style("whitegrid")

VENUE_COLORS = {VENUE_HOME: 'steelblue', VENUE_NEUTRAL: 'coral'}


def _save_figure(fig, output_dir: Path, filename: str) -> Path:
    """
    Save and close a figure.

    Raises:
        RenderError: If the output directory cannot be created or written
    """
    output_file = output_dir / filename
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_file, dpi=PLOT_DPI, bbox_inches='tight')
    except OSError as e:
        raise RenderError(f"Could not write {output_file}: {e}") from e
    finally:
        plt.close(fig)

    logger.info(f"Saved {filename}")
    return output_file


def plot_goal_distribution(df: pd.DataFrame, output_dir: Path) -> Path:
    """
    Plot the distribution of total goals per match.

    Unit-width histogram on the density scale, a kernel density estimate and
    a normal curve using the sample mean and standard deviation.

    Args:
        df: Processed match DataFrame
        output_dir: Directory to save the figure

    Returns:
        Path of the written image
    """
    logger.info("Plotting total goals distribution")

    goals = df['total_goals'].astype(float)

    fig, ax = plt.subplots(figsize=(12, 6))

    sns.histplot(goals, discrete=True, stat='density', kde=len(goals) > 1,
                 color='steelblue', edgecolor='black', alpha=0.6, label='Matches', ax=ax)

    mean = goals.mean()
    std = goals.std(ddof=1)
    if len(goals) > 1 and std > 0:
        x = np.linspace(goals.min() - 1, goals.max() + 1, 300)
        ax.plot(x, stats.norm.pdf(x, loc=mean, scale=std), color='darkred', linestyle='--',
                linewidth=2, label=f'Normal (mean={mean:.2f}, sd={std:.2f})')

    ax.set_xlabel('Total Goals per Match', fontsize=12)
    ax.set_ylabel('Density', fontsize=12)
    ax.set_title('Distribution of Total Goals', fontsize=14, fontweight='bold')
    ax.legend()
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    return _save_figure(fig, output_dir, DISTRIBUTION_PLOT)


def plot_venue_comparison(df: pd.DataFrame, output_dir: Path) -> Path:
    """
    Box plot of total goals per venue type with each match drawn as a jittered
    point. Jitter only moves the markers; the data is not changed.

    Args:
        df: Processed match DataFrame
        output_dir: Directory to save the figure

    Returns:
        Path of the written image
    """
    logger.info("Plotting venue comparison")

    plot_df = df[['venue_type', 'total_goals']].copy()
    plot_df['venue_type'] = plot_df['venue_type'].astype(str)

    fig, ax = plt.subplots(figsize=(10, 6))

    sns.boxplot(data=plot_df, x='venue_type', y='total_goals', order=VENUE_TYPES,
                hue='venue_type', palette=VENUE_COLORS, legend=False,
                showfliers=False, width=0.5, ax=ax)

    # stripplot draws its jitter from numpy's global state; restore it afterwards
    rng_state = np.random.get_state()
    np.random.seed(JITTER_SEED)
    try:
        sns.stripplot(data=plot_df, x='venue_type', y='total_goals', order=VENUE_TYPES,
                      color='black', alpha=0.15, size=2, jitter=0.25, ax=ax)
    finally:
        np.random.set_state(rng_state)

    counts = plot_df['venue_type'].value_counts()
    ax.set_xticks(range(len(VENUE_TYPES)))
    ax.set_xticklabels([f"{venue}\n(n={counts.get(venue, 0)})" for venue in VENUE_TYPES])
    ax.set_xlabel('Venue Type', fontsize=12)
    ax.set_ylabel('Total Goals per Match', fontsize=12)
    ax.set_title('Total Goals by Venue Type', fontsize=14, fontweight='bold')
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    return _save_figure(fig, output_dir, VENUE_PLOT)


def plot_goals_over_time(df: pd.DataFrame, output_dir: Path) -> Tuple[Path, int]:
    """
    Plot mean total goals per year, one line per venue type.

    Matches without a parsed date are left out of this plot only and the
    number left out is logged.

    Args:
        df: Processed match DataFrame
        output_dir: Directory to save the figure

    Returns:
        Tuple of (path of the written image, number of matches excluded)
    """
    logger.info("Plotting mean total goals over time")

    dated = df[df['year'].notna()]
    excluded = len(df) - len(dated)
    if excluded > 0:
        logger.warning(f"Excluded {excluded} matches with missing dates from the time plot")

    yearly = (
        dated.groupby(['year', 'venue_type'], observed=True)['total_goals']
        .mean()
        .reset_index()
        .sort_values('year')
    )

    fig, ax = plt.subplots(figsize=(12, 6))

    for venue in VENUE_TYPES:
        venue_stats = yearly[yearly['venue_type'] == venue]
        if venue_stats.empty:
            continue
        ax.plot(venue_stats['year'].astype(int), venue_stats['total_goals'], marker='o',
                linewidth=1.5, markersize=3, label=venue, color=VENUE_COLORS[venue])

    ax.set_xlabel('Year', fontsize=12)
    ax.set_ylabel('Mean Total Goals', fontsize=12)
    ax.set_title('Mean Total Goals per Year by Venue Type', fontsize=14, fontweight='bold')
    ax.legend(fontsize=11)
    ax.grid(alpha=0.3)

    plt.tight_layout()
    return _save_figure(fig, output_dir, TEMPORAL_PLOT), excluded
