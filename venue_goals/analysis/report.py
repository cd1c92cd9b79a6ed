"""
Text report for VenueGoals.

Builds the console report from an AnalysisResult: descriptive statistics,
assumption tests, hypothesis tests, effect size and notes.

Author: VenueGoals Project
"""

import logging
from pathlib import Path
from typing import List

from venue_goals.analysis.hypothesis_tests import NotComputed
from venue_goals.analysis.snapshot import AnalysisResult
from venue_goals.config import SIGNIFICANCE_LEVEL
from venue_goals.errors import RenderError

logger = logging.getLogger(__name__)

RULE = "=" * 80
SUB_RULE = "-" * 80


def _decision(p_value: float) -> str:
    if p_value < SIGNIFICANCE_LEVEL:
        return f"reject H0 at alpha = {SIGNIFICANCE_LEVEL}"
    return f"fail to reject H0 at alpha = {SIGNIFICANCE_LEVEL}"


def _section(lines: List[str], title: str):
    lines.append(title)
    lines.append(SUB_RULE)


def build_report(result: AnalysisResult) -> str:
    """
    Render the analysis result as a multi-section text report.

    Args:
        result: Pipeline result

    Returns:
        Report text
    """
    first, second = result.comparison
    lines = [RULE, "VENUE GOALS ANALYSIS REPORT", RULE, ""]

    _section(lines, "1. DESCRIPTIVE STATISTICS (total goals)")
    lines.append(f"Total matches analysed: {result.n_matches}")
    for s in result.summaries:
        lines.append(
            f"  {s.venue_type:<8} n={s.count:<6} mean={s.mean:.4f} sd={s.std:.4f} "
            f"median={s.median:g} min={s.min:g} max={s.max:g}"
        )
    if result.outcomes:
        lines.append("")
        lines.append("Match outcomes by venue type:")
        for o in result.outcomes:
            lines.append(f"  {o.venue_type:<8} {o.match_outcome:<9} {o.matches:>6} ({o.share * 100:.2f}%)")
    lines.append("")

    _section(lines, "2. ASSUMPTION TESTS")
    lines.append("Shapiro-Wilk normality test:")
    for venue, check in result.normality.items():
        if isinstance(check, NotComputed):
            lines.append(f"  {venue:<8} not computed ({check.reason})")
        else:
            lines.append(f"  {venue:<8} W = {check.statistic:.6f}, p-value = {check.p_value:.6g}")
    lines.append("Levene's test for equal variances (median centred):")
    if result.equal_variance is None:
        lines.append("  not available")
    elif isinstance(result.equal_variance, NotComputed):
        lines.append(f"  not computed ({result.equal_variance.reason})")
    else:
        lines.append(
            f"  F = {result.equal_variance.statistic:.6f}, p-value = {result.equal_variance.p_value:.6g}"
        )
    lines.append("")

    _section(lines, f"3. HYPOTHESIS TESTS ({first} vs {second}, two-sided)")
    welch = result.welch
    if welch is None:
        lines.append("Welch's t-test: not available")
    else:
        level = int(round(welch.confidence_level * 100))
        lines.append("Welch two-sample t-test:")
        lines.append(f"  t = {welch.statistic:.6f}, df = {welch.df:.2f}, p-value = {welch.p_value!r}")
        lines.append(
            f"  mean difference = {welch.mean_difference:.6f}, "
            f"{level}% CI [{welch.ci_lower:.6f}, {welch.ci_upper:.6f}]"
        )
        lines.append(f"  Decision: {_decision(welch.p_value)}")

    rank_sum = result.rank_sum
    if rank_sum is None:
        lines.append("Wilcoxon rank-sum test: not available")
    else:
        lines.append(f"Wilcoxon rank-sum test ({rank_sum.method}):")
        lines.append(f"  W = {rank_sum.statistic:g}, p-value = {rank_sum.p_value!r}")
        lines.append(f"  Decision: {_decision(rank_sum.p_value)}")
    lines.append("")

    _section(lines, "4. EFFECT SIZE")
    effect = result.effect_size
    if effect is None:
        lines.append("Cohen's d: not available")
    else:
        level = int(round(effect.confidence_level * 100))
        lines.append(
            f"Cohen's d = {effect.estimate:.6f} ({effect.magnitude}), "
            f"{level}% CI [{effect.ci_lower:.6f}, {effect.ci_upper:.6f}]"
        )
    lines.append("")

    notes = list(result.summary_notes)
    if result.excluded_dates > 0:
        notes.append(f"{result.excluded_dates} matches without a valid date were left out of the time plot")
    notes.extend(f"FAILED: {failure}" for failure in result.failures)
    if notes:
        _section(lines, "5. NOTES")
        lines.extend(f"  {note}" for note in notes)
        lines.append("")

    lines.append(RULE)
    lines.append("END OF REPORT")
    lines.append(RULE)

    return "\n".join(lines) + "\n"


def save_report(report: str, path: Path) -> Path:
    """
    Raises:
        RenderError: If the report file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(report)
    except OSError as e:
        raise RenderError(f"Could not write report to {path}: {e}") from e

    logger.info(f"Saved {path.name}")
    return path


def print_report(result: AnalysisResult) -> str:
    report = build_report(result)
    print(report, end="")
    return report
