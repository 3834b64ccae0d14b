"""
Aggregation and scoring of scan results.

The scores are deliberately coarse: a directory-to-file ratio for modularity
and a baseline-minus-penalties architecture score, both clamped so extreme
projects still land in a readable range.
"""

from typing import Iterable, List, Optional

from .config import (
    ARCHITECTURE_BASELINE, MODULARITY_CENTER, MODULARITY_MULTIPLIER,
    MODULARITY_RANGE, ARCHITECTURE_RANGE,
    COMPLEXITY_PENALTY_DIVISOR, COMPLEXITY_PENALTY_RANGE,
    DEPENDENCY_PENALTY_MULTIPLIER, DEPENDENCY_PENALTY_RANGE,
    HEALTHY_ARCHITECTURE_THRESHOLD, STRONG_MODULARITY_THRESHOLD,
    WEAK_MODULARITY_THRESHOLD, FUNCTION_DENSITY_THRESHOLD,
    DEPENDENCY_HEAVINESS_FACTOR
)
from .models import (
    AggregateStats, AnalysisReport, AnalysisStats, AnalysisSummary,
    FileRecord, ScanResult
)
from .structure import count_directories
from .utils import clamp, round_half_up

HEADLINE_HEALTHY = "Architecture looks healthy overall."
HEADLINE_NEEDS_ATTENTION = "Architecture needs attention."

HIGHLIGHT_STRONG_MODULARITY = "Strong modular structure detected."
HIGHLIGHT_WEAK_MODULARITY = "Project may benefit from additional modular boundaries."
HIGHLIGHT_FUNCTION_DENSITY = "High function density could indicate complex files."
HIGHLIGHT_DEPENDENCY_HEAVY = "Heavy dependency usage relative to file count."
HIGHLIGHT_BALANCED = "Architecture health looks balanced for the current scale."

RECOMMENDATIONS = (
    "Review high-density files for potential extraction into smaller modules.",
    "Evaluate frequently imported modules to ensure dependency boundaries are intentional.",
    "Use the Gemini refactor flow to pilot targeted improvements.",
)

# =============================================================================
# AGGREGATION
# =============================================================================

def aggregate_files(files: Iterable[FileRecord], dependencies: Iterable[str]) -> AggregateStats:
    """Sum per-file metrics into project totals. Empty input gives all zeros."""
    files = list(files)
    unique_dependencies = sorted(set(dependencies))
    return AggregateStats(
        file_count=len(files),
        total_lines=sum(f.line_count for f in files),
        total_functions=sum(f.function_count for f in files),
        total_imports=sum(f.import_count for f in files),
        unique_dependency_count=len(unique_dependencies),
        unique_dependencies=unique_dependencies,
    )

# =============================================================================
# SCORING
# =============================================================================

def modularity_score(directory_count: int, file_count: int) -> int:
    """More directories per file scores higher, within MODULARITY_RANGE."""
    ratio = directory_count / max(file_count, 1)
    return clamp(round_half_up(ratio * MODULARITY_MULTIPLIER), *MODULARITY_RANGE)

def architecture_score(modularity: int, average_lines_per_file: float, dependency_ratio: float) -> int:
    complexity_penalty = clamp(average_lines_per_file / COMPLEXITY_PENALTY_DIVISOR, *COMPLEXITY_PENALTY_RANGE)
    dependency_penalty = clamp(dependency_ratio * DEPENDENCY_PENALTY_MULTIPLIER, *DEPENDENCY_PENALTY_RANGE)
    raw = ARCHITECTURE_BASELINE + (modularity - MODULARITY_CENTER) - complexity_penalty - dependency_penalty
    return clamp(round_half_up(raw), *ARCHITECTURE_RANGE)

def summarize(stats: AnalysisStats) -> AnalysisSummary:
    """Headline plus threshold-driven highlights, evaluated in a fixed order."""
    highlights: List[str] = []
    if stats.modularity_score > STRONG_MODULARITY_THRESHOLD:
        highlights.append(HIGHLIGHT_STRONG_MODULARITY)
    elif stats.modularity_score < WEAK_MODULARITY_THRESHOLD:
        highlights.append(HIGHLIGHT_WEAK_MODULARITY)

    if stats.function_density > FUNCTION_DENSITY_THRESHOLD:
        highlights.append(HIGHLIGHT_FUNCTION_DENSITY)

    if stats.dependency_count > stats.file_count * DEPENDENCY_HEAVINESS_FACTOR:
        highlights.append(HIGHLIGHT_DEPENDENCY_HEAVY)

    if not highlights:
        highlights.append(HIGHLIGHT_BALANCED)

    if stats.architecture_score > HEALTHY_ARCHITECTURE_THRESHOLD:
        headline = HEADLINE_HEALTHY
    else:
        headline = HEADLINE_NEEDS_ATTENTION
    return AnalysisSummary(headline=headline, highlights=highlights)

def score(aggregate: Optional[AggregateStats], directory_count: Optional[int] = 0) -> AnalysisReport:
    """
    Map aggregate totals to bounded scores and a textual summary.

    Args:
        aggregate (Optional[AggregateStats]): Project totals; None scores as an empty project.
        directory_count (Optional[int]): Nested directories, root excluded; None counts as 0.

    Returns:
        AnalysisReport: stats, summary and the static recommendation list.
    """
    aggregate = aggregate or AggregateStats()
    directory_count = directory_count or 0
    file_count = aggregate.file_count
    denominator = max(file_count, 1)

    average_lines = aggregate.total_lines / denominator
    average_functions = aggregate.total_functions / denominator
    dependency_ratio = aggregate.unique_dependency_count / denominator

    modularity = modularity_score(directory_count, file_count)
    stats = AnalysisStats(
        file_count=file_count,
        total_lines=aggregate.total_lines,
        total_functions=aggregate.total_functions,
        total_imports=aggregate.total_imports,
        dependency_count=aggregate.unique_dependency_count,
        directory_count=directory_count,
        average_lines_per_file=round(average_lines, 2),
        average_functions_per_file=round(average_functions, 2),
        function_density=round(average_functions, 2),
        dependency_ratio=round(dependency_ratio, 2),
        modularity_score=modularity,
        architecture_score=architecture_score(modularity, average_lines, dependency_ratio),
    )
    return AnalysisReport(
        stats=stats,
        summary=summarize(stats),
        recommendations=list(RECOMMENDATIONS),
    )

def analyze(scan_result: ScanResult) -> AnalysisReport:
    """Score a scan; the directory count comes from its structure tree."""
    report = score(scan_result.aggregate, count_directories(scan_result.structure))
    report.structure = scan_result.structure
    return report
