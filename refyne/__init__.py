"""
Refyne - Project Scanning and Architecture Scoring

Walks an uploaded project, extracts heuristic structural metrics, scores its
architecture health and asks Gemini for refactor guidance.
"""

__version__ = "1.0.0"
__author__ = "Refyne Team"

from .analysis import aggregate_files, analyze, score
from .exceptions import RefyneError, ScanUnavailableError, StructureConflictError
from .file_classifier import FileClassifier
from .history import HistoryStore
from .metrics import extract_metrics
from .models import (
    AggregateStats, AnalysisReport, AnalysisStats, AnalysisSummary,
    FileRecord, ScanResult, StructureNode
)
from .scanner import scan, walk_project
from .structure import build_structure, count_directories

__all__ = [
    'scan',
    'walk_project',
    'analyze',
    'score',
    'aggregate_files',
    'build_structure',
    'count_directories',
    'extract_metrics',
    'FileClassifier',
    'HistoryStore',
    'FileRecord',
    'StructureNode',
    'AggregateStats',
    'ScanResult',
    'AnalysisStats',
    'AnalysisSummary',
    'AnalysisReport',
    'RefyneError',
    'ScanUnavailableError',
    'StructureConflictError',
]
