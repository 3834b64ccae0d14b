"""
Data models for scan and analysis results.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

DIRECTORY = "directory"
FILE = "file"


@dataclass(frozen=True)
class FileMetrics:
    """Heuristic metrics extracted from one file's text."""
    line_count: int
    function_count: int
    import_count: int
    dependencies: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class FileRecord:
    """One scanned source file."""
    relative_path: str  # POSIX separators, relative to the scan root
    extension: str
    size_bytes: int
    line_count: int
    function_count: int
    import_count: int
    dependencies: FrozenSet[str] = frozenset()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.relative_path,
            "extension": self.extension,
            "size": self.size_bytes,
            "lines": self.line_count,
            "functions": self.function_count,
            "imports": self.import_count,
            "dependencies": sorted(self.dependencies),
        }


@dataclass
class StructureNode:
    """A directory or file node in the project tree."""
    name: str
    path: str
    node_type: str = DIRECTORY
    children: List["StructureNode"] = field(default_factory=list)
    line_count: int = 0
    function_count: int = 0
    import_count: int = 0

    @property
    def is_directory(self) -> bool:
        return self.node_type == DIRECTORY

    def to_dict(self) -> Dict[str, Any]:
        if self.is_directory:
            return {
                "name": self.name,
                "path": self.path,
                "type": DIRECTORY,
                "children": [child.to_dict() for child in self.children],
            }
        return {
            "name": self.name,
            "path": self.path,
            "type": FILE,
            "lines": self.line_count,
            "functions": self.function_count,
            "imports": self.import_count,
        }


@dataclass(frozen=True)
class AggregateStats:
    """Project-wide totals reduced from the file records."""
    file_count: int = 0
    total_lines: int = 0
    total_functions: int = 0
    total_imports: int = 0
    unique_dependency_count: int = 0
    unique_dependencies: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_count": self.file_count,
            "total_lines": self.total_lines,
            "total_functions": self.total_functions,
            "total_imports": self.total_imports,
            "dependency_count": self.unique_dependency_count,
            "unique_dependencies": list(self.unique_dependencies),
        }


@dataclass
class ScanResult:
    """Output of one walk + build + aggregate pass."""
    root_path: str
    files: List[FileRecord]
    structure: StructureNode
    aggregate: AggregateStats

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root_path,
            "files": [f.to_dict() for f in self.files],
            "structure": self.structure.to_dict(),
            "aggregate": self.aggregate.to_dict(),
        }


@dataclass(frozen=True)
class AnalysisStats:
    file_count: int
    total_lines: int
    total_functions: int
    total_imports: int
    dependency_count: int
    directory_count: int
    average_lines_per_file: float
    average_functions_per_file: float
    function_density: float
    dependency_ratio: float
    modularity_score: int
    architecture_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_count": self.file_count,
            "total_lines": self.total_lines,
            "total_functions": self.total_functions,
            "total_imports": self.total_imports,
            "dependency_count": self.dependency_count,
            "directory_count": self.directory_count,
            "average_lines_per_file": self.average_lines_per_file,
            "average_functions_per_file": self.average_functions_per_file,
            "function_density": self.function_density,
            "dependency_ratio": self.dependency_ratio,
            "modularity_score": self.modularity_score,
            "architecture_score": self.architecture_score,
        }


@dataclass(frozen=True)
class AnalysisSummary:
    headline: str
    highlights: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"headline": self.headline, "highlights": list(self.highlights)}


@dataclass
class AnalysisReport:
    """Scored view of a scan."""
    stats: AnalysisStats
    summary: AnalysisSummary
    recommendations: List[str]
    structure: Optional[StructureNode] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stats": self.stats.to_dict(),
            "summary": self.summary.to_dict(),
            "recommendations": list(self.recommendations),
            "structure_map": self.structure.to_dict() if self.structure else None,
        }
