"""
Directory walker and scan entry point.

The walk is a depth-first pass over sorted directory entries, so scanning an
unchanged tree twice produces the same file list in the same order.
"""

import os
import logging
from collections import namedtuple
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from .analysis import aggregate_files
from .exceptions import ScanUnavailableError
from .file_classifier import FileClassifier
from .metrics import extract_metrics
from .models import FileRecord, ScanResult
from .structure import build_structure
from .utils import read_text_file

logger = logging.getLogger(__name__)

WalkResult = namedtuple("WalkResult", ["files", "dependencies"])


def _sorted_entries(directory):
    with os.scandir(directory) as it:
        return sorted(it, key=lambda entry: entry.name)

def _read_record(entry: os.DirEntry, root: Path, extension: str) -> FileRecord:
    content = read_text_file(entry.path)
    metrics = extract_metrics(content, extension)
    size = entry.stat().st_size
    return FileRecord(
        relative_path=Path(os.path.relpath(entry.path, root)).as_posix(),
        extension=extension,
        size_bytes=size,
        line_count=metrics.line_count,
        function_count=metrics.function_count,
        import_count=metrics.import_count,
        dependencies=metrics.dependencies,
    )

def walk_project(root_path, config: Optional[Dict[str, Any]] = None) -> WalkResult:
    """
    Walk `root_path` and extract metrics from every eligible file.

    Args:
        root_path: Directory to scan.
        config: Optional configuration ('skip_dirs', 'code_extensions').

    Returns:
        WalkResult: the ordered FileRecord list and the union of all file
        dependencies.

    Raises:
        ScanUnavailableError: if the root does not exist, is not a directory,
            or cannot be listed. Failures below the root are logged and skipped.
    """
    root = Path(root_path)
    if not root.exists():
        raise ScanUnavailableError(str(root_path), "does not exist")
    if not root.is_dir():
        raise ScanUnavailableError(str(root_path), "not a directory")

    classifier = FileClassifier(config)
    files: List[FileRecord] = []
    dependencies: Set[str] = set()

    try:
        root_entries = _sorted_entries(root)
    except OSError as e:
        raise ScanUnavailableError(str(root_path), e.strerror or str(e)) from e

    # One iterator per open directory; the top is the directory being listed.
    # Pushing a child's entries before finishing the parent keeps the sorted
    # depth-first order without recursing, so nesting depth is unbounded.
    stack = [iter(root_entries)]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        if classifier.should_skip_dir(entry.name):
            continue

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False

        if is_dir:
            try:
                children = _sorted_entries(entry.path)
            except OSError as e:
                logger.warning("Skipping unreadable directory %s: %s", entry.path, e)
                continue
            stack.append(iter(children))
            continue

        if not classifier.is_code_file(entry.name):
            continue

        try:
            record = _read_record(entry, root, classifier.extension_of(entry.name))
        except OSError as e:
            logger.warning("Skipping unreadable file %s: %s", entry.path, e)
            continue

        files.append(record)
        dependencies.update(record.dependencies)

    logger.debug("Walked %s: %d files, %d dependencies", root, len(files), len(dependencies))
    return WalkResult(files, dependencies)

def root_name_for(root_path) -> str:
    """Display name of the scan root ('.' resolves to the directory's name)."""
    name = os.path.basename(os.path.normpath(str(root_path)))
    if name in ("", ".", ".."):
        name = Path(root_path).resolve().name
    return name or str(root_path)

def scan(root_path, config: Optional[Dict[str, Any]] = None) -> ScanResult:
    """
    Walk a project, build its tree and aggregate its totals.

    Raises:
        ScanUnavailableError: see `walk_project`.
    """
    walk_result = walk_project(root_path, config)
    structure = build_structure(root_name_for(root_path), walk_result.files)
    return ScanResult(
        root_path=str(root_path),
        files=walk_result.files,
        structure=structure,
        aggregate=aggregate_files(walk_result.files, walk_result.dependencies),
    )
