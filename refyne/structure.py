"""
Builds the directory/file tree of a scan from its flat file list.
"""

from typing import Iterable, Iterator, Optional

from .exceptions import StructureConflictError
from .models import DIRECTORY, FILE, FileRecord, StructureNode


def _find_child(parent: StructureNode, name: str) -> Optional[StructureNode]:
    for child in parent.children:
        if child.name == name:
            return child
    return None

def _find_or_create_dir(parent: StructureNode, segment: str) -> StructureNode:
    child = _find_child(parent, segment)
    if child is None:
        child = StructureNode(name=segment, path=f"{parent.path}/{segment}", node_type=DIRECTORY)
        parent.children.append(child)
    elif not child.is_directory:
        raise StructureConflictError(child.path)
    return child

def add_file_to_structure(root: StructureNode, record: FileRecord) -> StructureNode:
    """
    Insert one file leaf under `root`, creating missing directories on the way.

    Raises:
        StructureConflictError: if a path segment is already taken by a node
            of the other kind, or the same file is inserted twice.
    """
    *dir_segments, file_name = record.relative_path.split("/")
    cursor = root
    for segment in dir_segments:
        cursor = _find_or_create_dir(cursor, segment)

    existing = _find_child(cursor, file_name)
    if existing is not None:
        raise StructureConflictError(existing.path)

    leaf = StructureNode(
        name=file_name,
        path=f"{cursor.path}/{file_name}",
        node_type=FILE,
        line_count=record.line_count,
        function_count=record.function_count,
        import_count=record.import_count,
    )
    cursor.children.append(leaf)
    return leaf

def build_structure(root_name: str, files: Iterable[FileRecord]) -> StructureNode:
    """
    Build a tree mirroring the filesystem hierarchy of `files`.

    Children keep first-seen order, so the tree reflects the order the files
    were supplied in.
    """
    root = StructureNode(name=root_name, path=root_name, node_type=DIRECTORY)
    for record in files:
        add_file_to_structure(root, record)
    return root

def count_directories(node: Optional[StructureNode]) -> int:
    """Number of directory nodes below `node`; the node itself is not counted."""
    if node is None or not node.is_directory:
        return 0
    return sum(1 + count_directories(child) for child in node.children if child.is_directory)

def iter_files(node: StructureNode) -> Iterator[StructureNode]:
    """Yield file leaves in tree order."""
    for child in node.children:
        if child.is_directory:
            yield from iter_files(child)
        else:
            yield child

def find_node(root: StructureNode, relative_path: str) -> Optional[StructureNode]:
    """Follow the segments of a root-relative path; None if any is missing."""
    cursor = root
    for segment in relative_path.split("/"):
        if not cursor.is_directory:
            return None
        cursor = _find_child(cursor, segment)
        if cursor is None:
            return None
    return cursor
