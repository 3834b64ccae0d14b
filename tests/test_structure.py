#!/usr/bin/env python3
"""
Test Structure Builder

Tests for building the directory/file tree from flat file records.
"""

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from refyne.exceptions import StructureConflictError
from refyne.models import FileRecord
from refyne.structure import build_structure, count_directories, find_node, iter_files


def make_record(path, lines=1, functions=0, imports=0):
    return FileRecord(
        relative_path=path,
        extension="." + path.rsplit(".", 1)[-1],
        size_bytes=0,
        line_count=lines,
        function_count=functions,
        import_count=imports,
    )


class TestBuildStructure(unittest.TestCase):
    """Test tree construction."""

    def test_empty_file_list(self):
        root = build_structure("proj", [])
        self.assertEqual(root.name, "proj")
        self.assertEqual(root.path, "proj")
        self.assertTrue(root.is_directory)
        self.assertEqual(root.children, [])
        self.assertEqual(count_directories(root), 0)

    def test_directories_are_shared(self):
        root = build_structure("proj", [
            make_record("src/a.js"),
            make_record("src/b.js"),
            make_record("src/lib/c.py"),
        ])
        self.assertEqual([c.name for c in root.children], ["src"])
        src = root.children[0]
        self.assertEqual([c.name for c in src.children], ["a.js", "b.js", "lib"])
        self.assertEqual(count_directories(root), 2)

    def test_first_seen_order(self):
        root = build_structure("proj", [
            make_record("src/b.js"),
            make_record("lib/a.js"),
            make_record("src/a.js"),
            make_record("main.py"),
        ])
        self.assertEqual([c.name for c in root.children], ["src", "lib", "main.py"])
        self.assertEqual([c.name for c in root.children[0].children], ["b.js", "a.js"])

    def test_paths_accumulate_from_root(self):
        root = build_structure("proj", [make_record("src/lib/c.py")])
        lib = root.children[0].children[0]
        self.assertEqual(root.children[0].path, "proj/src")
        self.assertEqual(lib.path, "proj/src/lib")
        self.assertEqual(lib.children[0].path, "proj/src/lib/c.py")

    def test_leaves_carry_metrics(self):
        root = build_structure("proj", [make_record("a.py", lines=12, functions=3, imports=2)])
        leaf = root.children[0]
        self.assertFalse(leaf.is_directory)
        self.assertEqual((leaf.line_count, leaf.function_count, leaf.import_count), (12, 3, 2))
        self.assertEqual(leaf.to_dict(), {
            "name": "a.py", "path": "proj/a.py", "type": "file",
            "lines": 12, "functions": 3, "imports": 2,
        })

    def test_every_record_reachable(self):
        paths = ["a.js", "src/b.js", "src/lib/c.py", "src/lib/deep/d.cpp", "tests/e.py"]
        root = build_structure("proj", [make_record(p) for p in paths])
        self.assertEqual(len(list(iter_files(root))), len(paths))
        for path in paths:
            with self.subTest(path=path):
                node = find_node(root, path)
                self.assertIsNotNone(node)
                self.assertEqual(node.name, path.split("/")[-1])
        self.assertIsNone(find_node(root, "src/missing.js"))
        self.assertIsNone(find_node(root, "a.js/child"))

    def test_count_excludes_root(self):
        root = build_structure("proj", [make_record("a/b/c/d.py"), make_record("a/e/f.py")])
        self.assertEqual(count_directories(root), 4)
        self.assertEqual(count_directories(root.children[0]), 3)
        self.assertEqual(count_directories(None), 0)


class TestStructureConflicts(unittest.TestCase):
    """A name may only be used once per directory level."""

    def test_file_then_directory_with_same_name(self):
        with self.assertRaises(StructureConflictError) as ctx:
            build_structure("proj", [make_record("src.py"), make_record("src.py/inner.js")])
        self.assertEqual(ctx.exception.path, "proj/src.py")

    def test_directory_then_file_with_same_name(self):
        with self.assertRaises(StructureConflictError):
            build_structure("proj", [make_record("pkg.py/a.js"), make_record("pkg.py")])

    def test_duplicate_file(self):
        with self.assertRaises(StructureConflictError):
            build_structure("proj", [make_record("src/a.js"), make_record("src/a.js")])


if __name__ == '__main__':
    unittest.main()
