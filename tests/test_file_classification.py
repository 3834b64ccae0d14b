#!/usr/bin/env python3
"""
Test File Classification

Tests for the skip-set, the extension allowlist, language families and
loading of the optional configuration file.
"""

import unittest
from unittest.mock import patch
import tempfile
import shutil
import json
import os
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from refyne.config import (
    DEFAULT_CONFIG, get_configured_history_limit, get_configured_history_path,
    get_configured_upload_root, load_config
)
from refyne.file_classifier import FileClassifier, language_family


class TestFileClassification(unittest.TestCase):
    """Test the default classifier."""

    def setUp(self):
        self.classifier = FileClassifier()

    def test_code_files_are_scanned(self):
        for file_path in ["main.py", "src/app.js", "ui/App.jsx", "lib/mod.mjs",
                          "cfg/webpack.cjs", "engine/core.cpp", "a.cc", "b.cxx"]:
            with self.subTest(file=file_path):
                self.assertIsNotNone(self.classifier.classify_file(file_path))

    def test_other_files_are_not_scanned(self):
        for file_path in ["README.md", "LICENSE", "package.json", "types.ts",
                          "header.h", "main.c", "styles.css", ".gitignore"]:
            with self.subTest(file=file_path):
                self.assertIsNone(self.classifier.classify_file(file_path))

    def test_language_families(self):
        cases = [
            (".js", "javascript"), (".JSX", "javascript"), (".cjs", "javascript"),
            (".py", "python"),
            (".cpp", "c_cpp"), (".cxx", "c_cpp"),
            (".md", None), ("", None),
        ]
        for extension, family in cases:
            with self.subTest(extension=extension):
                self.assertEqual(language_family(extension), family)

    def test_classify_uses_family(self):
        self.assertEqual(self.classifier.classify_file("pkg/mod.py"), "python")
        self.assertEqual(self.classifier.classify_file("src/Widget.CPP"), "c_cpp")

    def test_skip_dirs(self):
        for name in ["node_modules", ".git", "dist", "build", "__pycache__"]:
            with self.subTest(name=name):
                self.assertTrue(self.classifier.should_skip_dir(name))
        self.assertFalse(self.classifier.should_skip_dir("src"))
        self.assertFalse(self.classifier.should_skip_dir("Build"))

    def test_configured_allowlist(self):
        classifier = FileClassifier({"code_extensions": [".TS"], "skip_dirs": ["vendor"]})
        self.assertTrue(classifier.is_code_file("index.ts"))
        self.assertFalse(classifier.is_code_file("main.py"))
        self.assertTrue(classifier.should_skip_dir("vendor"))
        self.assertFalse(classifier.should_skip_dir("node_modules"))


class TestConfigLoading(unittest.TestCase):
    """Test the optional .refyne-config.json file and env overrides."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.temp_dir, ".refyne-config.json")

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_missing_file(self):
        self.assertEqual(load_config(self.config_path), {})

    def test_valid_file(self):
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump({"history_limit": 5, "skip_dirs": ["vendor"]}, f)
        config = load_config(self.config_path)
        self.assertEqual(get_configured_history_limit(config), 5)
        self.assertEqual(FileClassifier(config).skip_dirs, {"vendor"})

    def test_invalid_file_is_ignored(self):
        for content in ["{broken", "[1, 2]"]:
            with self.subTest(content=content):
                with open(self.config_path, "w", encoding="utf-8") as f:
                    f.write(content)
                with self.assertLogs("refyne.config", level="WARNING"):
                    self.assertEqual(load_config(self.config_path), {})

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_configured_history_limit(None), 25)
            self.assertEqual(get_configured_history_path({}), DEFAULT_CONFIG["history_path"])
            self.assertEqual(get_configured_upload_root({}), DEFAULT_CONFIG["upload_root"])

    def test_environment_wins(self):
        env = {"REFYNE_HISTORY_PATH": "/tmp/h.json", "REFYNE_UPLOAD_ROOT": "/tmp/uploads"}
        with patch.dict(os.environ, env):
            config = {"history_path": "ignored.json", "upload_root": "ignored"}
            self.assertEqual(get_configured_history_path(config), "/tmp/h.json")
            self.assertEqual(get_configured_upload_root(config), "/tmp/uploads")


if __name__ == '__main__':
    unittest.main()
