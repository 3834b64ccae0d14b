#!/usr/bin/env python3
"""
Test CLI

Tests for the command-line entry point.
"""

import unittest
from unittest.mock import Mock, patch
import contextlib
import io
import json
import os
import shutil
import tempfile
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from refyne.history import HistoryStore
from refyne.main import build_parser, main


@patch("refyne.main.load_dotenv", Mock())
class TestMain(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.project_dir = Path(self.temp_dir) / "cli_project"
        (self.project_dir / "pkg").mkdir(parents=True)
        (self.project_dir / "pkg" / "core.py").write_text("def run():\n    return 1\n", encoding="utf-8")
        self.history_path = os.path.join(self.temp_dir, "history.json")
        self.env = patch.dict(os.environ, {"REFYNE_HISTORY_PATH": self.history_path})
        self.env.start()

    def tearDown(self):
        self.env.stop()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def run_main(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            code = main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_json_output(self):
        code, out, _ = self.run_main(["--json", "--no-history", str(self.project_dir)])
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["analysis"]["stats"]["file_count"], 1)
        self.assertEqual(data["scan"]["files"][0]["path"], "pkg/core.py")
        self.assertFalse(os.path.exists(self.history_path))

    def test_default_run_records_history(self):
        code, out, _ = self.run_main(["--tree", str(self.project_dir)])
        self.assertEqual(code, 0)
        self.assertIn("Architecture Score", out)
        self.assertIn("core.py", out)
        self.assertIn("(3 lines, 1 fn, 0 imports)", out)

        entry = HistoryStore(self.history_path).latest()
        self.assertEqual(entry["id"], "cli_project")
        self.assertEqual(entry["stats"]["file_count"], 1)

    def test_missing_directory(self):
        code, _, err = self.run_main([str(self.project_dir / "missing")])
        self.assertEqual(code, 1)
        self.assertIn("Failed to scan project", err)

    def test_html_report(self):
        code, _, _ = self.run_main(["--html-report", "--no-history", str(self.project_dir)])
        self.assertEqual(code, 0)
        self.assertTrue((self.project_dir / "refyne-report.html").is_file())

    def test_refactor_without_history(self):
        code, out, _ = self.run_main(["--refactor"])
        self.assertEqual(code, 1)
        self.assertIn("No analysis history found", out)

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        self.assertIsNone(args.directory)
        self.assertFalse(args.json)
        self.assertEqual(args.host, "127.0.0.1")


if __name__ == '__main__':
    unittest.main()
