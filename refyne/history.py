"""
Analysis history log: a JSON array on disk, most recent entry first.
"""

import os
import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .models import AnalysisReport

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 25


class HistoryStore:
    """
    Persists analysis and refactor snapshots.

    Read failures degrade to an empty history and write failures are logged,
    so a broken history file never fails an analysis.
    """

    def __init__(self, path: str, limit: int = DEFAULT_HISTORY_LIMIT):
        self.path = path
        self.limit = limit
        self._lock = threading.Lock()

    def load(self) -> List[Dict[str, Any]]:
        """Load all entries, newest first."""
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
            entries = json.loads(raw or "[]")
        except (OSError, ValueError) as e:
            logger.error("Failed to load history from %s: %s", self.path, e)
            return []
        if not isinstance(entries, list):
            logger.error("History file %s does not hold a JSON array", self.path)
            return []
        return entries

    def save(self, entries: List[Dict[str, Any]]):
        try:
            os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(entries[:self.limit], f, indent=2)
        except OSError as e:
            logger.error("Failed to save history to %s: %s", self.path, e)

    def prepend(self, entry: Dict[str, Any]) -> Dict[str, Any]:
        """Insert an entry at the front and trim the log to `limit` entries."""
        with self._lock:
            entries = self.load()
            entries.insert(0, entry)
            self.save(entries)
        return entry

    def record_analysis(self, project_id: str, report: AnalysisReport) -> Dict[str, Any]:
        return self.prepend({
            "id": project_id,
            "analyzed_at": datetime.now(timezone.utc).isoformat(),
            "summary": report.summary.to_dict(),
            "stats": report.stats.to_dict(),
        })

    def record_refactor(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "type": "gemini-refactor",
        }
        entry.update(payload)
        return self.prepend(entry)

    def latest(self) -> Optional[Dict[str, Any]]:
        entries = self.load()
        return entries[0] if entries else None

    def latest_analysis(self) -> Optional[Dict[str, Any]]:
        """Most recent entry that carries analysis stats."""
        for entry in self.load():
            if "stats" in entry:
                return entry
        return None
