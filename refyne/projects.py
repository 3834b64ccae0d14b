"""
In-memory registry of uploaded projects.

Maps an opaque project id to its extracted root path and the most recent scan.
The registry lives as long as the process and is handed to the web app
explicitly rather than kept in module state.
"""

import uuid
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from .models import ScanResult


@dataclass
class ProjectEntry:
    project_id: str
    root_path: str
    scan: Optional[ScanResult] = None


class ProjectRegistry:
    """Thread-safe project id -> ProjectEntry store."""

    def __init__(self):
        self._projects: Dict[str, ProjectEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def new_id() -> str:
        return str(uuid.uuid4())

    def register(self, root_path: str, scan: Optional[ScanResult] = None,
                 project_id: Optional[str] = None) -> ProjectEntry:
        entry = ProjectEntry(project_id or self.new_id(), root_path, scan)
        with self._lock:
            self._projects[entry.project_id] = entry
        return entry

    def get(self, project_id: Optional[str]) -> Optional[ProjectEntry]:
        if not project_id:
            return None
        with self._lock:
            return self._projects.get(project_id)

    def update_scan(self, project_id: str, scan: ScanResult):
        with self._lock:
            self._projects[project_id].scan = scan

    def __contains__(self, project_id) -> bool:
        with self._lock:
            return project_id in self._projects

    def __len__(self) -> int:
        with self._lock:
            return len(self._projects)
