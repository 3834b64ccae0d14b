"""
Exception types raised by Refyne.

Only ScanUnavailableError escapes a scan; unreadable files inside a project
are logged and skipped by the walker instead.
"""

from typing import Dict, Optional


class RefyneError(Exception):
    """Base exception for all Refyne errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ScanUnavailableError(RefyneError):
    """The scan root is missing, not a directory, or cannot be listed."""

    def __init__(self, root_path: str, reason: str):
        super().__init__("Scan unavailable", {"root": str(root_path), "reason": reason})
        self.root_path = str(root_path)
        self.reason = reason


class StructureConflictError(RefyneError):
    """A file and a directory (or two files) claim the same tree position."""

    def __init__(self, path: str):
        super().__init__("Conflicting structure entry", {"path": path})
        self.path = path


class ArchiveError(RefyneError):
    """An uploaded archive could not be extracted."""


class RefactorUnavailableError(RefyneError):
    """Gemini is not configured or no candidate models are known."""


class RefactorRequestError(RefyneError):
    """Every candidate model failed to answer a refactor request."""

    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        details = {"last_error": str(last_error)} if last_error else None
        super().__init__(message, details)
        self.last_error = last_error
