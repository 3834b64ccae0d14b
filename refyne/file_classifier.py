"""
file_classifier.py

This module provides the FileClassifier class, which decides whether a file
takes part in a scan and which source-language family it belongs to.
"""

import os
from typing import Any, Dict, Optional

from .config import (
    JAVASCRIPT_EXTS, PYTHON_EXTS, C_CPP_EXTS,
    get_configured_code_extensions, get_configured_skip_dirs
)

JAVASCRIPT = "javascript"
PYTHON = "python"
C_CPP = "c_cpp"

_FAMILIES = (
    (JAVASCRIPT, JAVASCRIPT_EXTS),
    (PYTHON, PYTHON_EXTS),
    (C_CPP, C_CPP_EXTS),
)


def language_family(extension: str) -> Optional[str]:
    """
    Returns the language family for an extension ('.py' -> 'python').

    Args:
        extension (str): File extension including the leading dot. Case is ignored.

    Returns:
        Optional[str]: The family name, or None for extensions with no family.
    """
    extension = extension.lower()
    for family, extensions in _FAMILIES:
        if extension in extensions:
            return family
    return None


class FileClassifier:
    """
    Applies the skip-set and extension allowlist used by the directory walker.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            config (Optional[Dict[str, Any]]): Configuration dictionary; 'code_extensions'
                                               and 'skip_dirs' override the defaults.
        """
        self.config = config or {}
        self.code_extensions = get_configured_code_extensions(self.config)
        self.skip_dirs = get_configured_skip_dirs(self.config)

    def should_skip_dir(self, name: str) -> bool:
        """True if a directory with this name must not be descended into."""
        return name in self.skip_dirs

    def extension_of(self, file_name: str) -> str:
        return os.path.splitext(file_name)[1].lower()

    def is_code_file(self, file_name: str) -> bool:
        """True if the file's extension is in the allowlist."""
        return self.extension_of(file_name) in self.code_extensions

    def classify_file(self, file_path: str) -> Optional[str]:
        """Language family of an allowed file, or None if it is not scanned at all."""
        file_name = os.path.basename(file_path)
        if not self.is_code_file(file_name):
            return None
        return language_family(self.extension_of(file_name))
