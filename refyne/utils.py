"""
Utility functions for file operations and number formatting.
"""

import os
import re
import math

# =============================================================================
# FILE UTILITIES
# =============================================================================

def read_text_file(file_path) -> str:
    """
    Reads a file as UTF-8 text.

    Undecodable bytes are replaced rather than raising, so only OS-level
    failures (missing file, permission denied, broken symlink) propagate.
    """
    with open(file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()

def ensure_dir(target_path):
    """Create a directory (and parents) if it does not exist yet."""
    os.makedirs(target_path, exist_ok=True)
    return target_path

def remove_ansi_colors(text):
    """Remove ANSI color codes from text."""
    if not text:
        return ""
    return re.sub(r"\033\[[0-9;]*m", "", text)

# =============================================================================
# NUMBERS
# =============================================================================

def clamp(value, lower, upper):
    return min(max(value, lower), upper)

def round_half_up(value) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
