"""
Configuration constants and settings for Refyne.
"""

import os
import json
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS AND CONFIGURATION
# =============================================================================

# ANSI escape sequences for colored output
RESET = "\033[0m"
GREY = "\033[90m"
BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
BOLD = "\033[1m"

# File type classifications
CODE_EXTENSIONS = {'.js', '.jsx', '.mjs', '.cjs', '.py', '.cpp', '.cc', '.cxx'}

JAVASCRIPT_EXTS = {'.js', '.jsx', '.mjs', '.cjs', '.ts', '.tsx'}
PYTHON_EXTS = {'.py'}
C_CPP_EXTS = {'.cpp', '.cc', '.cxx', '.c', '.h', '.hpp'}

# Default exclusions
SKIP_DIRECTORIES = {"node_modules", ".git", "dist", "build", "__pycache__"}

# Scoring
ARCHITECTURE_BASELINE = 85
MODULARITY_CENTER = 60
MODULARITY_MULTIPLIER = 120
MODULARITY_RANGE = (10, 95)
ARCHITECTURE_RANGE = (5, 95)
COMPLEXITY_PENALTY_DIVISOR = 40
COMPLEXITY_PENALTY_RANGE = (0, 40)
DEPENDENCY_PENALTY_MULTIPLIER = 10
DEPENDENCY_PENALTY_RANGE = (0, 25)
HEALTHY_ARCHITECTURE_THRESHOLD = 70
STRONG_MODULARITY_THRESHOLD = 70
WEAK_MODULARITY_THRESHOLD = 40
FUNCTION_DENSITY_THRESHOLD = 8
DEPENDENCY_HEAVINESS_FACTOR = 1.5

# Gemini
DEFAULT_GEMINI_MODELS = [
    'gemini-1.5-flash-latest',
    'gemini-1.5-flash',
    'gemini-pro',
    'gemini-1.0-pro',
    'gemini-1.5-pro',
    'gemini-1.5-pro-latest',
]
MODEL_INVENTORY_TTL_SECONDS = 5 * 60

# HTTP
MAX_UPLOAD_BYTES = 200 * 1024 * 1024
DEFAULT_PORT = 5000

# Global paths
PROJECT_ROOT = os.getcwd()
CONFIG_FILE = os.path.join(PROJECT_ROOT, ".refyne-config.json")
UPLOAD_ROOT = os.path.join(PROJECT_ROOT, "uploads", "tmp")
HISTORY_FILE = os.path.join(PROJECT_ROOT, "data", "history.json")

# AI schemas
REFACTOR_SCHEMA = {
    "type": "object",
    "properties": {
        "summary": {"type": "string"},
        "issues": {"type": "array", "items": {"type": "string"}},
        "suggestions": {"type": "array", "items": {"type": "string"}},
        "refactoredFiles": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "filename": {"type": "string"},
                    "before": {"type": "string"},
                    "after": {"type": "string"}
                },
                "required": ["filename", "before", "after"]
            }
        }
    },
    "required": ["summary", "issues", "suggestions", "refactoredFiles"]
}

# =============================================================================
# DEFAULT CONFIGURATION
# =============================================================================

DEFAULT_CONFIG = {
    # Walker settings
    "code_extensions": sorted(CODE_EXTENSIONS),
    "skip_dirs": sorted(SKIP_DIRECTORIES),

    # History settings
    "history_path": HISTORY_FILE,
    "history_limit": 25,

    # Server settings
    "upload_root": UPLOAD_ROOT,

    # Gemini settings
    "gemini_model": None,
}


# =============================================================================
# CONFIGURATION MANAGEMENT
# =============================================================================

def load_config(config_file=None):
    """Load configuration from .refyne-config.json if it exists."""
    config_file = config_file or CONFIG_FILE
    if not os.path.exists(config_file):
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_file, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", config_file)
        return {}
    return data

def get_configured_code_extensions(config):
    """Get the extension allowlist, lowercased."""
    config = config or {}
    return {ext.lower() for ext in config.get("code_extensions", DEFAULT_CONFIG["code_extensions"])}

def get_configured_skip_dirs(config):
    """Get directory names that are never descended into."""
    config = config or {}
    return set(config.get("skip_dirs", DEFAULT_CONFIG["skip_dirs"]))

def get_configured_history_path(config):
    """Get the history log location (env var wins over the config file)."""
    config = config or {}
    return os.getenv("REFYNE_HISTORY_PATH") or config.get("history_path", DEFAULT_CONFIG["history_path"])

def get_configured_history_limit(config):
    """Get the maximum number of history entries kept."""
    config = config or {}
    return int(config.get("history_limit", DEFAULT_CONFIG["history_limit"]))

def get_configured_upload_root(config):
    """Get the directory uploaded archives are extracted under."""
    config = config or {}
    return os.getenv("REFYNE_UPLOAD_ROOT") or config.get("upload_root", DEFAULT_CONFIG["upload_root"])

def get_configured_gemini_model(config):
    """Get the preferred Gemini model, if any."""
    config = config or {}
    return config.get("gemini_model", DEFAULT_CONFIG["gemini_model"])
