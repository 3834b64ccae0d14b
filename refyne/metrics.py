"""
Heuristic metric extraction for a single file.

Everything here is pattern matching, not parsing. Each function rule is counted
independently, so one construct matched by two rules is counted twice; the
scorer only needs a rough density signal.
"""

import re
from collections import namedtuple
from typing import Dict, Set

from .config import C_CPP_EXTS
from .models import FileMetrics

MatchRule = namedtuple("MatchRule", ["name", "pattern"])
DependencyRule = namedtuple("DependencyRule", ["name", "extensions", "pattern"])

# =============================================================================
# RULE BATTERIES
# =============================================================================

FUNCTION_RULES = (
    MatchRule("named_function", re.compile(r"function\s+[a-zA-Z0-9_]+\s*\(")),
    MatchRule("const_function", re.compile(r"const\s+[a-zA-Z0-9_]+\s*=\s*\(")),
    MatchRule("async_function", re.compile(r"[=:\(]\s*async\s*[a-zA-Z0-9_]*\s*\(")),
    MatchRule("arrow_block", re.compile(r"=>\s*\{")),
    MatchRule("def_keyword", re.compile(r"^\s*def\s+[a-zA-Z0-9_]+\s*\(", re.MULTILINE)),
    MatchRule("class_declaration", re.compile(r"^\s*class\s+[A-Za-z0-9_]+\s*[:{]", re.MULTILINE)),
    MatchRule("scope_method", re.compile(r"[A-Za-z0-9_\]]+\s*::\s*[A-Za-z0-9_]+\s*\(")),
)

IMPORT_LINE_PATTERN = re.compile(
    r"^(?:\s*import\s|\s*from\s+.+\s+import\s|\s*#include\s+)", re.MULTILINE
)

# Rules with no extension set run on every file, whatever its language.
DEPENDENCY_RULES = (
    DependencyRule("es_import", None,
                   re.compile(r"""import\s+(?:.+?\s+from\s+)?['"](.+?)['"]""")),
    DependencyRule("commonjs_require", None,
                   re.compile(r"""require\(['"](.+?)['"]\)""")),
    DependencyRule("python_import", None,
                   re.compile(r"^\s*import\s+([\w\.]+)", re.MULTILINE)),
    DependencyRule("python_from_import", None,
                   re.compile(r"^\s*from\s+([\w\.]+)\s+import\s+", re.MULTILINE)),
    DependencyRule("c_include", C_CPP_EXTS,
                   re.compile(r"""^\s*#include\s+[<"]([^>"]+)[>"]""", re.MULTILINE)),
)

# =============================================================================
# EXTRACTION
# =============================================================================

def normalize_line_endings(content: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return re.sub(r"\r\n?", "\n", content)

def count_lines(content: str) -> int:
    """
    Number of segments after splitting normalized content on newlines.

    An empty file yields 1 and a trailing newline adds an empty last segment;
    the scorer's line averages are calibrated against this counting.
    """
    return len(content.split("\n"))

def count_functions_by_rule(content: str) -> Dict[str, int]:
    """Match count of every function rule, keyed by rule name."""
    return {rule.name: len(rule.pattern.findall(content)) for rule in FUNCTION_RULES}

def estimate_function_count(content: str) -> int:
    return sum(count_functions_by_rule(content).values())

def count_imports(content: str) -> int:
    return len(IMPORT_LINE_PATTERN.findall(content))

def extract_dependencies(content: str, extension: str) -> Set[str]:
    """
    Collect module or include targets referenced by a file.

    The import and require rules run on every file, so a JS default import
    (`import React from 'react'`) also yields its local name through the
    Python `import X` rule. Only `#include` is limited to C/C++ sources.
    Captured strings are kept verbatim; relative paths are not resolved.
    """
    extension = extension.lower()
    dependencies = set()
    for rule in DEPENDENCY_RULES:
        if rule.extensions is None or extension in rule.extensions:
            dependencies.update(rule.pattern.findall(content))
    return dependencies

def extract_metrics(content: str, extension: str) -> FileMetrics:
    """
    Derive line, function, import and dependency facts from a file's text.

    Never raises for any text input: content that matches nothing simply
    produces zero counts and an empty dependency set.
    """
    content = normalize_line_endings(content)
    return FileMetrics(
        line_count=count_lines(content),
        function_count=estimate_function_count(content),
        import_count=count_imports(content),
        dependencies=frozenset(extract_dependencies(content, extension)),
    )
