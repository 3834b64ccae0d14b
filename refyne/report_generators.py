"""
Report generation utilities for different output formats.
"""

import os
import re
import json
from datetime import datetime

from jinja2 import Template

from .config import BOLD, RESET, GREY, GREEN, YELLOW, RED, BLUE
from .models import AnalysisReport, ScanResult, StructureNode
from .utils import remove_ansi_colors

# =============================================================================
# TEXT OUTPUT
# =============================================================================

def _to_markdown(text):
    text = text.replace(BOLD, "**").replace(RESET, "**")
    return re.sub(r"\033\[[0-9;]*m", "", text)

def _score_color(value, healthy=70, warning=40):
    return GREEN if value > healthy else YELLOW if value >= warning else RED

def render_structure_tree(root: StructureNode, markdown=False):
    """Render a scan tree with box-drawing pointers, directories first-seen order."""
    lines = [f"{BLUE}{root.name}/{RESET}"]

    def walk(node, prefix=""):
        pointers = ["├── "] * (len(node.children) - 1) + ["└── "] if node.children else []
        for pointer, child in zip(pointers, node.children):
            if child.is_directory:
                lines.append(f"{prefix}{pointer}{BLUE}{child.name}/{RESET}")
                extension = "│   " if pointer == "├── " else "    "
                walk(child, prefix + extension)
            else:
                lines.append(
                    f"{prefix}{pointer}{child.name} "
                    f"{GREY}({child.line_count} lines, {child.function_count} fn, "
                    f"{child.import_count} imports){RESET}"
                )

    walk(root)
    result = "\n".join(lines)
    return remove_ansi_colors(result) if markdown else result

def format_analysis_summary(report: AnalysisReport, markdown=False):
    """Format analysis results for display."""
    stats = report.stats
    lines = [
        f"\n{BOLD}🏗️ {report.summary.headline}{RESET}",
        f"{GREY}================================{RESET}",
        f"Architecture Score: {_score_color(stats.architecture_score)}{stats.architecture_score}{RESET}/95",
        f"Modularity Score:   {_score_color(stats.modularity_score)}{stats.modularity_score}{RESET}/95",
        f"Files: {stats.file_count}  Directories: {stats.directory_count}  Lines: {stats.total_lines}",
        f"Functions: {stats.total_functions}  Imports: {stats.total_imports}  "
        f"Dependencies: {stats.dependency_count}",
        f"Avg lines/file: {stats.average_lines_per_file}  "
        f"Function density: {stats.function_density}  "
        f"Dependency ratio: {stats.dependency_ratio}",
        f"\n{BOLD}Highlights:{RESET}",
    ]
    lines.extend(f"  • {highlight}" for highlight in report.summary.highlights)
    lines.append(f"\n{BOLD}Recommendations:{RESET}")
    lines.extend(f"  → {recommendation}" for recommendation in report.recommendations)

    result = "\n".join(lines)
    if markdown:
        result = _to_markdown(result)
    return result

def format_refactor_guidance(payload, markdown=False):
    """Format a normalized Gemini refactor payload."""
    lines = [f"\n{BOLD}--- Gemini Refactor Guidance ---{RESET}"]
    if payload.get("summary"):
        lines.append(f"{BLUE}Summary:{RESET} {payload['summary']}")
    if payload.get("issues"):
        lines.append(f"{YELLOW}⚠ Issues:{RESET}")
        lines.extend(f"  • {issue}" for issue in payload["issues"])
    if payload.get("suggestions"):
        lines.append(f"{GREEN}✓ Suggestions:{RESET}")
        lines.extend(f"  • {suggestion}" for suggestion in payload["suggestions"])
    for refactored in payload.get("refactoredFiles", []):
        if isinstance(refactored, dict):
            lines.append(f"{BOLD}{refactored.get('filename', 'unnamed')}{RESET}")
            lines.append(f"{GREY}{refactored.get('after', '')}{RESET}")

    result = "\n".join(lines)
    if markdown:
        result = _to_markdown(result)
    return result

def format_json(scan_result: ScanResult, report: AnalysisReport):
    return json.dumps({"scan": scan_result.to_dict(), "analysis": report.to_dict()}, indent=2)

# =============================================================================
# HTML REPORT
# =============================================================================

HTML_TEMPLATE = '''
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Refyne Report</title>
    <style>
        body { font-family: Arial, sans-serif; background: #f8f8f8; color: #222; }
        .container { max-width: 900px; margin: 2em auto; background: #fff; padding: 2em; border-radius: 8px; box-shadow: 0 2px 8px #0001; }
        h1 { color: #2d5be3; }
        pre { background: #f4f4f4; padding: 1em; border-radius: 6px; overflow-x: auto; }
        .section { margin-bottom: 2em; }
        .score { font-size: 1.4em; font-weight: bold; }
        .timestamp { color: #888; font-size: 0.9em; }
    </style>
</head>
<body>
    <div class="container">
        <h1>Refyne Report</h1>
        <div class="timestamp">Generated: {{ timestamp }}</div>
        <div class="section">
            <h2>{{ summary.headline }}</h2>
            <div class="score">Architecture {{ stats.architecture_score }} / Modularity {{ stats.modularity_score }}</div>
            <ul>
            {% for highlight in summary.highlights %}
                <li>{{ highlight }}</li>
            {% endfor %}
            </ul>
        </div>
        <div class="section">
            <h2>Stats</h2>
            <pre>{{ stats_json }}</pre>
        </div>
        <div class="section">
            <h2>Structure</h2>
            <pre>{{ file_tree }}</pre>
        </div>
        <div class="section">
            <h2>Recommendations</h2>
            <ul>
            {% for recommendation in recommendations %}
                <li>{{ recommendation }}</li>
            {% endfor %}
            </ul>
        </div>
    </div>
</body>
</html>
'''

def render_html_report(report: AnalysisReport):
    template = Template(HTML_TEMPLATE, autoescape=True)
    file_tree = render_structure_tree(report.structure, markdown=True) if report.structure else ""
    return template.render(
        timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        summary=report.summary,
        stats=report.stats,
        stats_json=json.dumps(report.stats.to_dict(), indent=2),
        file_tree=file_tree,
        recommendations=report.recommendations,
    )

def generate_html_report(directory, report: AnalysisReport):
    """Write refyne-report.html into `directory` and return its path."""
    out_path = os.path.join(directory, "refyne-report.html")
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(render_html_report(report))
    print(f"{GREEN}HTML report generated at: {out_path}{RESET}")
    return out_path
