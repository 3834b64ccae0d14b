"""
Main application entry point and CLI handling.
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from .config import (
    PROJECT_ROOT, DEFAULT_PORT, load_config, GREY, RED, RESET,
    get_configured_history_path, get_configured_history_limit, get_configured_gemini_model
)
from .analysis import analyze
from .exceptions import RefactorRequestError, RefactorUnavailableError, ScanUnavailableError
from .history import HistoryStore
from .report_generators import (
    format_analysis_summary, format_json, format_refactor_guidance,
    generate_html_report, render_structure_tree
)
from .scanner import scan

# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def build_parser():
    parser = argparse.ArgumentParser(
        description="Refyne - project scanning, architecture scoring and Gemini refactor guidance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  refyne                          # Analyze the current directory
  refyne ../my-app --tree         # Show the scanned file tree as well
  refyne --json                   # Output scan + analysis as JSON
  refyne --refactor               # Ask Gemini about the latest analysis
  refyne --serve --port 5000      # Run the HTTP API"""
    )
    parser.add_argument('--tree', action='store_true',
                        help='Show the scanned file tree')
    parser.add_argument('--markdown', action='store_true',
                        help='Output results in Markdown format')
    parser.add_argument('--json', action='store_true',
                        help='Output results in JSON format')
    parser.add_argument('--html-report', action='store_true',
                        help='Generate an HTML report in the analyzed directory')
    parser.add_argument('--refactor', action='store_true',
                        help='Request Gemini refactor guidance for the latest analysis')
    parser.add_argument('--no-history', action='store_true',
                        help='Do not record this analysis in the history log')
    parser.add_argument('--serve', action='store_true',
                        help='Run the HTTP API instead of a one-off analysis')
    parser.add_argument('--host', default='127.0.0.1',
                        help='Host for --serve (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=None,
                        help=f'Port for --serve (default: $PORT or {DEFAULT_PORT})')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('directory', nargs='?', default=None,
                        help='Directory to analyze (defaults to current directory)')
    return parser

def run_refactor(history, config, markdown=False):
    """Print Gemini guidance for the latest analysis; returns an exit code."""
    from .ai_refactor import GeminiRefactorClient

    snapshot = history.latest_analysis()
    if snapshot is None:
        print(f"{RED}✖ No analysis history found. Run an analysis first.{RESET}")
        return 1
    client = GeminiRefactorClient(preferred_model=get_configured_gemini_model(config))
    try:
        payload = client.request_refactor(snapshot)
    except (RefactorUnavailableError, RefactorRequestError) as e:
        print(f"{RED}✖ Error: {e}{RESET}")
        return 1
    history.record_refactor(payload)
    print(format_refactor_guidance(payload, markdown=markdown))
    return 0

def main(argv=None):
    """Main entry point for Refyne."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    load_dotenv()
    config = load_config()
    history = HistoryStore(get_configured_history_path(config), get_configured_history_limit(config))

    if args.serve:
        from .server import create_app
        port = args.port or int(os.getenv("PORT", DEFAULT_PORT))
        create_app(config, history=history).run(host=args.host, port=port)
        return 0

    if args.refactor:
        return run_refactor(history, config, markdown=args.markdown)

    directory = os.path.abspath(args.directory if args.directory else PROJECT_ROOT)

    if not args.json:
        print(f"{GREY}Scanning {directory}...{RESET}")
    try:
        scan_result = scan(directory, config)
    except ScanUnavailableError as e:
        print(f"{RED}✖ Failed to scan project: {e}{RESET}", file=sys.stderr)
        return 1

    report = analyze(scan_result)
    if not args.no_history:
        history.record_analysis(os.path.basename(directory), report)

    if args.json:
        print(format_json(scan_result, report))
    else:
        if args.tree:
            print(render_structure_tree(scan_result.structure, markdown=args.markdown))
        print(format_analysis_summary(report, markdown=args.markdown))

    if args.html_report:
        generate_html_report(directory, report)
    return 0

if __name__ == "__main__":
    sys.exit(main())
