"""
Flask HTTP API around the scan/analyze pipeline.

Routes:
    POST /api/upload    multipart field 'project' (ZIP) -> initial scan
    POST /api/analyze   {"project_id": ...} -> fresh scan + scored report
    POST /api/refactor  Gemini guidance for the latest analysis in history
    GET  /api/history   stored analysis/refactor entries
    GET  /health
"""

import os
import shutil
import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from .ai_refactor import GeminiRefactorClient
from .analysis import analyze
from .archive import extract_archive
from .config import (
    MAX_UPLOAD_BYTES, get_configured_history_limit, get_configured_history_path,
    get_configured_upload_root, get_configured_gemini_model
)
from .exceptions import ArchiveError, RefactorRequestError, RefactorUnavailableError, RefyneError
from .history import HistoryStore
from .projects import ProjectRegistry
from .scanner import scan
from .utils import ensure_dir

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Dict[str, Any]] = None,
    registry: Optional[ProjectRegistry] = None,
    history: Optional[HistoryStore] = None,
    refactor_client: Optional[GeminiRefactorClient] = None,
) -> Flask:
    """
    Build the Flask application.

    Collaborators default to fresh instances built from `config`; tests pass
    their own.
    """
    config = config or {}
    registry = registry if registry is not None else ProjectRegistry()
    history = history if history is not None else HistoryStore(
        get_configured_history_path(config), get_configured_history_limit(config))
    upload_root = ensure_dir(get_configured_upload_root(config))

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES
    app.extensions["refyne"] = {"registry": registry, "history": history}
    CORS(app)

    def get_refactor_client():
        nonlocal refactor_client
        if refactor_client is None:
            refactor_client = GeminiRefactorClient(preferred_model=get_configured_gemini_model(config))
        return refactor_client

    @app.route('/api/upload', methods=['POST'])
    def upload_project():
        uploaded_file = request.files.get('project')
        if uploaded_file is None or not uploaded_file.filename:
            return jsonify({'error': 'No project archive received.'}), 400

        project_id = registry.new_id()
        archive_path = os.path.join(upload_root, f"{project_id}.zip")
        extract_dir = os.path.join(upload_root, project_id)
        try:
            uploaded_file.save(archive_path)
            extract_archive(archive_path, extract_dir)
            scan_result = scan(extract_dir, config)
        except ArchiveError as e:
            logger.warning("Rejected upload %s: %s", uploaded_file.filename, e)
            shutil.rmtree(extract_dir, ignore_errors=True)
            return jsonify({'error': e.message}), 400
        except (RefyneError, OSError) as e:
            logger.error("Upload error: %s", e)
            shutil.rmtree(extract_dir, ignore_errors=True)
            return jsonify({'error': 'Failed to process archive.'}), 500
        finally:
            if os.path.exists(archive_path):
                os.remove(archive_path)

        registry.register(extract_dir, scan_result, project_id=project_id)
        logger.info("Uploaded and extracted project %s -> %s", project_id, extract_dir)
        return jsonify({
            'project_id': project_id,
            'root': extract_dir,
            'scan': scan_result.to_dict(),
        }), 200

    @app.route('/api/analyze', methods=['POST'])
    def analyze_project():
        body = request.get_json(silent=True) or {}
        project_id = body.get('project_id') or body.get('projectId')
        entry = registry.get(project_id)
        if entry is None:
            return jsonify({'error': 'Unknown project. Upload a project before analyzing.'}), 400

        try:
            fresh_scan = scan(entry.root_path, config)
        except RefyneError as e:
            logger.error("Analyze error for %s: %s", project_id, e)
            return jsonify({'error': 'Failed to analyze project.'}), 500

        report = analyze(fresh_scan)
        history.record_analysis(project_id, report)
        registry.update_scan(project_id, fresh_scan)
        return jsonify({
            'project_id': project_id,
            'scan': fresh_scan.to_dict(),
            'analysis': report.to_dict(),
        }), 200

    @app.route('/api/refactor', methods=['POST'])
    def refactor_project():
        snapshot = history.latest_analysis()
        if snapshot is None:
            return jsonify({
                'success': False,
                'error': 'No analysis history found. Run an analysis before requesting refactor guidance.'
            }), 400

        try:
            payload = get_refactor_client().request_refactor(snapshot)
        except RefactorUnavailableError as e:
            return jsonify({'success': False, 'error': e.message}), 503
        except RefactorRequestError as e:
            return jsonify({
                'success': False,
                'error': e.message,
                'details': str(e.last_error) if e.last_error else None,
            }), 502

        history.record_refactor(payload)
        logger.info("Gemini refactor guidance stored.")
        return jsonify({'success': True, 'data': payload}), 200

    @app.route('/api/history', methods=['GET'])
    def get_history():
        return jsonify({'history': history.load()}), 200

    @app.route('/health', methods=['GET'])
    def health_check():
        return jsonify({'status': 'healthy', 'message': 'Refyne is running'}), 200

    return app
