"""
blueprints/api/routes.py — REST API endpoints for ForgeGuard.

Routes:
    GET   /api/v1/health
    POST  /api/v1/analyze
    POST  /api/v1/fetch-metadata
    GET   /api/v1/report/<slug>
    GET   /api/v1/sample-metadata
"""
import logging

from flask import current_app, request, jsonify

import metadata_source
from blueprints.api import api_bp
from engine.sample import SAMPLE_METADATA
from engine.scoring import get_label
from errors import ForgeGuardError, MetadataFetchError, ReportNotFoundError
from extensions import limiter
from pipeline import run_analysis

logger = logging.getLogger(__name__)


def _store():
    return current_app.extensions["report_store"]


def _error_response(err: ForgeGuardError):
    body = {"error": err.message}
    if isinstance(err, MetadataFetchError):
        if err.upstream_status is not None:
            body["status"] = err.upstream_status
        if err.details:
            body["details"] = err.details
    return jsonify(body), err.status_code


# ── Routes ──────────────────────────────────────────────────────────────────────

@api_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "version": current_app.config.get("VERSION", "1.0.0")}), 200


@api_bp.route("/analyze", methods=["POST"])
@limiter.limit(lambda: current_app.config.get("RATE_LIMIT", "60 per minute"))
def analyze():
    """POST /api/v1/analyze — evaluate metadata and store the report."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        result = run_analysis(body, _store(), current_app.config)
        return jsonify({"success": True, **result}), 200
    except ForgeGuardError as e:
        return _error_response(e)
    except Exception as e:
        logger.error("Analysis error: %s", e, exc_info=True)
        return jsonify({"error": "Failed to analyze metadata", "detail": str(e)}), 500


@api_bp.route("/fetch-metadata", methods=["POST"])
@limiter.limit(lambda: current_app.config.get("RATE_LIMIT", "60 per minute"))
def fetch_metadata():
    """POST /api/v1/fetch-metadata — proxy an InsForge metadata document."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    try:
        metadata = metadata_source.fetch_raw(
            body.get("baseUrl"), body.get("apiKey"),
            timeout=current_app.config.get("INSFORGE_TIMEOUT"),
        )
        return jsonify({"success": True, "metadata": metadata}), 200
    except ForgeGuardError as e:
        return _error_response(e)
    except Exception as e:
        logger.error("Metadata fetch error: %s", e, exc_info=True)
        return jsonify({"error": "Failed to fetch metadata", "detail": str(e)}), 500


@api_bp.route("/report/<slug>", methods=["GET"])
def get_report(slug: str):
    """GET /api/v1/report/<slug> — retrieve a stored report."""
    try:
        report = _store().get(slug)
        if report is None:
            raise ReportNotFoundError("Report not found")
        return jsonify({**report, "scoreLabel": get_label(report["readinessScore"])}), 200
    except ForgeGuardError as e:
        return _error_response(e)
    except Exception as e:
        logger.error("Report fetch error: %s", e, exc_info=True)
        return jsonify({"error": "Failed to fetch report", "detail": str(e)}), 500


@api_bp.route("/sample-metadata", methods=["GET"])
def sample_metadata():
    return jsonify(SAMPLE_METADATA), 200
