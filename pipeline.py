"""
pipeline.py — Analysis request handling shared by the API and UI blueprints.

Validates the request, sources metadata (InsForge fetch or pasted JSON),
runs the rule engine and persists the report.
"""
import logging
from typing import Any, Dict

import engine
import metadata_source
from engine.metadata import BackendMetadata
from errors import ValidationError
from store import ReportStore

logger = logging.getLogger(__name__)

SOURCE_MODES = ("insforge", "manual")


def run_analysis(body: Dict[str, Any], store: ReportStore, config) -> Dict[str, Any]:
    """
    Analyze one request body and save the report.

    Body keys: projectLabel, sourceMode, and either baseUrl + apiKey
    (insforge) or metadataJson (manual).

    Raises:
        ValidationError / MetadataParseError: bad request fields or JSON.
        MetadataFetchError: the InsForge API could not be read.
    """
    project_label = body.get("projectLabel")
    if isinstance(project_label, str):
        project_label = project_label.strip()
    source_mode = body.get("sourceMode")

    if not project_label or not isinstance(project_label, str):
        raise ValidationError("projectLabel is required")
    if source_mode not in SOURCE_MODES:
        raise ValidationError("sourceMode must be 'insforge' or 'manual'")

    raw_metadata = None
    if source_mode == "insforge":
        base_url, api_key = body.get("baseUrl"), body.get("apiKey")
        if not base_url or not api_key:
            raise ValidationError("baseUrl and apiKey are required for insforge mode")
        metadata = metadata_source.fetch(base_url, api_key,
                                         timeout=config.get("INSFORGE_TIMEOUT"))
    else:
        metadata_json = body.get("metadataJson")
        if not metadata_json or not isinstance(metadata_json, str) or not metadata_json.strip():
            raise ValidationError("metadataJson is required for manual mode")
        raw_metadata = metadata_source.load_json(metadata_json)
        metadata = BackendMetadata.model_validate(raw_metadata)

    result = engine.evaluate(metadata)

    # Only pasted metadata is kept with the report.
    slug = store.save({
        "projectLabel": project_label,
        "sourceMode": source_mode,
        "readinessScore": result["score"],
        "summary": result["summary"],
        "findings": result["findings"],
        "rawMetadata": raw_metadata,
    })
    logger.info("Saved report %s for %r [mode=%s score=%d findings=%d]",
                slug, project_label, source_mode, result["score"], len(result["findings"]))

    return {
        "slug": slug,
        "score": result["score"],
        "summary": result["summary"],
        "label": result["label"],
    }
