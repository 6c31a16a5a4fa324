"""
metadata_source.py — Supplies BackendMetadata to the rule engine.

Two sources:
    fetch(base_url, api_key)  → GET {base_url}/api/metadata on an InsForge project
    parse(json_text)          → user-pasted JSON
"""
import json
import logging
from typing import Any, Optional

import requests

from engine.metadata import BackendMetadata
from errors import MetadataFetchError, MetadataParseError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15
METADATA_PATH = "/api/metadata"


def fetch_raw(base_url: str, api_key: str, timeout: Optional[float] = None) -> Any:
    """
    Fetch the raw metadata document from an InsForge project.

    Raises:
        ValidationError: base_url / api_key missing or malformed.
        MetadataFetchError: transport failure, non-2xx status or non-JSON body.
    """
    if not base_url or not isinstance(base_url, str):
        raise ValidationError("baseUrl is required and must be a string")
    if not base_url.startswith(("http://", "https://")):
        raise ValidationError("baseUrl must start with http:// or https://")
    if not api_key or not isinstance(api_key, str):
        raise ValidationError("apiKey is required and must be a string")

    url = base_url.rstrip("/") + METADATA_PATH
    try:
        resp = requests.get(
            url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout or DEFAULT_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("Metadata fetch from %s failed: %s", url, e)
        raise MetadataFetchError(f"Failed to fetch metadata: {e}") from e

    if not resp.ok:
        logger.warning("Metadata API %s returned %s", url, resp.status_code)
        raise MetadataFetchError(
            f"InsForge API returned {resp.status_code}: {resp.reason}",
            upstream_status=resp.status_code,
            details=resp.text,
        )

    try:
        return resp.json()
    except ValueError as e:
        raise MetadataFetchError(
            "InsForge API returned a response that is not valid JSON",
            upstream_status=resp.status_code,
            details=resp.text[:500],
        ) from e


def fetch(base_url: str, api_key: str, timeout: Optional[float] = None) -> BackendMetadata:
    return BackendMetadata.model_validate(fetch_raw(base_url, api_key, timeout))


def load_json(json_text: str) -> Any:
    try:
        return json.loads(json_text)
    except (TypeError, ValueError) as e:
        raise MetadataParseError(f"Invalid JSON in metadataJson: {e}") from e
    except RecursionError as e:
        raise MetadataParseError("Invalid JSON in metadataJson: nesting is too deep") from e


def parse(json_text: str) -> BackendMetadata:
    """Parse pasted JSON. Only syntax is validated; the engine tolerates the rest."""
    return BackendMetadata.model_validate(load_json(json_text))
