"""
engine/__init__.py — Readiness rule engine.

Runs the schema, auth and deploy checks over a BackendMetadata value,
assigns finding ids and computes the Readiness Score. Pure: no I/O and no
shared state, so it is safe to call from concurrent requests.
"""
import logging
import secrets
from typing import Any, Dict, List, Union

from engine import schema, auth, deploy, scoring
from engine.metadata import BackendMetadata

logger = logging.getLogger(__name__)

# (category attribute, checker) in execution order
CHECKS = [
    ("tables",     schema.inspect),
    ("auth_rules", auth.inspect),
    ("functions",  deploy.inspect),
]


def evaluate(metadata: Union[BackendMetadata, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Evaluate metadata and return the findings, score and summary.

    Returns:
        {
            "findings": [{"id", "severity", "category", "title", "evidence", "recommendation"}],
            "score": int,
            "summary": {"high": n, "medium": n, "low": n},
            "label": str,
        }
    """
    if not isinstance(metadata, BackendMetadata):
        metadata = BackendMetadata.model_validate(metadata)

    findings: List[Dict] = []
    for attr, check in CHECKS:
        if getattr(metadata, attr) is None:
            continue
        findings.extend(check(metadata))

    run_id = _generate_id()
    findings = [
        {"id": f"{run_id}-{n}", **finding}
        for n, finding in enumerate(findings, start=1)
    ]

    score_result = scoring.compute(findings)
    logger.debug("Evaluation %s: %d findings, score=%d",
                 run_id, len(findings), score_result["readiness_score"])

    return {
        "findings": findings,
        "score": score_result["readiness_score"],
        "summary": score_result["summary"],
        "label": score_result["label"],
    }


def _generate_id() -> str:
    return secrets.token_hex(4)
