"""
engine/scoring.py — Readiness Score aggregation.

Computes a capped deduction-from-baseline Readiness Score starting at 100.
"""
from typing import List, Dict, Any

SEVERITY_DEDUCTIONS = {
    "HIGH": 20,
    "MEDIUM": 10,
    "LOW": 5,
}

# Large finding counts bottom out at 100 - MAX_DEDUCTION instead of 0.
MAX_DEDUCTION = 80

LABELS = [
    (80, 100, "Good"),
    (50, 79, "Fair"),
    (0, 49, "Poor"),
]


def compute(findings: List[Dict]) -> Dict[str, Any]:
    """
    Compute the Readiness Score and summary from a list of finding dicts.

    Returns:
        {
            "readiness_score": int,
            "label": str,
            "summary": {"high": n, "medium": n, "low": n},
            "raw_deduction": int,
            "deduction": int,
        }
    """
    summary = {"high": 0, "medium": 0, "low": 0}
    raw_deduction = 0

    for finding in findings:
        sev = finding["severity"]
        raw_deduction += SEVERITY_DEDUCTIONS[sev]
        summary[sev.lower()] += 1

    deduction = min(raw_deduction, MAX_DEDUCTION)
    score = max(0, min(100, 100 - deduction))

    return {
        "readiness_score": score,
        "label": get_label(score),
        "summary": summary,
        "raw_deduction": raw_deduction,
        "deduction": deduction,
    }


def get_label(score: int) -> str:
    for low, high, label in LABELS:
        if low <= score <= high:
            return label
    return "Poor"


def get_label_color(label: str) -> str:
    """Return a CSS color class for a given score label."""
    return {
        "Good": "success",
        "Fair": "warning",
        "Poor": "danger",
    }.get(label, "secondary")
