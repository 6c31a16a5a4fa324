"""engine/deploy.py — Deploy checks for destructive backend functions."""
from typing import List, Dict

from engine.metadata import BackendMetadata


def has_admin_rule(metadata: BackendMetadata) -> bool:
    """True when any auth rule anywhere in the project allows the "admin" role."""
    return any(
        rule.roles_allowed is not None and "admin" in rule.roles_allowed
        for rule in metadata.auth_rules or ()
    )


def inspect(metadata: BackendMetadata) -> List[Dict]:
    # A single admin-gated rule suppresses these findings project-wide.
    if has_admin_rule(metadata):
        return []

    findings: List[Dict] = []
    for func in metadata.functions or ():
        if func.is_destructive is not True:
            continue
        name = func.name if func.name is not None else "<unnamed>"
        findings.append({
            "severity": "MEDIUM",
            "category": "DEPLOY",
            "title": f'Destructive function "{name}" lacks admin protection',
            "evidence": f'Function "{name}" has isDestructive: true but no auth rules '
                        'mention "admin" role.',
            "recommendation": f'Add auth rules that require "admin" role before executing '
                              f'destructive function "{name}".',
        })
    return findings
