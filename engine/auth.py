"""
engine/auth.py — Auth rule checks

Flags unauthenticated write endpoints, endpoints that require authentication
but allow no roles, and DELETE endpoints open to the plain "user" role.
"""
from typing import List, Dict

from engine.metadata import BackendMetadata, AuthRule

WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


def inspect(metadata: BackendMetadata) -> List[Dict]:
    findings: List[Dict] = []
    for rule in metadata.auth_rules or ():
        findings.extend(_check_rule(rule))
    return findings


def _check_rule(rule: AuthRule) -> List[Dict]:
    findings: List[Dict] = []
    method = rule.method.upper()
    route = f"{rule.method} {rule.endpoint}"

    if method in WRITE_METHODS and rule.requires_auth is False:
        findings.append(_finding(
            "HIGH",
            f'Write endpoint "{route}" has no authentication',
            f"Endpoint {route} allows write operations without authentication "
            "(requiresAuth: false).",
            f"Set requiresAuth: true for endpoint {route} to prevent unauthorized "
            "data modification.",
        ))

    # Locked out entirely is still a misconfiguration.
    if rule.requires_auth is True and not rule.roles_allowed:
        findings.append(_finding(
            "HIGH",
            f'Endpoint "{route}" requires auth but has no allowed roles',
            f"Endpoint {route} has requiresAuth: true but rolesAllowed is empty. "
            "No users can access this endpoint.",
            f'Add appropriate roles to rolesAllowed (e.g., ["user", "admin"]) for endpoint {route}.',
        ))

    if method == "DELETE" and rule.roles_allowed is not None and "user" in rule.roles_allowed:
        findings.append(_finding(
            "MEDIUM",
            f'DELETE endpoint "{rule.endpoint}" allows "user" role',
            f'Endpoint DELETE {rule.endpoint} allows users with "user" role to delete resources. '
            "This may be overly permissive.",
            f'Consider restricting DELETE operations on "{rule.endpoint}" to "admin" role only.',
        ))

    return findings


def _finding(severity: str, title: str, evidence: str, recommendation: str) -> Dict:
    return {
        "severity": severity,
        "category": "AUTH",
        "title": title,
        "evidence": evidence,
        "recommendation": recommendation,
    }
