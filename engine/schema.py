"""
engine/schema.py — Schema checks

Audits table definitions for missing primary keys, nullable identity columns,
undeclared foreign keys and foreign keys pointing at unknown tables.
"""
from typing import List, Dict

from engine.metadata import BackendMetadata, Table, Column

# Columns that should never be nullable. Exact, case-sensitive match.
_NON_NULLABLE_NAMES = ("email", "title")
_FK_SUFFIX = "_id"


def inspect(metadata: BackendMetadata) -> List[Dict]:
    """Run schema checks over every table, in input order."""
    findings: List[Dict] = []
    table_names = metadata.table_names()

    for table in metadata.tables or ():
        findings.extend(_check_primary_key(table))
        for column in table.columns:
            findings.extend(_check_column(table, column, table_names))

    return findings


def _check_primary_key(table: Table) -> List[Dict]:
    if any(c.primary_key is True for c in table.columns):
        return []
    name = _label(table.name)
    return [_finding(
        "HIGH",
        f'Table "{name}" has no primary key',
        f"Table {name} has {len(table.columns)} columns but no primary key defined.",
        f'Add a primary key column (e.g., "id" with integer type and primaryKey: true) '
        f'to table "{name}".',
    )]


def _check_column(table: Table, column: Column, table_names: set) -> List[Dict]:
    findings: List[Dict] = []
    tname, cname = _label(table.name), _label(column.name)

    # ── Nullable identity columns ─────────────────────────────────────────────
    if column.name in _NON_NULLABLE_NAMES and column.nullable is True:
        findings.append(_finding(
            "MEDIUM",
            f'Column "{cname}" in table "{tname}" is nullable',
            f'Column "{cname}" in table "{tname}" has nullable: true. '
            "This may cause data integrity issues.",
            f'Set nullable: false for column "{cname}" in table "{tname}" to ensure data integrity.',
        ))

    # ── *_id without a declared relationship ──────────────────────────────────
    if column.name is not None and column.name.endswith(_FK_SUFFIX) and column.foreign_key is None:
        findings.append(_finding(
            "HIGH",
            f'Column "{cname}" in table "{tname}" lacks foreign key',
            f'Column "{cname}" in table "{tname}" ends with "{_FK_SUFFIX}" '
            "but has no foreignKey relationship defined.",
            f'Add a foreignKey relationship to column "{cname}" pointing to the referenced '
            "table and column.",
        ))

    # ── Foreign key to an unknown table ───────────────────────────────────────
    # Only the target table is resolved; the target column is not verified.
    if column.foreign_key is not None and column.foreign_key.table not in table_names:
        target = _label(column.foreign_key.table)
        findings.append(_finding(
            "HIGH",
            f'Foreign key in "{tname}.{cname}" points to non-existent table',
            f'Column "{cname}" references table "{target}" which does not exist in the schema.',
            f'Either create the missing table "{target}" or fix the foreignKey reference.',
        ))

    return findings


def _label(name) -> str:
    return name if name is not None else "<unnamed>"


def _finding(severity: str, title: str, evidence: str, recommendation: str) -> Dict:
    return {
        "severity": severity,
        "category": "SCHEMA",
        "title": title,
        "evidence": evidence,
        "recommendation": recommendation,
    }
