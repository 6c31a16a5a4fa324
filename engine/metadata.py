"""
engine/metadata.py — BackendMetadata data contracts.

Pydantic models over the decoded JSON description of a backend (camelCase
aliases). Validation is tolerant and never rejects JSON-shaped input:

    * a check category that is missing or not a list is ``None``
    * non-object entries inside a list are dropped
    * an optional collection that is absent is ``None``, present-but-empty is ``()``
    * boolean flags are kept only when the JSON value is a real boolean
"""
import logging
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


def _objects(value) -> Optional[list]:
    if not isinstance(value, list):
        return None
    kept = [entry for entry in value if isinstance(entry, dict)]
    if len(kept) != len(value):
        logger.debug("Dropped %d non-object metadata entries", len(value) - len(kept))
    return kept


def _text(value) -> Optional[str]:
    return value if isinstance(value, str) else None


def _flag(value) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _members(value) -> Optional[list]:
    """Ordered, de-duplicated members of a JSON array; members keep their JSON type."""
    if not isinstance(value, list):
        return None
    seen = []
    for item in value:
        if item not in seen:
            seen.append(item)
    return seen


class _MetadataModel(BaseModel):
    model_config = ConfigDict(frozen=True, validate_by_name=True, validate_by_alias=True)


class ForeignKey(_MetadataModel):
    table: Optional[str] = None
    column: Optional[str] = None

    @field_validator("table", "column", mode="before")
    @classmethod
    def _as_text(cls, value):
        return _text(value)


class Column(_MetadataModel):
    name: Optional[str] = None
    type: Optional[str] = None
    nullable: Optional[bool] = None
    primary_key: Optional[bool] = Field(None, alias="primaryKey")
    foreign_key: Optional[ForeignKey] = Field(None, alias="foreignKey")

    @field_validator("name", "type", mode="before")
    @classmethod
    def _as_text(cls, value):
        return _text(value)

    @field_validator("nullable", "primary_key", mode="before")
    @classmethod
    def _as_flag(cls, value):
        return _flag(value)

    @field_validator("foreign_key", mode="before")
    @classmethod
    def _as_object(cls, value):
        return value if isinstance(value, (dict, ForeignKey)) else None


class Table(_MetadataModel):
    name: Optional[str] = None
    columns: Tuple[Column, ...] = ()

    @field_validator("name", mode="before")
    @classmethod
    def _as_text(cls, value):
        return _text(value)

    @field_validator("columns", mode="before")
    @classmethod
    def _as_columns(cls, value):
        return _objects(value) or []


class AuthRule(_MetadataModel):
    endpoint: str = ""
    method: str = ""
    requires_auth: Optional[bool] = Field(None, alias="requiresAuth")
    # Non-string members are kept so a present, non-empty list never reads as empty.
    roles_allowed: Optional[Tuple[Any, ...]] = Field(None, alias="rolesAllowed")

    @field_validator("endpoint", "method", mode="before")
    @classmethod
    def _as_text(cls, value):
        return _text(value) or ""

    @field_validator("requires_auth", mode="before")
    @classmethod
    def _as_flag(cls, value):
        return _flag(value)

    @field_validator("roles_allowed", mode="before")
    @classmethod
    def _as_members(cls, value):
        return _members(value)


class FunctionMeta(_MetadataModel):
    name: Optional[str] = None
    trigger: Optional[str] = None
    touches_tables: Optional[Tuple[Any, ...]] = Field(None, alias="touchesTables")
    is_destructive: Optional[bool] = Field(None, alias="isDestructive")

    @field_validator("name", "trigger", mode="before")
    @classmethod
    def _as_text(cls, value):
        return _text(value)

    @field_validator("touches_tables", mode="before")
    @classmethod
    def _as_members(cls, value):
        return _members(value)

    @field_validator("is_destructive", mode="before")
    @classmethod
    def _as_flag(cls, value):
        return _flag(value)


class BackendMetadata(_MetadataModel):
    """
    Build with ``BackendMetadata.model_validate(payload)``; render back to
    camelCase JSON with ``model_dump(mode="json", by_alias=True, exclude_none=True)``.
    """
    tables: Optional[Tuple[Table, ...]] = None
    auth_rules: Optional[Tuple[AuthRule, ...]] = Field(None, alias="authRules")
    functions: Optional[Tuple[FunctionMeta, ...]] = None

    @model_validator(mode="before")
    @classmethod
    def _as_object(cls, payload):
        if isinstance(payload, (dict, BackendMetadata)):
            return payload
        logger.debug("Metadata payload is %s, not an object; all checks disabled",
                     type(payload).__name__)
        return {}

    @field_validator("tables", "auth_rules", "functions", mode="before")
    @classmethod
    def _as_category(cls, value):
        return _objects(value)

    def table_names(self) -> set:
        return {t.name for t in self.tables or () if t.name is not None}
