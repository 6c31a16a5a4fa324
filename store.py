"""
store.py — Report Store.

Persists analysis reports under a short generated slug and reads them back.
Two interchangeable backends behind the same save/get interface:

    SQLReportStore       Flask-SQLAlchemy (Report + Finding tables)
    JSONFileReportStore  a single JSON document on disk
"""
import os
import json
import logging
import secrets
import string
import tempfile
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from extensions import db
from models.report import Report
from models.finding import Finding

logger = logging.getLogger(__name__)

SLUG_ALPHABET = string.ascii_lowercase + string.digits
SLUG_LENGTH = 6


def generate_slug(length: int = SLUG_LENGTH) -> str:
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


class ReportStore:
    """
    save(report) takes a report dict without "slug"/"createdAt"
    (projectLabel, sourceMode, readinessScore, summary, findings, optional
    rawMetadata), assigns both and returns the slug.
    get(slug) returns the full report dict or None.
    """

    def save(self, report: Dict[str, Any]) -> str:
        raise NotImplementedError

    def get(self, slug: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def exists(self, slug: str) -> bool:
        return self.get(slug) is not None

    def _unique_slug(self) -> str:
        slug = generate_slug()
        while self.exists(slug):
            slug = generate_slug()
        return slug


class SQLReportStore(ReportStore):
    """Requires an active Flask application context."""

    def exists(self, slug: str) -> bool:
        return db.session.get(Report, slug) is not None

    def save(self, report: Dict[str, Any]) -> str:
        slug = self._unique_slug()
        summary = report["summary"]
        raw = report.get("rawMetadata")

        row = Report(
            slug=slug,
            project_label=report["projectLabel"],
            source_mode=report["sourceMode"],
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
            readiness_score=report["readinessScore"],
            summary_high=summary["high"],
            summary_medium=summary["medium"],
            summary_low=summary["low"],
            raw_metadata=json.dumps(raw) if raw is not None else None,
        )
        for position, f_dict in enumerate(report["findings"]):
            row.findings.append(Finding(
                position=position,
                finding_id=f_dict["id"],
                severity=f_dict["severity"],
                category=f_dict["category"],
                title=f_dict["title"],
                evidence=f_dict["evidence"],
                recommendation=f_dict["recommendation"],
            ))

        db.session.add(row)
        db.session.commit()
        return slug

    def get(self, slug: str) -> Optional[Dict[str, Any]]:
        row = db.session.get(Report, slug)
        return row.to_dict() if row else None


class JSONFileReportStore(ReportStore):
    """All reports in one ``{"reports": {slug: report}}`` document."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {"reports": {}}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Unreadable reports file %s, starting empty: %s", self.path, e)
            return {"reports": {}}
        if not isinstance(data, dict) or not isinstance(data.get("reports"), dict):
            return {"reports": {}}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        folder = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(folder, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".reports-", suffix=".json", dir=folder)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def exists(self, slug: str) -> bool:
        return slug in self._load()["reports"]

    def save(self, report: Dict[str, Any]) -> str:
        with self._lock:
            data = self._load()
            slug = generate_slug()
            while slug in data["reports"]:
                slug = generate_slug()
            created_at = datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
            stored = {k: v for k, v in report.items() if k not in ("slug", "createdAt")}
            if stored.get("rawMetadata") is None:
                stored.pop("rawMetadata", None)
            data["reports"][slug] = {"slug": slug, "createdAt": created_at, **stored}
            self._write(data)
        return slug

    def get(self, slug: str) -> Optional[Dict[str, Any]]:
        return self._load()["reports"].get(slug)


def create_store(config) -> ReportStore:
    backend = config.get("REPORT_STORE", "sql")
    if backend == "sql":
        return SQLReportStore()
    if backend == "file":
        return JSONFileReportStore(config["REPORTS_FILE"])
    raise ValueError(f"Unknown REPORT_STORE backend: {backend!r}")
