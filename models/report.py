"""models/report.py — SQLAlchemy model for readiness reports."""
import json
from extensions import db


class Report(db.Model):
    __tablename__ = "report"

    slug = db.Column(db.String(16), primary_key=True)         # e.g. 'k3f8b2'
    project_label = db.Column(db.String(255), nullable=False)
    source_mode = db.Column(db.String(16), nullable=False)    # 'insforge' | 'manual'
    created_at = db.Column(db.DateTime, nullable=False)       # naive UTC
    readiness_score = db.Column(db.Integer, nullable=False)

    summary_high = db.Column(db.Integer, default=0)
    summary_medium = db.Column(db.Integer, default=0)
    summary_low = db.Column(db.Integer, default=0)

    raw_metadata = db.Column(db.Text)                         # JSON, manual mode only

    findings = db.relationship("Finding", backref="report", lazy=True,
                               order_by="Finding.position",
                               cascade="all, delete-orphan")

    def to_dict(self):
        data = {
            "slug": self.slug,
            "projectLabel": self.project_label,
            "sourceMode": self.source_mode,
            "createdAt": self.created_at.isoformat() + "Z" if self.created_at else None,
            "readinessScore": self.readiness_score,
            "summary": {
                "high": self.summary_high,
                "medium": self.summary_medium,
                "low": self.summary_low,
            },
            "findings": [f.to_dict() for f in self.findings],
        }
        if self.raw_metadata is not None:
            data["rawMetadata"] = json.loads(self.raw_metadata)
        return data

    def __repr__(self):
        return f"<Report {self.slug} score={self.readiness_score} project={self.project_label}>"
