"""models/finding.py — SQLAlchemy model for individual readiness findings."""
from extensions import db

SEVERITY_ORDER = {"HIGH": 0, "MEDIUM": 1, "LOW": 2}


class Finding(db.Model):
    __tablename__ = "finding"

    pk = db.Column(db.Integer, primary_key=True, autoincrement=True)
    report_slug = db.Column(db.String(16), db.ForeignKey("report.slug"), nullable=False)
    position = db.Column(db.Integer, nullable=False)   # engine output order
    finding_id = db.Column(db.String(32), nullable=False)
    severity = db.Column(db.String(16))  # 'HIGH' | 'MEDIUM' | 'LOW'
    category = db.Column(db.String(16))  # 'SCHEMA' | 'AUTH' | 'DEPLOY'
    title = db.Column(db.String(512))
    evidence = db.Column(db.Text)
    recommendation = db.Column(db.Text)

    def to_dict(self):
        return {
            "id": self.finding_id,
            "severity": self.severity,
            "category": self.category,
            "title": self.title,
            "evidence": self.evidence,
            "recommendation": self.recommendation,
        }

    def __repr__(self):
        return f"<Finding [{self.severity}] {self.title}>"
