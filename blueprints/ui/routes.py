"""
blueprints/ui/routes.py — Web UI routes for ForgeGuard.

Routes:
    GET  /            → metadata entry forms (InsForge / manual JSON)
    POST /analyze     → run analysis, redirect to /r/<slug>
    GET  /r/<slug>    → readiness report
    GET  /about       → what the checks look for
"""
import json
import logging

from flask import (
    current_app, request, render_template,
    redirect, url_for, flash
)

from blueprints.ui import ui_bp
from engine.sample import SAMPLE_METADATA
from engine.scoring import get_label, get_label_color
from errors import ForgeGuardError
from pipeline import run_analysis

logger = logging.getLogger(__name__)

SEVERITY_FILTERS = ("HIGH", "MEDIUM", "LOW")


@ui_bp.route("/", methods=["GET"])
def index():
    form = {}
    if request.args.get("sample"):
        form = {"sourceMode": "manual",
                "metadataJson": json.dumps(SAMPLE_METADATA, indent=2)}
        flash("Pre-filled with sample metadata that triggers multiple findings.", "info")
    return render_template("index.html", form=form)


@ui_bp.route("/analyze", methods=["POST"])
def analyze():
    form = request.form.to_dict()
    try:
        result = run_analysis(form, current_app.extensions["report_store"], current_app.config)
    except ForgeGuardError as e:
        flash(e.message, "error")
        # The API key is never echoed back into the page.
        form.pop("apiKey", None)
        return render_template("index.html", form=form), e.status_code
    except Exception as e:
        logger.error("Analysis processing error: %s", e, exc_info=True)
        flash(f"Analysis failed: {e}", "error")
        form.pop("apiKey", None)
        return render_template("index.html", form=form), 500

    return redirect(url_for("ui.report", slug=result["slug"]))


@ui_bp.route("/r/<slug>", methods=["GET"])
def report(slug: str):
    data = current_app.extensions["report_store"].get(slug)
    if data is None:
        return render_template("not_found.html", slug=slug), 404

    severity = request.args.get("severity", "").upper()
    findings = data["findings"]
    if severity in SEVERITY_FILTERS:
        findings = [f for f in findings if f["severity"] == severity]
    else:
        severity = ""

    label = get_label(data["readinessScore"])
    return render_template("report.html", report=data, findings=findings,
                           severity=severity, label=label,
                           color_class=get_label_color(label))


@ui_bp.route("/about", methods=["GET"])
def about():
    return render_template("about.html")
