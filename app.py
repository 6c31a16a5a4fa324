"""
app.py — Flask Application Factory for ForgeGuard.
"""
import os
import json
import logging

import click
from flask import Flask
from flask_cors import CORS
from pythonjsonlogger.json import JsonFormatter

from config import config_map
from extensions import db, limiter
from models.finding import SEVERITY_ORDER
from store import create_store

# ── Logging ────────────────────────────────────────────────────────────────────
handler = logging.StreamHandler()
handler.setFormatter(JsonFormatter(
    "%(asctime)s %(levelname)s %(name)s %(message)s"
))
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"), handlers=[handler])

logger = logging.getLogger(__name__)


def sort_findings_by_severity(findings):
    return sorted(findings, key=lambda x: SEVERITY_ORDER.get(x.get("severity"), 3))


def create_app(env: str = None) -> Flask:
    """Application factory."""
    env = env or os.environ.get("FLASK_ENV", "development")
    cfg = config_map.get(env, config_map["default"])

    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.config.from_object(cfg)
    logging.getLogger().setLevel(app.config["LOG_LEVEL"])

    app.jinja_env.filters['sort_by_severity'] = sort_findings_by_severity

    # ── Ensure directories exist ───────────────────────────────────────────────
    try:
        data_dir = os.path.join(os.path.dirname(__file__), "data")
        os.makedirs(data_dir, exist_ok=True)
    except OSError:
        pass

    # ── Extensions ────────────────────────────────────────────────────────────
    db.init_app(app)
    CORS(app, origins=app.config["CORS_ORIGINS"])
    limiter.init_app(app)
    app.extensions["report_store"] = create_store(app.config)

    # ── Blueprints ────────────────────────────────────────────────────────────
    from blueprints.api import api_bp
    from blueprints.ui import ui_bp
    app.register_blueprint(api_bp, url_prefix="/api/v1")
    app.register_blueprint(ui_bp)

    # ── CLI ───────────────────────────────────────────────────────────────────
    app.cli.add_command(audit_command)

    # ── DB init ───────────────────────────────────────────────────────────────
    with app.app_context():
        try:
            db.create_all()
            logger.info("Database tables created / verified.")
        except Exception as e:
            logger.error("Failed to initialize database: %s", e)

    logger.info("ForgeGuard app created [env=%s store=%s]", env, app.config["REPORT_STORE"])
    return app


@click.command("audit")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the raw evaluation as JSON.")
def audit_command(path, as_json):
    """Evaluate a metadata JSON file and print the readiness report."""
    import engine
    import metadata_source
    from errors import MetadataParseError

    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    try:
        metadata = metadata_source.parse(text)
    except MetadataParseError as e:
        raise click.ClickException(e.message)

    result = engine.evaluate(metadata)
    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    summary = result["summary"]
    click.echo(f"Readiness score: {result['score']}/100 ({result['label']})")
    click.echo(f"HIGH: {summary['high']}  MEDIUM: {summary['medium']}  LOW: {summary['low']}")
    for finding in sort_findings_by_severity(result["findings"]):
        click.echo(f"[{finding['severity']}] {finding['category']}: {finding['title']}")


app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
