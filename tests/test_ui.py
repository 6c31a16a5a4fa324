"""tests/test_ui.py — Web UI route tests"""
import json


def test_index(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Paste metadata JSON" in resp.data


def test_index_sample_prefill(client):
    resp = client.get("/?sample=1")
    assert resp.status_code == 200
    assert b"cleanup_old_data" in resp.data


def test_about(client):
    resp = client.get("/about")
    assert resp.status_code == 200
    assert b"capped at 80" in resp.data


def test_analyze_redirects_to_report(client, sample_metadata):
    resp = client.post("/analyze", data={
        "projectLabel": "UI project",
        "sourceMode": "manual",
        "metadataJson": json.dumps(sample_metadata),
    })
    assert resp.status_code == 302
    location = resp.headers["Location"]
    assert "/r/" in location

    page = client.get(location)
    assert page.status_code == 200
    assert b"UI project" in page.data
    assert b"Poor" in page.data
    assert b"has no primary key" in page.data


def test_analyze_invalid_json_rerenders_form(client):
    resp = client.post("/analyze", data={
        "projectLabel": "Broken",
        "sourceMode": "manual",
        "metadataJson": "{nope",
    })
    assert resp.status_code == 400
    assert b"Invalid JSON" in resp.data
    assert b"{nope" in resp.data


def test_analyze_does_not_echo_api_key(client):
    resp = client.post("/analyze", data={
        "projectLabel": "Live",
        "sourceMode": "insforge",
        "baseUrl": "not-a-url",
        "apiKey": "super-secret-key",
    })
    assert resp.status_code == 400
    assert b"super-secret-key" not in resp.data


def test_report_severity_filter(client, sample_metadata):
    resp = client.post("/analyze", data={
        "projectLabel": "Filter",
        "sourceMode": "manual",
        "metadataJson": json.dumps(sample_metadata),
    })
    location = resp.headers["Location"]

    page = client.get(location + "?severity=medium")
    assert page.status_code == 200
    assert b"lacks admin protection" in page.data
    assert b"has no primary key" not in page.data


def test_report_not_found(client):
    resp = client.get("/r/missing")
    assert resp.status_code == 404
    assert b"Report not found" in resp.data
