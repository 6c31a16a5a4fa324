"""tests/test_scoring.py — Unit tests for Readiness Score computation"""
from engine.scoring import compute, get_label, get_label_color


def _findings(**counts):
    out = []
    for sev, n in counts.items():
        out.extend({"severity": sev.upper(), "title": sev} for _ in range(n))
    return out


def test_empty_findings():
    result = compute([])
    assert result["readiness_score"] == 100
    assert result["summary"] == {"high": 0, "medium": 0, "low": 0}
    assert result["label"] == "Good"


def test_weights():
    assert compute(_findings(high=1))["readiness_score"] == 80
    assert compute(_findings(medium=1))["readiness_score"] == 90
    assert compute(_findings(low=1))["readiness_score"] == 95
    assert compute(_findings(high=1, medium=1, low=1))["readiness_score"] == 65


def test_deduction_capped_at_80():
    result = compute(_findings(high=6, medium=5))
    assert result["raw_deduction"] == 170
    assert result["deduction"] == 80
    assert result["readiness_score"] == 20


def test_score_never_below_20():
    result = compute(_findings(high=50))
    assert result["readiness_score"] == 20
    assert result["label"] == "Poor"


def test_score_matches_formula():
    for high in range(5):
        for medium in range(5):
            for low in range(5):
                result = compute(_findings(high=high, medium=medium, low=low))
                raw = 20 * high + 10 * medium + 5 * low
                assert result["readiness_score"] == 100 - min(raw, 80)
                assert sum(result["summary"].values()) == high + medium + low


def test_label_thresholds():
    assert get_label(100) == "Good"
    assert get_label(80) == "Good"
    assert get_label(79) == "Fair"
    assert get_label(50) == "Fair"
    assert get_label(49) == "Poor"
    assert get_label(20) == "Poor"


def test_label_colors():
    assert get_label_color("Good") == "success"
    assert get_label_color("Poor") == "danger"
    assert get_label_color("???") == "secondary"
