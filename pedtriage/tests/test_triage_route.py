from __future__ import annotations

import logging

from fastapi.testclient import TestClient

from pedtriage.api.core.logging import PHIRedactor
from pedtriage.api.main import app
from pedtriage.api.services import narrative_service as service_module

client = TestClient(app)


def test_health():
    response = client.get("/health/")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["catalogue"] == "1.0.0"


def test_catalogue_endpoint():
    response = client.get("/api/catalogue")
    assert response.status_code == 200
    body = response.json()
    assert len(body["categories"]) == 8
    assert body["levels"]["1"]["name"] == "1级: 濒危"
    assert body["anaphylaxis_ids"] == ["a1", "a2", "a3"]


def test_assess_hypoxic_infant():
    payload = {"age_years": 0, "age_months": 1, "age_days": 0, "vitals": {"spo2": 88}, "symptoms": ["gi5"]}
    response = client.post("/api/triage/assess", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["level"] == 1
    assert body["reasons"][0] == "V: SpO2 < 90% (1级)"
    assert body["findings"][0]["label"] == "V: SpO2 < 90% (1级)"
    assert body["result"]["zone"]


def test_assess_rejects_unknown_fields():
    response = client.post("/api/triage/assess", json={"age": 3})
    assert response.status_code == 422


def test_assess_includes_dosage_for_anaphylaxis():
    payload = {"age_years": 5, "weight": 20, "symptoms": ["a1"]}
    body = client.post("/api/triage/assess", json=payload).json()
    assert body["dosage"]["epinephrine_mg"] == 0.2
    assert body["dosage"]["methylprednisolone_mg"] == [20.0, 40.0]


def test_list_scores():
    response = client.get("/api/scores/")
    assert response.status_code == 200
    names = {item["name"] for item in response.json()}
    assert names == {"GCS", "PTS"}


def test_gcs_injection_updates_assessment():
    payload = {"components": {"eye": 2, "verbal": 2, "motor": 3}, "patient": {"symptoms": ["n8"]}}
    response = client.post("/api/scores/gcs", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["result"] == {"name": "GCS", "total": 7, "symptom_id": "n1"}
    assert body["patient"]["symptoms"] == ["n1"]
    assert body["assessment"]["level"] == 1


def test_score_without_patient_only_returns_result():
    components = {key: 2 for key in ("weight", "airway", "systolic_bp", "cns", "open_wound", "skeletal")}
    body = client.post("/api/scores/PTS", json={"components": components}).json()
    assert body["result"]["total"] == 12
    assert body["result"]["symptom_id"] is None
    assert body["patient"] is None


def test_score_errors():
    assert client.post("/api/scores/apgar", json={"components": {}}).status_code == 404
    bad = {"components": {"eye": 9, "verbal": 5, "motor": 6}}
    assert client.post("/api/scores/gcs", json=bad).status_code == 422


def test_dosage_endpoint():
    body = client.post("/api/dosage", json={"weight": 40, "age_years": 10}).json()
    assert body["determined"] is True
    assert body["epinephrine_mg"] == 0.3
    assert body["antihistamine_mg"] == 10.0
    assert client.post("/api/dosage", json={}).json()["determined"] is False


def test_narrative_endpoint(monkeypatch):
    seen = {}

    async def fake_generate(messages, *, temperature=None):
        seen["prompt"] = messages[-1]["content"]
        return "【病情评估】需密切观察"

    monkeypatch.setattr(service_module.narrative_service.client, "generate", fake_generate)
    payload = {"age_years": 5, "symptoms": ["gi3"], "risk_factors": ["repeat_visit"]}
    response = client.post("/api/narrative", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body == {"level_name": "2级: 危重", "text": "【病情评估】需密切观察"}
    assert "[风险] 24h内因同一症状再次就诊 (注2)" in seen["prompt"]


def test_narrative_endpoint_failure(monkeypatch):
    async def failing_generate(messages, *, temperature=None):
        raise RuntimeError("quota exceeded")

    monkeypatch.setattr(service_module.narrative_service.client, "generate", failing_generate)
    response = client.post("/api/narrative", json={})
    assert response.status_code == 200
    assert response.json()["text"] == "报告生成失败"


def test_redactor_masks_identifiers():
    record = logging.LogRecord(
        "pedtriage", logging.INFO, __file__, 1, "guardian %s id 11010519491231002X", ("13812345678",), None
    )
    PHIRedactor().filter(record)
    assert record.getMessage() == "guardian [REDACTED] id [REDACTED]"


def test_launcher_defaults_follow_settings():
    from pedtriage.api.__main__ import parse_args
    from pedtriage.api.core.config import settings

    args = parse_args([])
    assert (args.host, args.port, args.reload) == (settings.api_host, settings.api_port, False)
    assert parse_args(["--port", "9001"]).port == 9001
