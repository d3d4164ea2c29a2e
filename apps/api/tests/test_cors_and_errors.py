"""CORS headers, pre-flight handling and the error envelope."""
from core.cors import CORS_HEADERS
from core.exceptions import GENERIC_DETAILS
from services.video_analysis import VideoAnalysisPipeline


def _assert_cors(response):
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-headers"] == CORS_HEADERS["Access-Control-Allow-Headers"]


def test_preflight_is_answered_without_routing(client, fake_gemini):
    response = client.options("/v1/analyze-video")

    assert response.status_code == 200
    _assert_cors(response)
    assert fake_gemini.calls == []


def test_preflight_on_unknown_path(client):
    response = client.options("/v1/does-not-exist")

    assert response.status_code == 200
    _assert_cors(response)


def test_success_and_error_responses_carry_cors(client, test_athlete):
    _assert_cors(client.get("/ping"))
    _assert_cors(client.post("/v1/analyze-video", json={}))
    _assert_cors(client.get("/v1/athletes/ghost/assessments"))


def test_error_envelope_shape(client, db_session):
    response = client.post("/v1/generate-training-plan", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing athleteId", "details": GENERIC_DETAILS}


def test_invalid_json_body_is_400(client, db_session):
    response = client.post(
        "/v1/analyze-video",
        content="{videoId: v1",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Request body must be valid JSON"


def test_empty_body_is_400(client, db_session):
    response = client.post("/v1/generate-training-plan")

    assert response.status_code == 400


def test_non_object_body_is_400(client, db_session):
    response = client.post("/v1/analyze-video", json=["v1", "a1"])

    assert response.status_code == 400
    assert response.json()["error"] == "Request body must be a JSON object"


def test_wrongly_typed_field_is_400_not_422(client, db_session):
    response = client.post("/v1/generate-training-plan", json={"athleteId": "a1", "goals": "faster"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid goals")


def test_unhandled_exception_becomes_500_envelope(client, test_video, monkeypatch):
    def _explode(self, request):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(VideoAnalysisPipeline, "run", _explode)

    response = client.post("/v1/analyze-video", json={"videoId": "v1", "athleteId": "a1"})

    assert response.status_code == 500
    assert response.json() == {"error": "An unexpected error occurred", "details": GENERIC_DETAILS}
    _assert_cors(response)


def test_ping(client):
    assert client.get("/ping").json() == {"pong": True}


def test_health_reports_database(client, db_session):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
