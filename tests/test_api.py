"""Tests for the HTTP API."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from hookclip.config import Settings
from hookclip.main import create_app
from hookclip.services.analysis.providers.fake import FakeAnalyzer
from hookclip.services.render.providers.fake import FakeRenderBackend

VIDEO_URL = "https://www.youtube.com/watch?v=abc123"
MOMENT = {"label": "Funny reaction", "start": 15, "end": 23, "score": 88, "tags": ["funny", "reaction"]}


@pytest.fixture
def backend() -> FakeRenderBackend:
    return FakeRenderBackend()


@pytest.fixture
def client(backend: FakeRenderBackend) -> Iterator[TestClient]:
    cfg = Settings(_env_file=None, sweep_interval_sec=3600.0)
    app = create_app(cfg, analyzer=FakeAnalyzer(), backend=backend)
    with TestClient(app) as c:
        yield c


def _submit(client: TestClient, **options: str) -> dict:
    response = client.post("/api/v1/jobs", json={"moment": MOMENT, **options})
    assert response.status_code == 202
    return response.json()


def _event(client: TestClient, job_id: str, kind: str, **extra: str) -> dict:
    response = client.post("/api/v1/render-events", json={"job_id": job_id, "kind": kind, **extra})
    assert response.status_code == 202
    return response.json()


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAnalyses:
    def test_create_analysis(self, client: TestClient) -> None:
        response = client.post("/api/v1/analyses", json={"url": VIDEO_URL})
        assert response.status_code == 201
        data = response.json()
        assert data["analysis_id"] == "abc123"
        assert data["overall_score"] == 78
        assert data["level"] == "high"
        assert len(data["hooks"]) == 3
        first = data["moments"][0]
        assert first["label"] == "Funny reaction"
        assert first["tags"] == ["funny", "reaction"]
        assert first["level"] == "very_high"
        assert first["start_label"] == "00:15"

    def test_invalid_link(self, client: TestClient) -> None:
        response = client.post("/api/v1/analyses", json={"url": "https://example.com/x"})
        assert response.status_code == 422

    def test_get_unknown_analysis(self, client: TestClient) -> None:
        assert client.get("/api/v1/analyses/nope").status_code == 404

    def test_search_moments(self, client: TestClient) -> None:
        client.post("/api/v1/analyses", json={"url": VIDEO_URL})
        response = client.get("/api/v1/analyses/abc123/moments", params={"q": "emotional"})
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [m["label"] for m in data["moments"]] == ["Powerful quote", "Sad scene"]

        everything = client.get("/api/v1/analyses/abc123/moments").json()
        assert everything["count"] == 4

    def test_search_unknown_analysis(self, client: TestClient) -> None:
        assert client.get("/api/v1/analyses/nope/moments", params={"q": "x"}).status_code == 404


class TestJobs:
    def test_clip_lifecycle(self, client: TestClient) -> None:
        job = _submit(client, aspect_ratio="9:16", resolution="720p")
        assert job["status"] == "queued"
        assert job["aspect_ratio"] == "9:16"
        job_id = job["job_id"]

        assert client.get(f"/api/v1/jobs/{job_id}").json()["status"] == "queued"

        ack = _event(client, job_id, "started")
        assert ack == {"job_id": job_id, "applied": True, "status": "processing"}

        ack = _event(client, job_id, "done", result_ref="https://media.local/clip.mp4")
        assert ack["status"] == "done"

        ack = _event(client, job_id, "failed", reason="late")
        assert ack["applied"] is False
        assert ack["status"] == "done"

        data = client.get(f"/api/v1/jobs/{job_id}").json()
        assert data["status"] == "done"
        assert data["result_ref"] == "https://media.local/clip.mp4"
        assert data["error"] is None

    def test_defaults(self, client: TestClient) -> None:
        job = _submit(client)
        assert job["aspect_ratio"] == "16:9"
        assert job["resolution"] == "1080p"

    def test_invalid_options(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/jobs",
            json={"moment": MOMENT, "aspect_ratio": "21:9", "resolution": "1080p"},
        )
        assert response.status_code == 422
        assert client.get("/api/v1/jobs").json() == []

    def test_invalid_moment(self, client: TestClient) -> None:
        bad = {**MOMENT, "start": 30}
        response = client.post("/api/v1/jobs", json={"moment": bad})
        assert response.status_code == 422

    def test_non_finite_moment_rejected(self, client: TestClient) -> None:
        body = '{"moment": {"label": "x", "start": NaN, "end": Infinity, "score": 50}}'
        response = client.post(
            "/api/v1/jobs",
            content=body,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        assert client.get("/api/v1/jobs").json() == []

    def test_unknown_job(self, client: TestClient) -> None:
        assert client.get("/api/v1/jobs/unknown").status_code == 404
        assert client.post("/api/v1/jobs/unknown/cancel").status_code == 404

    def test_event_for_unknown_job(self, client: TestClient) -> None:
        response = client.post("/api/v1/render-events", json={"job_id": "ghost", "kind": "started"})
        assert response.status_code == 404

    def test_done_event_without_ref_rejected(self, client: TestClient) -> None:
        job = _submit(client)
        response = client.post(
            "/api/v1/render-events", json={"job_id": job["job_id"], "kind": "done"}
        )
        assert response.status_code == 422

    def test_cancel(self, client: TestClient) -> None:
        job = _submit(client)
        response = client.post(f"/api/v1/jobs/{job['job_id']}/cancel")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "failed"
        assert data["error"]["reason"] == "cancelled"
        assert data["result_ref"] is None

    def test_list_jobs(self, client: TestClient) -> None:
        first = _submit(client)
        second = _submit(client)
        listed = client.get("/api/v1/jobs").json()
        assert {j["job_id"] for j in listed} == {first["job_id"], second["job_id"]}
        assert all(j["label"] == "Funny reaction" for j in listed)

    def test_stream_redirects_when_done(self, client: TestClient) -> None:
        job_id = _submit(client)["job_id"]
        assert client.get(f"/api/v1/jobs/{job_id}/stream").status_code == 409

        _event(client, job_id, "started")
        _event(client, job_id, "done", result_ref="https://media.local/clip.mp4")
        response = client.get(f"/api/v1/jobs/{job_id}/stream", follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"] == "https://media.local/clip.mp4"


class TestBackendFailure:
    @pytest.fixture
    def backend(self) -> FakeRenderBackend:
        return FakeRenderBackend(fail_start=True)

    def test_start_failure_surfaces_as_failed_job(self, client: TestClient) -> None:
        job_id = _submit(client)["job_id"]
        data = client.get(f"/api/v1/jobs/{job_id}").json()
        assert data["status"] == "failed"
        assert data["error"]["reason"] == "backend_error"
