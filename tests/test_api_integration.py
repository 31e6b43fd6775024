"""
API Integration Tests

FastAPI 엔드포인트 통합 테스트
"""
import pytest
from fastapi import status


def _create(client, **body):
    response = client.post("/sessions", json=body or None)
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()["session_id"]


class TestHealthEndpoints:
    """Health Check 엔드포인트 테스트"""

    def test_basic_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "ok"
        assert data["sessions"] == 0


class TestSessionLifecycle:
    """세션 생성 → 프레임 → 리포트 → 삭제"""

    def test_create_with_defaults(self, client):
        response = client.post("/sessions")

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["session_id"]
        assert data["config"]["view"] in ["front", "back", "left", "right"]
        assert data["state"]["frames_processed"] == 0
        # 샘플 없는 min(+inf)은 JSON null
        assert data["state"]["stride_stats"]["min"] is None

    def test_create_with_config(self, client):
        response = client.post("/sessions", json={"view": "left", "pixels_per_cm": 4.0})
        config = response.json()["config"]
        assert config["view"] == "left"
        assert config["pixels_per_cm"] == 4.0

    @pytest.mark.parametrize("body", [
        {"view": "top"},
        {"pixels_per_cm": 0},
        {"pole_strategy": "average"},
        {"grip_blend": 1.5},
    ])
    def test_create_invalid_config(self, client, body):
        response = client.post("/sessions", json=body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_unknown_session_is_404(self, client):
        assert client.get("/sessions/nope").status_code == status.HTTP_404_NOT_FOUND
        assert client.post("/sessions/nope/reset").status_code == status.HTTP_404_NOT_FOUND
        assert client.delete("/sessions/nope").status_code == status.HTTP_404_NOT_FOUND

    def test_submit_frame_and_duplicate(self, client, sample_frame_payload):
        session_id = _create(client, view="left")

        first = client.post(f"/sessions/{session_id}/frames", json=sample_frame_payload)
        assert first.status_code == status.HTTP_200_OK
        metrics = first.json()
        assert metrics["frame_index"] == 30
        assert metrics["view"] == "left"
        assert metrics["stride_cm"] == pytest.approx(51.2)
        assert set(metrics["angles"].keys()) >= {"frontSwingAngle", "armSwing"}
        assert metrics["grip"]["left"]["current_phase"] == "forward"

        second = client.post(f"/sessions/{session_id}/frames", json=sample_frame_payload)
        assert second.json() == {"skipped": True}

        state = client.get(f"/sessions/{session_id}").json()["state"]
        assert state["frames_processed"] == 1

    def test_empty_landmarks_rejected(self, client):
        session_id = _create(client)
        response = client.post(f"/sessions/{session_id}/frames", json={"landmarks": []})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_view_switch(self, client):
        session_id = _create(client, view="front")

        response = client.put(f"/sessions/{session_id}/view", json={"view": "right"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["config"]["view"] == "right"

        bad = client.put(f"/sessions/{session_id}/view", json={"view": "diagonal"})
        assert bad.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_reset(self, client, sample_frame_payload):
        session_id = _create(client, view="left")
        client.post(f"/sessions/{session_id}/frames", json=sample_frame_payload)

        response = client.post(f"/sessions/{session_id}/reset")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["state"]["frames_processed"] == 0

    def test_reports(self, client, sample_frame_payload):
        session_id = _create(client, view="left")
        client.post(f"/sessions/{session_id}/frames", json=sample_frame_payload)

        stats = client.get(f"/sessions/{session_id}/report")
        assert stats.status_code == status.HTTP_200_OK
        assert stats.headers["content-type"].startswith("text/plain")
        assert "Nordic Walking 통계 데이터" in stats.text
        assert "보폭 통계" in stats.text

        angles = client.get(f"/sessions/{session_id}/report", params={"kind": "angles"})
        assert "전방 스윙 각도" in angles.text

        bad = client.get(f"/sessions/{session_id}/report", params={"kind": "pdf"})
        assert bad.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_delete(self, client):
        session_id = _create(client)

        assert client.delete(f"/sessions/{session_id}").status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/sessions/{session_id}").status_code == status.HTTP_404_NOT_FOUND


class TestSessionRegistry:

    def test_oldest_session_evicted_at_limit(self, client):
        from nordic_analyzer.common.dependencies import registry

        limit = registry.max_sessions
        ids = [_create(client) for _ in range(limit + 1)]

        assert len(registry) == limit
        assert client.get(f"/sessions/{ids[0]}").status_code == status.HTTP_404_NOT_FOUND
        assert client.get(f"/sessions/{ids[-1]}").status_code == status.HTTP_200_OK
