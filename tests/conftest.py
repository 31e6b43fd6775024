"""
Pytest Configuration & Shared Fixtures

이 파일은 모든 테스트에서 재사용 가능한 fixture를 정의합니다.
"""
import pytest
from fastapi.testclient import TestClient

from nordic_analyzer.schemas.session_dto import PipelineConfig, SessionState
from nordic_analyzer.services.gait_analysis_service import GaitAnalysisSession
from tests.test_helpers import create_nordic_frame


# ========================================
# Application Fixtures
# ========================================

@pytest.fixture(scope="session")
def app():
    """FastAPI 애플리케이션 인스턴스"""
    from nordic_analyzer.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
def client(app):
    """FastAPI TestClient (API 테스트용). 테스트마다 세션 저장소를 비운다"""
    from nordic_analyzer.common.dependencies import registry

    registry.clear()
    yield TestClient(app)
    registry.clear()


# ========================================
# Config / Session Fixtures
# ========================================

@pytest.fixture
def front_config() -> PipelineConfig:
    """정면 시점, 기본 보정값 (1280x720, 5px/cm)"""
    return PipelineConfig(view="front", pixels_per_cm=5.0, frame_width=1280, frame_height=720)


@pytest.fixture
def left_config() -> PipelineConfig:
    """좌측면 시점, 기본 보정값"""
    return PipelineConfig(view="left", pixels_per_cm=5.0, frame_width=1280, frame_height=720)


@pytest.fixture
def empty_state() -> SessionState:
    return SessionState()


@pytest.fixture
def front_session(front_config) -> GaitAnalysisSession:
    return GaitAnalysisSession(config=front_config, session_id="test-front")


@pytest.fixture
def left_session(left_config) -> GaitAnalysisSession:
    return GaitAnalysisSession(config=left_config, session_id="test-left")


# ========================================
# Frame Fixtures
# ========================================

@pytest.fixture
def coordinated_front_frame():
    """정면: 왼팔 전방+쥐기 / 오른팔 후방+놓기 (협응 성공)"""
    return create_nordic_frame("front", ("forward", "gripping"), ("backward", "open"))


@pytest.fixture
def sample_frame_payload():
    """POST /sessions/{id}/frames 요청 바디 (측면 자세, 재생 시간 1초)"""
    frame = create_nordic_frame("left", playback_time=1.0)
    return {
        "landmarks": [lm.model_dump() if lm is not None else None for lm in frame.landmarks],
        "playback_time": 1.0,
    }
