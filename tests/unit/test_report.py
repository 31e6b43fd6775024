from datetime import datetime

from nordic_analyzer.report.service import build_angle_report, build_statistics_report
from nordic_analyzer.schemas.session_dto import SessionState
from tests.test_helpers import build_frame, create_walking_sequence

FIXED_TIME = datetime(2024, 5, 1, 9, 30, 0)


def test_statistics_report_lateral(left_session):
    for frame in create_walking_sequence("left", 6):
        left_session.process(frame)

    text = build_statistics_report(left_session.state, left_session.config, generated_at=FIXED_TIME)

    assert "시점: 좌측면" in text
    assert "2024-05-01 09:30:00" in text
    assert "폴 접지 각도 통계" in text
    assert "권장 범위: 30-50°" in text
    assert "폴 접지 위치 통계" in text
    assert "보폭 통계 (cm):" in text
    assert "현재: 51.2 cm" in text
    assert "신체 질량중심 위치:" in text
    assert "양팔 협응: 100.0% (6/6)" in text
    # 첫 번째 각도(전방 스윙)는 전방 프레임에서만 기록
    assert text.rstrip().endswith("데이터 포인트 수: 3")


def test_statistics_report_front_omits_lateral_sections(front_session):
    for frame in create_walking_sequence("front", 3):
        front_session.process(frame)

    text = build_statistics_report(front_session.state, front_session.config, generated_at=FIXED_TIME)

    assert "시점: 정면" in text
    assert "팔 스윙 각도:" in text
    assert "권장 범위: 60-90°" in text
    assert "보폭 통계" not in text
    assert "폴 접지 위치 통계" not in text


def test_statistics_report_skips_angles_without_samples(front_config):
    text = build_statistics_report(SessionState(), front_config, generated_at=FIXED_TIME)
    assert "팔 스윙 각도:" not in text
    assert "신체 질량중심 위치" not in text
    assert "데이터 포인트 수: 0" in text


def test_statistics_report_sections_filter(left_session):
    for frame in create_walking_sequence("left", 2):
        left_session.process(frame)
    text = build_statistics_report(
        left_session.state, left_session.config, generated_at=FIXED_TIME, sections=["stride"]
    )
    assert "보폭 통계" in text
    assert "폴 접지 각도 통계" not in text
    assert "그립 일관성" not in text


def test_angle_report_marks(front_session):
    # armSwing 90도 (정상 범위 60-90 → ✓)
    front_session.process(build_frame({11: (0.0, 0.0), 13: (0.0, 1.0), 15: (1.0, 1.0)}))

    text = build_angle_report(front_session.state, front_session.config, generated_at=FIXED_TIME)

    assert "Nordic Walking 동작 분석 리포트" in text
    assert "팔 스윙 각도: 90.0° ✓" in text
    assert "체간 기울기: N/A" in text
    assert text.rstrip().endswith("리포트 끝")
