"""
보행 분석 Service Layer
Domain 컴포넌트들을 조합하여 프레임 1개 단위 분석 파이프라인 실행

    frame ─┬─ AngleCalculator        → 각도 맵 + 각도 통계
           ├─ CenterOfMassEstimator  → CoM + 500ms 궤적
           ├─ StrideEstimator        → 보폭 통계 (측면)
           ├─ PoleEstimator          → 폴 각도 / 접지 위치 통계
           └─ GripPhaseClassifier    → 팔별 그립/페이즈 + 협응
"""
import logging
import uuid
from typing import Optional, Tuple

from nordic_analyzer.analyze.angle import angle_status
from nordic_analyzer.analyze.constants import NOMINAL_FPS
from nordic_analyzer.config.settings import settings
from nordic_analyzer.domain.angle.calculator import AngleCalculator
from nordic_analyzer.domain.com.estimator import CenterOfMassEstimator
from nordic_analyzer.domain.grip.classifier import GripPhaseClassifier
from nordic_analyzer.domain.pole.estimator import PoleEstimator
from nordic_analyzer.domain.stats import tracker
from nordic_analyzer.domain.stride.estimator import StrideEstimator
from nordic_analyzer.domain.view.config import active_angle_keys, angle_range
from nordic_analyzer.schemas.pose_dto import Frame
from nordic_analyzer.schemas.session_dto import (
    FrameMetrics,
    PipelineConfig,
    SessionSnapshot,
    SessionState,
)


# ---------- 로거 ----------
def resolve_log_level(name) -> int:
    """LOG_LEVEL 문자열 → logging 레벨 (모르는 이름이면 INFO)"""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.INFO


logger = logging.getLogger(__name__)
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=resolve_log_level(settings.LOG_LEVEL), format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


class GaitAnalysisService:
    """
    보행 분석 메인 서비스

    책임:
    - 프레임 단위 분석 파이프라인 오케스트레이션
    - 이전 상태 → 새 상태 (입력 상태는 변경하지 않음)
    """

    def __init__(
        self,
        config: PipelineConfig,
        angle_calculator: AngleCalculator,
        com_estimator: CenterOfMassEstimator,
        stride_estimator: StrideEstimator,
        pole_estimator: PoleEstimator,
        grip_classifier: GripPhaseClassifier,
    ):
        self.config = config
        self.angle_calculator = angle_calculator
        self.com_estimator = com_estimator
        self.stride_estimator = stride_estimator
        self.pole_estimator = pole_estimator
        self.grip_classifier = grip_classifier

    def process(self, state: SessionState, frame: Frame) -> Tuple[SessionState, Optional[FrameMetrics]]:
        """
        프레임 1개 처리

        Process:
        1. 중복 프레임 확인 (같은 재생 프레임 번호면 그대로 반환)
        2. 각도 계산 + 통계
        3. CoM / 궤적
        4. 보폭
        5. 폴
        6. 그립/페이즈/협응

        Returns:
            (새 상태, 스냅샷). 중복 프레임이면 (입력 상태, None)
        """
        frame_index = frame.frame_index
        if frame_index is not None and frame_index == state.last_processed_frame:
            logger.debug(f"[pipeline] duplicate frame {frame_index} skipped")
            return state, None

        view = self.config.view
        new = state.model_copy(deep=True)
        timestamp = self._timestamp(frame, state)

        # ========== 각도 ==========
        angles = self.angle_calculator.calculate(frame, view)
        statuses = {}
        for key in active_angle_keys(view):
            tracker.record(new.angle_stats[key], angles[key])
            statuses[key] = angle_status(angles[key], angle_range(view, key))
        new.last_angles = angles

        # ========== CoM ==========
        new.com, new.com_trail = self.com_estimator.update(new.com, new.com_trail, frame, timestamp)

        # ========== 보폭 ==========
        stride_cm = self.stride_estimator.update(new.stride_stats, frame, view)

        # ========== 폴 ==========
        poles = self.pole_estimator.update(new.pole_stats, frame, view)

        # ========== 그립 / 협응 ==========
        self.grip_classifier.update(new.grip, new.coordination, frame, view)

        if frame_index is not None:
            new.last_processed_frame = frame_index
        new.frames_processed += 1

        return new, self._snapshot(new, frame_index, angles, statuses, stride_cm, poles)

    @staticmethod
    def _timestamp(frame: Frame, state: SessionState) -> float:
        """CoM 샘플 시각(ms): 캡처 시각 > 재생 시간 > 처리 프레임 수 기반 추정"""
        if frame.timestamp_ms is not None:
            return float(frame.timestamp_ms)
        if frame.playback_time is not None:
            return frame.playback_time * 1000.0
        return state.frames_processed * 1000.0 / NOMINAL_FPS

    def _snapshot(self, state, frame_index, angles, statuses, stride_cm, poles) -> FrameMetrics:
        # 스냅샷은 사본. 호출자가 수정해도 세션 상태에는 영향 없음
        copy = state.model_copy(deep=True)
        view = self.config.view
        return FrameMetrics(
            frame_index=frame_index,
            view=view,
            angles=dict(angles),
            angle_status=statuses,
            angle_stats={key: copy.angle_stats[key] for key in active_angle_keys(view)},
            com=copy.com,
            com_trail=copy.com_trail,
            grip=copy.grip,
            coordination=copy.coordination,
            stride_cm=stride_cm,
            stride=copy.stride_stats,
            poles={side: (p.model_copy() if p is not None else None) for side, p in poles.items()},
            pole_stats=copy.pole_stats,
        )


def process_frame(
    state: SessionState, frame: Frame, config: PipelineConfig
) -> Tuple[SessionState, Optional[FrameMetrics]]:
    """
    파이프라인 진입점 (순수 함수)
    (이전 상태, 프레임, 설정) → (새 상태, 스냅샷 또는 None)
    """
    from nordic_analyzer.services.service_factory import create_gait_analysis_service

    return create_gait_analysis_service(config).process(state, frame)


class GaitAnalysisSession:
    """설정 1개 + 상태 1개를 소유하는 분석 세션"""

    def __init__(self, config: Optional[PipelineConfig] = None, session_id: Optional[str] = None):
        self.session_id = session_id or uuid.uuid4().hex
        self.config = config or PipelineConfig.from_settings()
        self.state = SessionState()
        self._service = self._build_service()
        logger.info(f"[session] created {self.session_id} (view={self.config.view.value})")

    def _build_service(self) -> GaitAnalysisService:
        from nordic_analyzer.services.service_factory import create_gait_analysis_service

        return create_gait_analysis_service(self.config)

    def process(self, frame: Frame) -> Optional[FrameMetrics]:
        """프레임 처리. 중복 프레임이면 None"""
        self.state, metrics = self._service.process(self.state, frame)
        return metrics

    def set_view(self, view) -> PipelineConfig:
        """시점 전환 (누적 통계는 유지). 잘못된 시점이면 ValidationError"""
        previous = self.config.view
        self.config = self.config.with_view(view)
        self._service = self._build_service()
        logger.info(f"[session] {self.session_id} view {previous.value} -> {self.config.view.value}")
        return self.config

    def reset(self) -> SessionState:
        """상태 전체를 새 객체로 교체"""
        self.state = SessionState()
        logger.info(f"[session] {self.session_id} statistics reset")
        return self.state

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            config=self.config,
            state=self.state.model_copy(deep=True),
        )
