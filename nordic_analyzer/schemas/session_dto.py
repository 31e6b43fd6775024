"""
세션/파이프라인 관련 DTO
- PipelineConfig: 세션 설정 (시점, 보정값, 전략)
- SessionState: 세션이 소유하는 누적 상태 전체
- FrameMetrics: 프레임 처리 후 UI/렌더러에 넘기는 읽기 전용 스냅샷
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from nordic_analyzer.analyze.constants import ANGLE_KEYS, POLE_STAT_KEYS
from nordic_analyzer.config.settings import settings
from nordic_analyzer.schemas.metrics_dto import (
    CenterOfMassSample,
    CoordinationState,
    GripState,
    MetricSeries,
    PoleGeometry,
)
from nordic_analyzer.utils.enums.enums import (
    AngleStatus,
    PoleStrategyEnum,
    TrunkLeanConvention,
    ViewEnum,
)


class PipelineConfig(BaseModel):
    """세션 설정. 잘못된 값은 여기(설정 경계)에서 거부된다"""
    model_config = ConfigDict(frozen=True)

    view: ViewEnum = ViewEnum.front
    pixels_per_cm: float = Field(settings.PIXELS_PER_CM, gt=0.0, description="보정값 (px/cm)")
    frame_width: int = Field(settings.FRAME_WIDTH, gt=0, description="영상 폭 (px)")
    frame_height: int = Field(settings.FRAME_HEIGHT, gt=0, description="영상 높이 (px)")
    pole_strategy: PoleStrategyEnum = PoleStrategyEnum.ground_line
    trunk_lean_convention: TrunkLeanConvention = TrunkLeanConvention.hip_relative
    grip_blend: float = Field(
        settings.GRIP_BLEND, ge=0.0, le=1.0, description="그립점 계산 시 엄지 랜드마크 가중치"
    )

    @classmethod
    def from_settings(cls, **overrides) -> "PipelineConfig":
        """settings 기본값 + 오버라이드(None은 무시)"""
        base = {
            "view": settings.DEFAULT_VIEW,
            "pole_strategy": settings.POLE_STRATEGY,
            "trunk_lean_convention": settings.TRUNK_LEAN_CONVENTION,
        }
        base.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**base)

    def with_view(self, view) -> "PipelineConfig":
        """시점만 바꾼 새 설정 (검증 포함)"""
        return self.model_validate({**self.model_dump(), "view": view})


def _angle_series() -> Dict[str, MetricSeries]:
    return {key: MetricSeries() for key in ANGLE_KEYS}


def _pole_series() -> Dict[str, MetricSeries]:
    return {key: MetricSeries() for key in POLE_STAT_KEYS}


def _grip_states() -> Dict[str, GripState]:
    return {"left": GripState(), "right": GripState()}


class SessionState(BaseModel):
    """분석 세션 1개가 소유하는 상태 전체 (리셋 시 통째로 교체)"""
    angle_stats: Dict[str, MetricSeries] = Field(default_factory=_angle_series)
    stride_stats: MetricSeries = Field(default_factory=MetricSeries)
    pole_stats: Dict[str, MetricSeries] = Field(default_factory=_pole_series)

    com: Optional[CenterOfMassSample] = None
    com_trail: List[CenterOfMassSample] = Field(default_factory=list)

    grip: Dict[str, GripState] = Field(default_factory=_grip_states)
    coordination: CoordinationState = Field(default_factory=CoordinationState)

    # 마지막으로 처리한 프레임의 각도 (각도 리포트용)
    last_angles: Dict[str, Optional[float]] = Field(default_factory=dict)

    last_processed_frame: int = -1
    frames_processed: int = 0


class SessionSnapshot(BaseModel):
    """세션 조회 응답 (설정 + 누적 상태 사본)"""
    session_id: str
    config: PipelineConfig
    state: SessionState


class FrameMetrics(BaseModel):
    """프레임 1개 처리 결과 스냅샷"""
    frame_index: Optional[int] = None
    view: ViewEnum
    angles: Dict[str, Optional[float]]
    angle_status: Dict[str, Optional[AngleStatus]] = Field(default_factory=dict)
    angle_stats: Dict[str, MetricSeries] = Field(
        default_factory=dict, description="현재 시점에서 갱신되는 각도 통계"
    )

    com: Optional[CenterOfMassSample] = None
    com_trail: List[CenterOfMassSample] = Field(default_factory=list)

    grip: Dict[str, GripState]
    coordination: CoordinationState

    stride_cm: Optional[float] = Field(None, description="이번 프레임 보폭 측정값 (필터 전)")
    stride: MetricSeries

    poles: Dict[str, Optional[PoleGeometry]] = Field(default_factory=dict)
    pole_stats: Dict[str, MetricSeries]
