"""
메트릭/상태 관련 DTO
각 추정기가 갱신하는 세션 상태의 구성 요소
"""
import math
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer

from nordic_analyzer.utils.enums.enums import GripStatus, SideEnum, SwingPhase, PoleStrategyEnum


class MetricSeries(BaseModel):
    """
    제한 길이 누적 통계
    - max/min: 세션 전체(무제한) 이력 기준
    - values/average: 최근 HISTORY_CAP 개 기준
    """
    current: float = 0.0
    max: float = 0.0
    min: float = float("inf")
    values: List[float] = Field(default_factory=list)
    average: float = 0.0

    @property
    def count(self) -> int:
        return len(self.values)

    @field_serializer("min")
    def _serialize_min(self, v: float, info):
        # JSON에는 inf가 없으므로 샘플이 없을 때는 null
        if info.mode_is_json() and not math.isfinite(v):
            return None
        return v


class CenterOfMassSample(BaseModel):
    x: float
    y: float
    z: float = 0.0
    timestamp: float = Field(..., description="샘플 시각 (ms)")


class ForwardSwingStats(BaseModel):
    """전방 스윙 중 '쥐기' 일관성"""
    gripping_count: int = 0
    total_count: int = 0
    consistency_pct: float = 0.0


class BackwardSwingStats(BaseModel):
    """후방 스윙 중 '놓기' 일관성"""
    open_count: int = 0
    total_count: int = 0
    consistency_pct: float = 0.0


class GripState(BaseModel):
    """팔 1개의 스윙 페이즈 / 그립 상태"""
    current_phase: SwingPhase = SwingPhase.unknown
    current_grip: GripStatus = GripStatus.unknown
    hand_openness: Optional[float] = None
    forward_swing: ForwardSwingStats = Field(default_factory=ForwardSwingStats)
    backward_swing: BackwardSwingStats = Field(default_factory=BackwardSwingStats)


class CoordinationState(BaseModel):
    """양팔 협응 (한쪽 전방+쥐기, 반대쪽 후방+놓기)"""
    synchronized_count: int = 0
    total_count: int = 0
    percentage: float = 0.0


class PoleGeometry(BaseModel):
    """복원된 폴 직선 (정규화 좌표)"""
    side: SideEnum
    strategy: PoleStrategyEnum
    grip_x: float
    grip_y: float
    contact_x: float
    contact_y: float
    angle: float = Field(..., description="수직 기준 폴 각도 (도)")
    arm_forward: bool
