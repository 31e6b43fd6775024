from __future__ import annotations
from enum import Enum


# 촬영 시점
class ViewEnum(str, Enum):
    front = "front"
    back = "back"
    left = "left"
    right = "right"


# 좌/우 팔
class SideEnum(str, Enum):
    left = "left"
    right = "right"


class SwingPhase(str, Enum):
    forward = "forward"
    backward = "backward"
    transition = "transition"
    unknown = "unknown"


class GripStatus(str, Enum):
    gripping = "gripping"
    open = "open"
    unknown = "unknown"


class AngleStatus(str, Enum):
    good = "good"
    warning = "warning"
    error = "error"


# 폴 접지점 복원 방식
class PoleStrategyEnum(str, Enum):
    ground_line = "ground_line"
    forearm_offset = "forearm_offset"


# 체간 기울기 기준 벡터
class TrunkLeanConvention(str, Enum):
    hip_relative = "hip_relative"            # 어깨→엉덩이 벡터 (직립 ≈ 0°)
    shoulder_relative = "shoulder_relative"  # 엉덩이→어깨 벡터 (직립 ≈ 180°)
