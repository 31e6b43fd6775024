"""
각도 계산 Domain Logic
랜드마크 프레임 + 시점 → 7개 각도 키 맵 (해당 시점과 무관한 키는 None)
"""
from typing import Dict, Optional

from nordic_analyzer.analyze.angle import (
    angle_3points,
    line_angle_from_horizontal,
    trunk_lean_raw,
    vector_angle_from_vertical,
)
from nordic_analyzer.analyze.constants import (
    ANGLE_KEYS,
    ARM_LANDMARKS,
    LEFT_ARM,
    LEFT_HIP_EXT,
    L_HIP,
    L_SHOULDER,
    R_SHOULDER,
)
from nordic_analyzer.domain.view.config import ViewGeometry
from nordic_analyzer.schemas.pose_dto import Frame
from nordic_analyzer.utils.enums.enums import TrunkLeanConvention, ViewEnum


class TrunkLeanStrategy:
    """체간 기울기 규약 인터페이스"""
    name: TrunkLeanConvention

    def compute(self, shoulder, hip) -> Optional[float]:
        raise NotImplementedError


class HipRelativeTrunkLean(TrunkLeanStrategy):
    """어깨 기준 엉덩이 벡터 (직립 ≈ 0°)"""
    name = TrunkLeanConvention.hip_relative

    def compute(self, shoulder, hip) -> Optional[float]:
        return trunk_lean_raw(shoulder, hip)


class ShoulderRelativeTrunkLean(TrunkLeanStrategy):
    """엉덩이 기준 어깨 벡터 (직립 ≈ 180°)"""
    name = TrunkLeanConvention.shoulder_relative

    def compute(self, shoulder, hip) -> Optional[float]:
        raw = trunk_lean_raw(shoulder, hip)
        return None if raw is None else 180.0 - raw


TRUNK_LEAN_STRATEGIES = {
    TrunkLeanConvention.hip_relative: HipRelativeTrunkLean(),
    TrunkLeanConvention.shoulder_relative: ShoulderRelativeTrunkLean(),
}


def get_trunk_lean_strategy(convention) -> TrunkLeanStrategy:
    return TRUNK_LEAN_STRATEGIES[TrunkLeanConvention(convention)]


class AngleCalculator:
    """시점별 관절 각도 계산기"""

    def __init__(self, trunk_lean: TrunkLeanConvention = TrunkLeanConvention.hip_relative):
        self.trunk_lean = get_trunk_lean_strategy(trunk_lean)

    def calculate(self, frame: Frame, view: ViewEnum) -> Dict[str, Optional[float]]:
        """
        프레임 1개의 각도 계산

        Args:
            frame: 랜드마크 프레임
            view: 현재 촬영 시점

        Returns:
            ANGLE_KEYS 전체를 키로 갖는 dict (계산 불가/무관 키는 None)
        """
        angles: Dict[str, Optional[float]] = {key: None for key in ANGLE_KEYS}
        view = ViewEnum(view)

        if ViewGeometry.is_lateral(view):
            angles.update(self._lateral(frame, view))
        else:
            angles.update(self._frontal(frame, view))
        return angles

    def _frontal(self, frame: Frame, view: ViewEnum) -> Dict[str, Optional[float]]:
        out = {
            "armSwing": angle_3points(*(frame.get(i) for i in LEFT_ARM)),
            "shoulderRotation": line_angle_from_horizontal(frame.get(L_SHOULDER), frame.get(R_SHOULDER)),
        }
        out["trunkLean"] = self.trunk_lean.compute(frame.get(L_SHOULDER), frame.get(L_HIP))
        if view == ViewEnum.back:
            out["hipExtension"] = angle_3points(*(frame.get(i) for i in LEFT_HIP_EXT))
        return out

    def _lateral(self, frame: Frame, view: ViewEnum) -> Dict[str, Optional[float]]:
        # 카메라 쪽 팔/몸통 사용 (좌측면 → 왼쪽 랜드마크)
        side = ARM_LANDMARKS[view.value]
        shoulder = frame.get(side["shoulder"])
        wrist = frame.get(side["wrist"])
        hip = frame.get(side["hip"])

        out: Dict[str, Optional[float]] = {
            "lateralTrunkLean": vector_angle_from_vertical(shoulder, hip),
        }

        swing = vector_angle_from_vertical(shoulder, wrist)
        if swing is not None:
            if ViewGeometry.is_forward(view, wrist.x - shoulder.x):
                out["frontSwingAngle"] = swing
            else:
                out["backSwingAngle"] = swing
        return out
