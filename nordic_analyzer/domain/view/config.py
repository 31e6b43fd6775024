"""
촬영 시점(View) 설정 테이블 + 시점별 방향 규칙
- 시점마다 측정할 각도 목록(키/라벨/정상 범위)과 스켈레톤 연결선이 고정되어 있다.
- '앞/뒤' 판정 부호 규칙은 ViewGeometry 한 곳에서만 관리한다.
"""
from typing import Dict, List, NamedTuple, Optional, Tuple

from nordic_analyzer.analyze.constants import (
    L_SHOULDER, R_SHOULDER, L_ELBOW, R_ELBOW, L_WRIST, R_WRIST,
    L_HIP, R_HIP, L_KNEE, R_KNEE, L_ANKLE, R_ANKLE,
    PHASE_DEADBAND,
)
from nordic_analyzer.utils.enums.enums import SwingPhase, ViewEnum


class AngleSpec(NamedTuple):
    key: str
    label: str
    range: Tuple[float, float]


class ViewSpec(NamedTuple):
    label: str
    angles: List[AngleSpec]
    connections: List[Tuple[int, int]]


_FRONTAL_CONNECTIONS = [
    (L_SHOULDER, R_SHOULDER),
    (L_SHOULDER, L_ELBOW), (L_ELBOW, L_WRIST),
    (R_SHOULDER, R_ELBOW), (R_ELBOW, R_WRIST),
    (L_SHOULDER, L_HIP), (R_SHOULDER, R_HIP), (L_HIP, R_HIP),
    (L_HIP, L_KNEE), (R_HIP, R_KNEE),
    (L_KNEE, L_ANKLE), (R_KNEE, R_ANKLE),
]

# 측면에서는 어깨선이 겹쳐 보이므로 제외
_LATERAL_CONNECTIONS = [
    (L_SHOULDER, L_ELBOW), (L_ELBOW, L_WRIST),
    (R_SHOULDER, R_ELBOW), (R_ELBOW, R_WRIST),
    (L_SHOULDER, L_HIP), (R_SHOULDER, R_HIP), (L_HIP, R_HIP),
    (L_HIP, L_KNEE), (L_KNEE, L_ANKLE),
    (R_HIP, R_KNEE), (R_KNEE, R_ANKLE),
]

_LATERAL_ANGLES = [
    AngleSpec("frontSwingAngle", "전방 스윙 각도", (45.0, 75.0)),
    AngleSpec("backSwingAngle", "후방 스윙 각도", (45.0, 75.0)),
    AngleSpec("lateralTrunkLean", "측면 체간 기울기", (5.0, 15.0)),
]

VIEW_CONFIGS: Dict[ViewEnum, ViewSpec] = {
    ViewEnum.front: ViewSpec(
        label="정면",
        angles=[
            AngleSpec("armSwing", "팔 스윙 각도", (60.0, 90.0)),
            AngleSpec("shoulderRotation", "어깨 회전", (30.0, 45.0)),
            AngleSpec("trunkLean", "체간 기울기", (5.0, 15.0)),
        ],
        connections=_FRONTAL_CONNECTIONS,
    ),
    ViewEnum.back: ViewSpec(
        label="후면",
        angles=[
            AngleSpec("armSwing", "팔 스윙 각도", (60.0, 90.0)),
            AngleSpec("shoulderRotation", "어깨 회전", (30.0, 45.0)),
            AngleSpec("hipExtension", "고관절 신전", (25.0, 40.0)),
        ],
        connections=_FRONTAL_CONNECTIONS,
    ),
    ViewEnum.left: ViewSpec(label="좌측면", angles=_LATERAL_ANGLES, connections=_LATERAL_CONNECTIONS),
    ViewEnum.right: ViewSpec(label="우측면", angles=_LATERAL_ANGLES, connections=_LATERAL_CONNECTIONS),
}


def get_view_spec(view) -> ViewSpec:
    """시점 설정 조회 (문자열도 허용, 모르는 시점이면 ValueError)"""
    return VIEW_CONFIGS[ViewEnum(view)]


def active_angle_keys(view) -> List[str]:
    return [a.key for a in get_view_spec(view).angles]


def angle_range(view, key: str) -> Optional[Tuple[float, float]]:
    for spec in get_view_spec(view).angles:
        if spec.key == key:
            return spec.range
    return None


class ViewGeometry:
    """
    시점별 '앞쪽' 부호 규칙

    - left : 화면 x 감소 방향이 전방 (sign -1, x축)
    - right: 화면 x 증가 방향이 전방 (sign +1, x축)
    - front: z가 더 작을수록(카메라 쪽) 전방 (sign -1, z축)
    - back : front의 반대 (sign +1, z축)

    delta(대상 - 기준) * sign > 0 이면 전방.
    """

    _SIGNS = {
        ViewEnum.left: -1.0,
        ViewEnum.right: 1.0,
        ViewEnum.front: -1.0,
        ViewEnum.back: 1.0,
    }

    @staticmethod
    def is_lateral(view) -> bool:
        return ViewEnum(view) in (ViewEnum.left, ViewEnum.right)

    @classmethod
    def forward_sign(cls, view) -> float:
        return cls._SIGNS[ViewEnum(view)]

    @classmethod
    def axis(cls, view) -> str:
        """전후 판정에 쓰는 좌표축"""
        return "x" if cls.is_lateral(view) else "z"

    @classmethod
    def is_forward(cls, view, delta: float) -> bool:
        """deadband 없는 이진 판정 (delta == 0 은 후방)"""
        return delta * cls.forward_sign(view) > 0.0

    @classmethod
    def classify(cls, view, delta: float, deadband: float = PHASE_DEADBAND) -> SwingPhase:
        """deadband 안쪽이면 transition"""
        signed = delta * cls.forward_sign(view)
        if signed > deadband:
            return SwingPhase.forward
        if signed < -deadband:
            return SwingPhase.backward
        return SwingPhase.transition
