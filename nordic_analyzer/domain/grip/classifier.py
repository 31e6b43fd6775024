"""
그립/스윙 페이즈 분류 Domain Logic

팔마다 매 프레임:
  1) 손 펼침 정도(openness) → gripping / open
  2) 스윙 페이즈 → forward / backward / transition / unknown
  3) 페이즈별 그립 일관성 누적
양팔이 모두 확정 페이즈일 때만 협응(coordination) 누적
"""
from typing import Dict, Optional

from nordic_analyzer.analyze.angle import distance_2d, safe_ratio
from nordic_analyzer.analyze.constants import (
    ARM_LANDMARKS,
    FALLBACK_BACKWARD_MAX,
    FALLBACK_FORWARD_MIN,
    GRIP_THRESHOLD,
    PHASE_DEADBAND,
)
from nordic_analyzer.domain.view.config import ViewGeometry
from nordic_analyzer.schemas.metrics_dto import CoordinationState, GripState
from nordic_analyzer.schemas.pose_dto import Frame
from nordic_analyzer.utils.enums.enums import GripStatus, SideEnum, SwingPhase, ViewEnum

DEFINITE_PHASES = (SwingPhase.forward, SwingPhase.backward)


def _pct(part: int, total: int) -> float:
    return part / total * 100.0 if total else 0.0


class GripPhaseClassifier:
    """팔 2개의 독립 상태 머신 + 협응 점수"""

    def __init__(self, grip_threshold: float = GRIP_THRESHOLD, deadband: float = PHASE_DEADBAND):
        self.grip_threshold = grip_threshold
        self.deadband = deadband

    # ── 1) 손 ─────────────────────────────────────────────
    @staticmethod
    def hand_openness(frame: Frame, side: SideEnum) -> Optional[float]:
        """dist(엄지, 새끼) / dist(손목, 검지). 계산 불가면 None"""
        idx = ARM_LANDMARKS[SideEnum(side).value]
        points = frame.get_all(idx["thumb"], idx["pinky"], idx["wrist"], idx["index"])
        if points is None:
            return None
        thumb, pinky, wrist, index = points
        return safe_ratio(distance_2d(thumb, pinky), distance_2d(wrist, index))

    def grip_status(self, openness: Optional[float]) -> GripStatus:
        if openness is None:
            return GripStatus.unknown
        return GripStatus.gripping if openness < self.grip_threshold else GripStatus.open

    # ── 2) 페이즈 ─────────────────────────────────────────
    def swing_phase(self, frame: Frame, side: SideEnum, view: ViewEnum) -> SwingPhase:
        idx = ARM_LANDMARKS[SideEnum(side).value]
        wrist = frame.get(idx["wrist"])
        shoulder = frame.get(idx["shoulder"])
        if wrist is None or shoulder is None:
            return SwingPhase.unknown

        if ViewGeometry.is_lateral(view):
            hip = frame.get(idx["hip"])
            if hip is None:
                return self._vertical_fallback(wrist, shoulder)
            body_x = (shoulder.x + hip.x) / 2.0
            return ViewGeometry.classify(view, wrist.x - body_x, self.deadband)

        # 깊이 정보가 없는 입력 (z 둘 다 정확히 0)
        if wrist.z == 0.0 and shoulder.z == 0.0:
            return self._vertical_fallback(wrist, shoulder)
        return ViewGeometry.classify(view, wrist.z - shoulder.z, self.deadband)

    @staticmethod
    def _vertical_fallback(wrist, shoulder) -> SwingPhase:
        """손목 높이로 대체 판정 (손이 어깨에 가까이 올라오면 전방)"""
        lift = shoulder.y - wrist.y
        if lift > FALLBACK_FORWARD_MIN:
            return SwingPhase.forward
        if lift < FALLBACK_BACKWARD_MAX:
            return SwingPhase.backward
        return SwingPhase.transition

    # ── 3) 누적 ───────────────────────────────────────────
    def update_arm(self, state: GripState, frame: Frame, side: SideEnum, view: ViewEnum) -> GripState:
        openness = self.hand_openness(frame, side)
        grip = self.grip_status(openness)
        phase = self.swing_phase(frame, side, view)

        state.hand_openness = openness
        state.current_grip = grip
        state.current_phase = phase

        if phase == SwingPhase.forward:
            fwd = state.forward_swing
            fwd.total_count += 1
            if grip == GripStatus.gripping:
                fwd.gripping_count += 1
            fwd.consistency_pct = _pct(fwd.gripping_count, fwd.total_count)
        elif phase == SwingPhase.backward:
            bwd = state.backward_swing
            bwd.total_count += 1
            if grip == GripStatus.open:
                bwd.open_count += 1
            bwd.consistency_pct = _pct(bwd.open_count, bwd.total_count)
        return state

    @staticmethod
    def is_synchronized(left: GripState, right: GripState) -> bool:
        """반대 페이즈 + 전방 팔 쥐기 + 후방 팔 놓기"""
        if left.current_phase == right.current_phase:
            return False
        forward_arm, backward_arm = (left, right) if left.current_phase == SwingPhase.forward else (right, left)
        return (
            forward_arm.current_grip == GripStatus.gripping
            and backward_arm.current_grip == GripStatus.open
        )

    def update_coordination(self, coordination: CoordinationState, left: GripState, right: GripState) -> bool:
        """양팔 모두 확정 페이즈인 프레임만 집계. 집계했으면 True"""
        if left.current_phase not in DEFINITE_PHASES or right.current_phase not in DEFINITE_PHASES:
            return False
        coordination.total_count += 1
        if self.is_synchronized(left, right):
            coordination.synchronized_count += 1
        coordination.percentage = _pct(coordination.synchronized_count, coordination.total_count)
        return True

    def update(
        self,
        grip: Dict[str, GripState],
        coordination: CoordinationState,
        frame: Frame,
        view: ViewEnum,
    ) -> Dict[str, GripState]:
        """양팔 갱신 후 협응 반영 (인자로 받은 상태를 그대로 갱신)"""
        for side in (SideEnum.left, SideEnum.right):
            self.update_arm(grip[side.value], frame, side, view)
        self.update_coordination(coordination, grip["left"], grip["right"])
        return grip
