"""
폴(스틱) 기하 복원 Domain Logic

손(그립점) → 지면 접지점 직선을 복원하고 수직 기준 각도를 계산한다.
복원 방식은 두 가지 전략으로 분리되어 있으며 세션별로 하나만 선택한다 (평균 내지 않음).

- ground_line   : 지면선 + 고정 오프셋 (기본)
- forearm_offset: 전완 각도 + 보정각 (+18 / -12) 투영 (비교용)
"""
import logging
import math
from typing import Dict, Optional, Tuple

from nordic_analyzer.analyze.angle import angle_from_vertical, blend_point
from nordic_analyzer.analyze.constants import (
    ARM_LANDMARKS,
    L_ANKLE,
    L_HIP,
    L_SHOULDER,
    POLE_FOREARM_OFFSET_BACKWARD,
    POLE_FOREARM_OFFSET_FORWARD,
    POLE_OFFSET_BACKWARD,
    POLE_OFFSET_FORWARD,
    R_ANKLE,
    R_HIP,
    R_SHOULDER,
)
from nordic_analyzer.domain.stats import tracker
from nordic_analyzer.domain.view.config import ViewGeometry
from nordic_analyzer.schemas.metrics_dto import MetricSeries, PoleGeometry
from nordic_analyzer.schemas.pose_dto import Frame
from nordic_analyzer.utils.enums.enums import PoleStrategyEnum, SideEnum, ViewEnum

logger = logging.getLogger(__name__)


class PoleStrategy:
    """폴 복원 전략 공통 인터페이스 + 공용 계산"""
    name: PoleStrategyEnum

    def __init__(self, frame_width: int, frame_height: int, grip_blend: float):
        self.frame_width = frame_width
        self.frame_height = frame_height
        self.grip_blend = grip_blend

    def reconstruct(self, frame: Frame, side: SideEnum, view: ViewEnum) -> Optional[PoleGeometry]:
        raise NotImplementedError

    # ── 공용 ──────────────────────────────────────────────
    def grip_point(self, frame: Frame, side: SideEnum) -> Optional[Tuple[float, float, float]]:
        """손목 70% + 엄지 30% (엄지가 안 보이면 손목)"""
        idx = ARM_LANDMARKS[SideEnum(side).value]
        wrist = frame.get(idx["wrist"])
        if wrist is None:
            return None
        thumb = frame.get(idx["thumb"])
        if thumb is None or self.grip_blend <= 0.0:
            return wrist.x, wrist.y, wrist.z
        return blend_point(wrist, thumb, self.grip_blend)

    @staticmethod
    def ground_y(frame: Frame) -> float:
        """양 발목 중 낮은 쪽 y. 발목이 하나라도 안 보이면 화면 하단(1.0)"""
        ankles = frame.get_all(L_ANKLE, R_ANKLE)
        if ankles is None:
            return 1.0
        return max(a.y for a in ankles)

    @staticmethod
    def arm_forward(grip: Tuple[float, float, float], shoulder, view: ViewEnum) -> bool:
        """측면: x 기준 / 정면·후면: z 기준"""
        axis = ViewGeometry.axis(view)
        coord = grip[0] if axis == "x" else grip[2]
        return ViewGeometry.is_forward(view, coord - getattr(shoulder, axis))

    def angle_px(self, grip_x: float, grip_y: float, contact_x: float, contact_y: float) -> Optional[float]:
        """픽셀 공간에서 그립 → 접지점 직선의 수직 기준 각도"""
        dx = (contact_x - grip_x) * self.frame_width
        dy = (contact_y - grip_y) * self.frame_height
        if dy <= 0.0:
            return None
        return angle_from_vertical(dx, dy)


class GroundLineStrategy(PoleStrategy):
    """지면선 + 프레임 폭 대비 고정 오프셋"""
    name = PoleStrategyEnum.ground_line

    def reconstruct(self, frame: Frame, side: SideEnum, view: ViewEnum) -> Optional[PoleGeometry]:
        side = SideEnum(side)
        view = ViewEnum(view)
        shoulder = frame.get(ARM_LANDMARKS[side.value]["shoulder"])
        grip = self.grip_point(frame, side)
        if shoulder is None or grip is None:
            return None

        gy = self.ground_y(frame)
        if gy <= grip[1]:
            return None

        forward = self.arm_forward(grip, shoulder, view)
        offset = POLE_OFFSET_FORWARD if forward else POLE_OFFSET_BACKWARD

        if ViewGeometry.is_lateral(view):
            contact_x = self._lateral_contact(frame, view, grip[0], offset)
        else:
            contact_x = grip[0] + offset * self._outward_sign(frame, side, view)

        angle = self.angle_px(grip[0], grip[1], contact_x, gy)
        if angle is None:
            return None
        return PoleGeometry(
            side=side,
            strategy=self.name,
            grip_x=grip[0],
            grip_y=grip[1],
            contact_x=contact_x,
            contact_y=gy,
            angle=angle,
            arm_forward=forward,
        )

    @staticmethod
    def _lateral_contact(frame: Frame, view: ViewEnum, grip_x: float, offset: float) -> float:
        # 진행 방향 반대쪽으로 오프셋, 골반 중앙보다 앞에 찍히지 않게 클램프
        sign = ViewGeometry.forward_sign(view)
        contact_x = grip_x - sign * offset
        hips = frame.get_all(L_HIP, R_HIP)
        if hips is not None:
            hip_mid_x = (hips[0].x + hips[1].x) / 2.0
            if (contact_x - hip_mid_x) * sign > 0.0:
                contact_x = hip_mid_x
        return contact_x

    @staticmethod
    def _outward_sign(frame: Frame, side: SideEnum, view: ViewEnum) -> float:
        """정면/후면에서 해당 팔의 바깥쪽 x 방향"""
        shoulders = frame.get_all(L_SHOULDER, R_SHOULDER)
        if shoulders is not None and shoulders[0].x != shoulders[1].x:
            left_out = 1.0 if shoulders[0].x > shoulders[1].x else -1.0
        else:
            # 정면이면 피험자 왼쪽이 화면 오른쪽
            left_out = 1.0 if view == ViewEnum.front else -1.0
        return left_out if side == SideEnum.left else -left_out


class ForearmOffsetStrategy(PoleStrategy):
    """전완 각도 + 보정각으로 지면까지 투영"""
    name = PoleStrategyEnum.forearm_offset

    def reconstruct(self, frame: Frame, side: SideEnum, view: ViewEnum) -> Optional[PoleGeometry]:
        side = SideEnum(side)
        view = ViewEnum(view)
        idx = ARM_LANDMARKS[side.value]
        shoulder = frame.get(idx["shoulder"])
        elbow = frame.get(idx["elbow"])
        wrist = frame.get(idx["wrist"])
        grip = self.grip_point(frame, side)
        if shoulder is None or elbow is None or wrist is None or grip is None:
            return None

        fx, fy = wrist.x - elbow.x, wrist.y - elbow.y
        if fx == 0.0 and fy == 0.0:
            return None
        forearm = math.degrees(math.atan2(fx, abs(fy)))
        pole_angle = forearm + (POLE_FOREARM_OFFSET_FORWARD if forearm > 0 else POLE_FOREARM_OFFSET_BACKWARD)

        gy = self.ground_y(frame)
        length_px = (gy - grip[1]) * self.frame_height
        if length_px <= 0.0:
            return None

        forward = self.arm_forward(grip, shoulder, view)
        direction = ViewGeometry.forward_sign(view) if ViewGeometry.is_lateral(view) else (1.0 if forward else -1.0)
        horizontal_px = length_px * math.tan(math.radians(pole_angle)) * direction
        contact_x = grip[0] + horizontal_px / self.frame_width

        angle = self.angle_px(grip[0], grip[1], contact_x, gy)
        if angle is None:
            return None
        return PoleGeometry(
            side=side,
            strategy=self.name,
            grip_x=grip[0],
            grip_y=grip[1],
            contact_x=contact_x,
            contact_y=gy,
            angle=angle,
            arm_forward=forward,
        )


_STRATEGIES = {
    PoleStrategyEnum.ground_line: GroundLineStrategy,
    PoleStrategyEnum.forearm_offset: ForearmOffsetStrategy,
}


def get_pole_strategy(name, frame_width: int, frame_height: int, grip_blend: float) -> PoleStrategy:
    return _STRATEGIES[PoleStrategyEnum(name)](frame_width, frame_height, grip_blend)


class PoleEstimator:
    """양쪽 폴 복원 + 통계 반영"""

    def __init__(self, strategy: PoleStrategy, pixels_per_cm: float):
        self.strategy = strategy
        self.pixels_per_cm = pixels_per_cm

    def stride_position_cm(self, frame: Frame, view: ViewEnum, contact_x: float) -> Optional[float]:
        """
        측면 시점에서 폴 접지점과 앞발 사이 거리(cm).
        좌측면은 x가 작은 발, 우측면은 x가 큰 발이 앞발
        """
        if not ViewGeometry.is_lateral(view):
            return None
        ankles = frame.get_all(L_ANKLE, R_ANKLE)
        if ankles is None:
            return None
        xs = [a.x for a in ankles]
        forward_foot_x = min(xs) if ViewEnum(view) == ViewEnum.left else max(xs)
        distance_px = abs(contact_x - forward_foot_x) * self.strategy.frame_width
        return distance_px / self.pixels_per_cm

    def update(
        self, stats: Dict[str, MetricSeries], frame: Frame, view: ViewEnum
    ) -> Dict[str, Optional[PoleGeometry]]:
        """
        양팔 폴 복원 후 {left,right}_touch_angle / pole_stride_position 갱신

        Returns:
            {"left": PoleGeometry|None, "right": PoleGeometry|None}
        """
        poles: Dict[str, Optional[PoleGeometry]] = {}
        for side in (SideEnum.left, SideEnum.right):
            geometry = self.strategy.reconstruct(frame, side, view)
            poles[side.value] = geometry
            if geometry is None:
                logger.debug(f"[pole] {side.value} pole skipped (view={ViewEnum(view).value})")
                continue
            tracker.record(stats[f"{side.value}_touch_angle"], geometry.angle)
            tracker.record(
                stats["pole_stride_position"],
                self.stride_position_cm(frame, view, geometry.contact_x),
            )
        return poles
