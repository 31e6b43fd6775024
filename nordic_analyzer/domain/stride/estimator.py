"""
보폭 추정 Domain Logic (측면 시점 전용)
"""
import logging
from typing import Optional

from nordic_analyzer.analyze.constants import L_ANKLE, R_ANKLE, STRIDE_MAX_CM, STRIDE_MIN_CM
from nordic_analyzer.domain.stats import tracker
from nordic_analyzer.domain.view.config import ViewGeometry
from nordic_analyzer.schemas.metrics_dto import MetricSeries
from nordic_analyzer.schemas.pose_dto import Frame

logger = logging.getLogger(__name__)


class StrideEstimator:
    """양 발목 x 간격 → cm"""

    def __init__(self, frame_width: int, pixels_per_cm: float):
        self.frame_width = frame_width
        self.pixels_per_cm = pixels_per_cm

    def measure(self, frame: Frame, view) -> Optional[float]:
        """이번 프레임 보폭(cm). 정면/후면이거나 발목이 안 보이면 None"""
        if not ViewGeometry.is_lateral(view):
            return None
        ankles = frame.get_all(L_ANKLE, R_ANKLE)
        if ankles is None:
            return None
        left, right = ankles
        px = abs(left.x - right.x) * self.frame_width
        return px / self.pixels_per_cm

    @staticmethod
    def is_plausible(stride_cm: float) -> bool:
        return STRIDE_MIN_CM < stride_cm < STRIDE_MAX_CM

    def update(self, series: MetricSeries, frame: Frame, view) -> Optional[float]:
        """
        current는 항상 최신 측정값.
        max/min/values/average는 (20, 150)cm 안쪽 값만 반영
        """
        stride_cm = self.measure(frame, view)
        if stride_cm is None:
            return None

        if self.is_plausible(stride_cm):
            tracker.record(series, stride_cm)
        else:
            tracker.set_current(series, stride_cm)
            logger.debug(f"[stride] implausible stride {stride_cm:.1f}cm, current only")
        return stride_cm
