"""
왜 분리했나?
- 수학/기하(각도 계산) 로직을 추정기(domain)에서 분리하면 테스트/재사용이 쉬움.
- 팔꿈치/엉덩이/체간/폴 각도 모두 같은 몇 개의 기본 함수 위에서 계산된다.

좌표계: 정규화 화면 좌표 (x 오른쪽 증가, y 아래쪽 증가).
계산 불가(랜드마크 부재, 길이 0 벡터)는 예외 대신 None.
"""
from typing import Optional, Sequence, Tuple
import math

import numpy as np

from nordic_analyzer.analyze.constants import STATUS_TOLERANCE_RATIO
from nordic_analyzer.utils.enums.enums import AngleStatus


def angle_3points(a, b, c) -> Optional[float]:
    """
    꼭짓점 b에서의 끼인각 ∠ABC (도, 0~180).
    atan2 차분 방식: |atan2(c-b) - atan2(a-b)|, 180 초과 시 360에서 뺀다.
    """
    if a is None or b is None or c is None:
        return None
    ax, ay = a.x - b.x, a.y - b.y
    cx, cy = c.x - b.x, c.y - b.y
    if (ax == 0.0 and ay == 0.0) or (cx == 0.0 and cy == 0.0):
        return None

    radians = math.atan2(cy, cx) - math.atan2(ay, ax)
    angle = abs(math.degrees(radians))
    if angle > 180.0:
        angle = 360.0 - angle
    return angle


def angle_from_vertical(dx: float, dy: float) -> Optional[float]:
    """
    벡터 (dx, dy)와 수직(아래 방향) 사이 각도, 부호 없음.
    atan2(|dx|, dy): 똑바로 아래 = 0°, 수평 = 90°, 위쪽 = 90° 초과
    """
    if dx == 0.0 and dy == 0.0:
        return None
    return math.degrees(math.atan2(abs(dx), dy))


def vector_angle_from_vertical(origin, target) -> Optional[float]:
    """origin → target 벡터의 수직 기준 각도"""
    if origin is None or target is None:
        return None
    return angle_from_vertical(target.x - origin.x, target.y - origin.y)


def line_angle_from_horizontal(p1, p2) -> Optional[float]:
    """
    두 점을 잇는 직선의 수평 기준 각도 (0~90, 부호 없음).
    직선에는 방향이 없으므로 90° 초과분은 접는다.
    """
    if p1 is None or p2 is None:
        return None
    dx, dy = p2.x - p1.x, p2.y - p1.y
    if dx == 0.0 and dy == 0.0:
        return None
    angle = abs(math.degrees(math.atan2(dy, dx)))
    if angle > 90.0:
        angle = 180.0 - angle
    return angle


def trunk_lean_raw(shoulder, hip) -> Optional[float]:
    """
    어깨 기준 엉덩이 벡터의 수직 기준 각도: |atan2(dx, dy)|.
    직립이면 0° 근처.
    """
    if shoulder is None or hip is None:
        return None
    dx, dy = hip.x - shoulder.x, hip.y - shoulder.y
    if dx == 0.0 and dy == 0.0:
        return None
    return abs(math.degrees(math.atan2(dx, dy)))


def distance_2d(a, b) -> Optional[float]:
    """화면 평면상의 거리 (z 무시)"""
    if a is None or b is None:
        return None
    return float(np.hypot(a.x - b.x, a.y - b.y))


def safe_ratio(num: Optional[float], den: Optional[float]) -> Optional[float]:
    """분모가 0/None이면 None"""
    if num is None or den is None or den == 0.0:
        return None
    return num / den


def blend_point(p, q, weight_q: float) -> Tuple[float, float, float]:
    """p*(1-w) + q*w (x, y, z)"""
    w = _clamp(weight_q, 0.0, 1.0)
    return (
        p.x * (1.0 - w) + q.x * w,
        p.y * (1.0 - w) + q.y * w,
        p.z * (1.0 - w) + q.z * w,
    )


def angle_status(value: Optional[float], value_range: Sequence[float]) -> Optional[AngleStatus]:
    """
    정상 범위 판정.
    - 범위 안: good
    - 범위 폭의 20% 이내로 벗어남: warning
    - 그 외: error
    """
    if value is None or not math.isfinite(value):
        return None
    if not value_range or len(value_range) != 2:
        return AngleStatus.good
    lo, hi = float(value_range[0]), float(value_range[1])
    tolerance = (hi - lo) * STATUS_TOLERANCE_RATIO

    if lo <= value <= hi:
        return AngleStatus.good
    if lo - tolerance <= value <= hi + tolerance:
        return AngleStatus.warning
    return AngleStatus.error


def _clamp(v: float, lo: float, hi: float) -> float:
    """간단 클램프"""
    if not math.isfinite(v):
        return v
    return max(lo, min(hi, v))
