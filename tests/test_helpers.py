"""
Test Helper Utilities

재사용 가능한 테스트 헬퍼 함수들을 모아놓은 모듈입니다.
"""
from typing import Dict, List, Optional, Tuple

import numpy as np
import pytest

from nordic_analyzer.schemas.pose_dto import Frame


# ========================================
# Pose Data Generators
# ========================================

def create_empty_frame(num_landmarks: int = 33) -> List[Dict[str, float]]:
    """
    빈 포즈 프레임 생성 (모든 랜드마크가 원점 + 가시성 0)

    필요한 랜드마크만 set_landmark로 보이게 만든다.
    """
    return [
        {"x": 0.0, "y": 0.0, "z": 0.0, "visibility": 0.0}
        for _ in range(num_landmarks)
    ]


def set_landmark(
    frame: List[Dict[str, float]],
    idx: int,
    x: float,
    y: float,
    z: float = 0.0,
    visibility: float = 1.0,
) -> List[Dict[str, float]]:
    frame[idx] = {"x": x, "y": y, "z": z, "visibility": visibility}
    return frame


def build_frame(
    points: Dict[int, Tuple[float, ...]],
    playback_time: Optional[float] = None,
    timestamp_ms: Optional[float] = None,
) -> Frame:
    """
    {인덱스: (x, y[, z])} → Frame (나머지는 안 보이는 랜드마크)

    Example:
        >>> frame = build_frame({11: (0, 0), 13: (0, 1), 15: (1, 1)})
    """
    raw = create_empty_frame()
    for idx, p in points.items():
        set_landmark(raw, idx, *p)
    return Frame.from_dicts(raw, playback_time=playback_time, timestamp_ms=timestamp_ms)


# ========================================
# Nordic Walking Pose Generators
# ========================================

# 정면 기준 서 있는 자세 (피험자 왼쪽이 화면 오른쪽)
_FRONTAL_BODY = {
    0: (0.50, 0.15),
    11: (0.60, 0.30), 12: (0.40, 0.30),
    13: (0.62, 0.42), 14: (0.38, 0.42),
    23: (0.56, 0.60), 24: (0.44, 0.60),
    25: (0.56, 0.78), 26: (0.44, 0.78),
    27: (0.56, 0.95), 28: (0.44, 0.95),
}

# 측면 자세 (몸통이 x=0.5 위에 세로로 정렬)
_LATERAL_BODY = {
    0: (0.50, 0.15),
    11: (0.50, 0.30), 12: (0.50, 0.30),
    13: (0.50, 0.42), 14: (0.50, 0.42),
    23: (0.50, 0.60), 24: (0.50, 0.60),
    25: (0.50, 0.78), 26: (0.50, 0.78),
    27: (0.40, 0.95), 28: (0.60, 0.95),
}

_SIDES = {
    "left": {"shoulder": 11, "wrist": 15, "pinky": 17, "index": 19, "thumb": 21},
    "right": {"shoulder": 12, "wrist": 16, "pinky": 18, "index": 20, "thumb": 22},
}

_FORWARD_SIGN = {"left": -1.0, "right": 1.0, "front": -1.0, "back": 1.0}


def _place_arm(raw, view: str, side: str, phase: str, grip: str) -> None:
    idx = _SIDES[side]
    shoulder = raw[idx["shoulder"]]
    sign = _FORWARD_SIGN[view]
    offset = {"forward": 0.15, "backward": -0.15, "transition": 0.01}[phase]

    if view in ("left", "right"):
        wx, wz = shoulder["x"] + sign * offset, 0.0
    else:
        wx, wz = shoulder["x"], sign * offset
    wy = 0.55

    set_landmark(raw, idx["wrist"], wx, wy, wz)
    # 손: 검지까지 0.1, 엄지-새끼 간격 0.03(쥐기) / 0.08(펼침) → openness 0.3 / 0.8
    set_landmark(raw, idx["index"], wx, wy + 0.1, wz)
    set_landmark(raw, idx["thumb"], wx - 0.015, wy + 0.05, wz)
    spread = {"gripping": 0.015, "open": 0.065}.get(grip)
    if spread is not None:
        set_landmark(raw, idx["pinky"], wx + spread, wy + 0.05, wz)


def create_nordic_frame(
    view: str = "front",
    left: Tuple[str, str] = ("forward", "gripping"),
    right: Tuple[str, str] = ("backward", "open"),
    playback_time: Optional[float] = None,
    timestamp_ms: Optional[float] = None,
) -> Frame:
    """
    노르딕 워킹 자세 프레임 생성

    Args:
        view: 촬영 시점
        left/right: (phase, grip) - phase: forward/backward/transition, grip: gripping/open/unknown

    Returns:
        Frame
    """
    raw = create_empty_frame()
    body = _LATERAL_BODY if view in ("left", "right") else _FRONTAL_BODY
    for i, p in body.items():
        set_landmark(raw, i, *p)

    _place_arm(raw, view, "left", *left)
    _place_arm(raw, view, "right", *right)
    return Frame.from_dicts(raw, playback_time=playback_time, timestamp_ms=timestamp_ms)


def create_walking_sequence(view: str, num_frames: int, fps: float = 30.0) -> List[Frame]:
    """팔을 번갈아 흔드는 프레임 시퀀스 (재생 시간은 프레임 구간 중앙)"""
    frames = []
    for i in range(num_frames):
        if i % 2 == 0:
            left, right = ("forward", "gripping"), ("backward", "open")
        else:
            left, right = ("backward", "open"), ("forward", "gripping")
        frames.append(create_nordic_frame(view, left, right, playback_time=(i + 0.5) / fps))
    return frames


# ========================================
# Assertion Helpers
# ========================================

def assert_angle_range(angle: float, min_angle: float, max_angle: float):
    """각도가 범위 안에 있는지 검증"""
    assert angle is not None, "angle is None"
    assert not np.isnan(angle), "angle is NaN"
    assert min_angle <= angle <= max_angle, f"{angle} not in [{min_angle}, {max_angle}]"


def assert_average_consistent(series):
    """average == mean(values)"""
    if series.values:
        assert series.average == pytest.approx(float(np.mean(series.values)))
    else:
        assert series.average == 0.0
