import pytest

from nordic_analyzer.domain.view.config import (
    VIEW_CONFIGS,
    ViewGeometry,
    active_angle_keys,
    angle_range,
    get_view_spec,
)
from nordic_analyzer.utils.enums.enums import SwingPhase, ViewEnum


class TestViewConfigTable:

    def test_every_view_has_three_angles(self):
        for view in ViewEnum:
            assert len(VIEW_CONFIGS[view].angles) == 3

    def test_front_and_back_keys(self):
        assert active_angle_keys("front") == ["armSwing", "shoulderRotation", "trunkLean"]
        assert active_angle_keys("back") == ["armSwing", "shoulderRotation", "hipExtension"]

    def test_lateral_views_share_angles(self):
        assert active_angle_keys("left") == active_angle_keys("right") == [
            "frontSwingAngle", "backSwingAngle", "lateralTrunkLean",
        ]

    def test_ranges(self):
        assert angle_range("front", "armSwing") == (60.0, 90.0)
        assert angle_range("back", "hipExtension") == (25.0, 40.0)
        assert angle_range("left", "frontSwingAngle") == (45.0, 75.0)
        assert angle_range("front", "hipExtension") is None

    def test_connections(self):
        assert len(get_view_spec("front").connections) == 12
        assert (11, 12) in get_view_spec("back").connections
        assert len(get_view_spec("left").connections) == 11
        assert (11, 12) not in get_view_spec("right").connections

    def test_unknown_view_rejected(self):
        with pytest.raises(ValueError):
            get_view_spec("top")


class TestViewGeometry:

    @pytest.mark.parametrize("view, expected", [
        ("left", -1.0), ("right", 1.0), ("front", -1.0), ("back", 1.0),
    ])
    def test_forward_sign(self, view, expected):
        assert ViewGeometry.forward_sign(view) == expected

    def test_lateral(self):
        assert ViewGeometry.is_lateral("left")
        assert ViewGeometry.is_lateral(ViewEnum.right)
        assert not ViewGeometry.is_lateral("front")
        assert ViewGeometry.axis("back") == "z"

    def test_classify_flips_between_lateral_views(self):
        # 손목이 기준보다 화면 왼쪽
        assert ViewGeometry.classify("left", -0.1) == SwingPhase.forward
        assert ViewGeometry.classify("right", -0.1) == SwingPhase.backward

    def test_classify_flips_between_front_and_back(self):
        # 손이 어깨보다 카메라 쪽 (z 작음)
        assert ViewGeometry.classify("front", -0.2) == SwingPhase.forward
        assert ViewGeometry.classify("back", -0.2) == SwingPhase.backward

    def test_deadband_is_transition(self):
        assert ViewGeometry.classify("left", 0.05) == SwingPhase.transition
        assert ViewGeometry.classify("left", -0.049) == SwingPhase.transition
        assert ViewGeometry.classify("left", 0.0) == SwingPhase.transition

    def test_is_forward_zero_delta_is_backward(self):
        assert ViewGeometry.is_forward("right", 0.0) is False
