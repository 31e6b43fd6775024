from __future__ import annotations
from datetime import datetime
from typing import Iterable, List, Optional

from nordic_analyzer.analyze.angle import angle_status
from nordic_analyzer.analyze.constants import POLE_RECOMMENDED_RANGE
from nordic_analyzer.config.settings import settings
from nordic_analyzer.domain.stats.tracker import combined_extremes
from nordic_analyzer.domain.view.config import ViewGeometry, get_view_spec
from nordic_analyzer.schemas.metrics_dto import MetricSeries
from nordic_analyzer.schemas.session_dto import PipelineConfig, SessionState
from nordic_analyzer.utils.enums.enums import AngleStatus

_RULE = "================================"
_SUB_RULE = "--------------------------------"

_STATUS_MARKS = {
    AngleStatus.good: "✓",
    AngleStatus.warning: "⚠",
    AngleStatus.error: "✗",
}


def _fmt_range(r) -> str:
    return f"{r[0]:g}-{r[1]:g}"


def _series_lines(series: MetricSeries, unit: str, with_current: bool = True) -> List[str]:
    lines = []
    if with_current:
        lines.append(f"  현재: {series.current:.1f}{unit}")
    lines.append(f"  최대: {series.max:.1f}{unit}")
    lines.append(f"  최소: {series.min:.1f}{unit}")
    lines.append(f"  평균: {series.average:.1f}{unit}")
    return lines


def build_statistics_report(
    state: SessionState,
    config: PipelineConfig,
    *,
    generated_at: Optional[datetime] = None,
    sections: Optional[Iterable[str]] = None,
) -> str:
    """
    누적 통계 텍스트 리포트:
      - 시점별 각도 (샘플이 있는 각도만) + 권장 범위
      - 폴 접지 각도 (좌/우 합산) / 폴 접지 위치, 보폭 (측면만)
      - CoM 위치(%) / 그립 일관성 + 협응
      - 데이터 포인트 수
    """
    spec = get_view_spec(config.view)
    wanted = set(sections if sections is not None else settings.REPORT_SECTIONS)
    generated_at = generated_at or datetime.now()
    lateral = ViewGeometry.is_lateral(config.view)

    lines: List[str] = [
        "Nordic Walking 통계 데이터",
        _RULE,
        "",
        f"시점: {spec.label}",
        f"생성 시각: {generated_at:%Y-%m-%d %H:%M:%S}",
        "",
    ]

    if "angles" in wanted:
        lines += ["각도 통계 (도):", _SUB_RULE]
        for angle in spec.angles:
            series = state.angle_stats[angle.key]
            if not series.values:
                continue
            lines.append(f"{angle.label}:")
            lines += _series_lines(series, "°")
            lines += [f"  권장 범위: {_fmt_range(angle.range)}°", ""]

    if "pole" in wanted:
        combined = combined_extremes(
            [state.pole_stats["left_touch_angle"], state.pole_stats["right_touch_angle"]]
        )
        if combined is not None:
            hi, lo, avg = combined
            lines += [
                "폴 접지 각도 통계 (도):",
                _SUB_RULE,
                f"  최대: {hi:.1f}°",
                f"  최소: {lo:.1f}°",
                f"  평균: {avg:.1f}°",
                f"  권장 범위: {_fmt_range(POLE_RECOMMENDED_RANGE)}°",
                "",
            ]
        position = state.pole_stats["pole_stride_position"]
        if lateral and position.values:
            lines += ["폴 접지 위치 통계 (앞발 기준, cm):", _SUB_RULE]
            lines += _series_lines(position, " cm") + [""]

    if "stride" in wanted and lateral and state.stride_stats.values:
        lines += ["보폭 통계 (cm):", _SUB_RULE]
        lines += _series_lines(state.stride_stats, " cm") + [""]

    if "com" in wanted and state.com is not None:
        lines += [
            "신체 질량중심 위치:",
            _SUB_RULE,
            f"  X: {state.com.x * 100:.1f}%",
            f"  Y: {state.com.y * 100:.1f}%",
            "",
        ]

    if "grip" in wanted:
        lines += ["그립 일관성:", _SUB_RULE]
        for side, label in (("left", "왼팔"), ("right", "오른팔")):
            g = state.grip[side]
            lines.append(
                f"  {label}: 전방 쥐기 {g.forward_swing.consistency_pct:.1f}% "
                f"({g.forward_swing.gripping_count}/{g.forward_swing.total_count}), "
                f"후방 놓기 {g.backward_swing.consistency_pct:.1f}% "
                f"({g.backward_swing.open_count}/{g.backward_swing.total_count})"
            )
        c = state.coordination
        lines += [
            f"  양팔 협응: {c.percentage:.1f}% ({c.synchronized_count}/{c.total_count})",
            "",
        ]

    first_key = spec.angles[0].key if spec.angles else None
    data_points = len(state.angle_stats[first_key].values) if first_key else 0
    lines += [_RULE, f"데이터 포인트 수: {data_points}"]
    return "\n".join(lines) + "\n"


def build_angle_report(
    state: SessionState,
    config: PipelineConfig,
    *,
    generated_at: Optional[datetime] = None,
) -> str:
    """마지막 처리 프레임의 각도 + 판정 기호(✓ ⚠ ✗) + 권장 범위"""
    spec = get_view_spec(config.view)
    generated_at = generated_at or datetime.now()

    lines: List[str] = [
        "Nordic Walking 동작 분석 리포트",
        _RULE,
        "",
        f"시점: {spec.label}",
        f"분석 시각: {generated_at:%Y-%m-%d %H:%M:%S}",
        "",
        "각도 데이터:",
        _SUB_RULE,
    ]

    for angle in spec.angles:
        value = state.last_angles.get(angle.key)
        if value is None:
            lines.append(f"{angle.label}: N/A")
            continue
        mark = _STATUS_MARKS[angle_status(value, angle.range)]
        lines.append(f"{angle.label}: {value:.1f}° {mark}")
        lines.append(f"  권장 범위: {_fmt_range(angle.range)}°")

    lines += ["", _RULE, "리포트 끝"]
    return "\n".join(lines) + "\n"
