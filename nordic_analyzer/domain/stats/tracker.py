"""
누적 통계 Domain Logic
모든 메트릭(각도/보폭/폴 각도)이 공유하는 MetricSeries 갱신 규칙
"""
import math
from typing import Iterable, Optional, Tuple

import numpy as np

from nordic_analyzer.analyze.constants import HISTORY_CAP
from nordic_analyzer.schemas.metrics_dto import MetricSeries


def record(series: MetricSeries, value: Optional[float], cap: int = HISTORY_CAP) -> bool:
    """
    샘플 1개 반영. None/NaN/inf는 무시(no-op).

    - current/max/min 갱신 (max/min은 values가 밀려나도 유지)
    - values FIFO (cap 초과 시 가장 오래된 값 제거)
    - average = mean(values)

    Returns:
        반영 여부
    """
    if value is None:
        return False
    value = float(value)
    if not math.isfinite(value):
        return False

    series.current = value
    series.max = max(series.max, value)
    series.min = min(series.min, value)

    series.values.append(value)
    overflow = len(series.values) - cap
    if overflow > 0:
        del series.values[:overflow]

    series.average = float(np.mean(series.values))
    return True


def set_current(series: MetricSeries, value: Optional[float]) -> None:
    """표시용 current만 갱신 (집계에는 반영하지 않음)"""
    if value is None or not math.isfinite(value):
        return
    series.current = float(value)


def reset(series: MetricSeries) -> MetricSeries:
    """초기 상태로 되돌린다 {current:0, max:0, min:+inf, values:[], average:0}"""
    series.current = 0.0
    series.max = 0.0
    series.min = float("inf")
    series.values = []
    series.average = 0.0
    return series


def combined_extremes(series_list: Iterable[MetricSeries]) -> Optional[Tuple[float, float, float]]:
    """여러 시리즈의 values를 합친 (max, min, average). 샘플이 없으면 None"""
    merged = [v for s in series_list for v in s.values]
    if not merged:
        return None
    arr = np.asarray(merged, dtype=float)
    return float(arr.max()), float(arr.min()), float(arr.mean())
