"""
질량중심(CoM) 추정 Domain Logic
가중 랜드마크 평균 + 500ms 이동 궤적
"""
from typing import List, Optional, Tuple

import numpy as np

from nordic_analyzer.analyze.constants import COM_TRAIL_WINDOW_MS, COM_WEIGHTS
from nordic_analyzer.schemas.metrics_dto import CenterOfMassSample
from nordic_analyzer.schemas.pose_dto import Frame


class CenterOfMassEstimator:
    """세그먼트 가중치 기반 CoM 추정기"""

    def __init__(self, weights=None, window_ms: float = COM_TRAIL_WINDOW_MS):
        self.weights = dict(weights or COM_WEIGHTS)
        self.window_ms = window_ms

    def estimate(self, frame: Frame, timestamp: float) -> Optional[CenterOfMassSample]:
        """
        보이는 랜드마크만으로 가중 평균 (가중치 재정규화).
        가중 랜드마크가 하나도 안 보이면 None
        """
        points, weights = [], []
        for idx, w in self.weights.items():
            lm = frame.get(idx)
            if lm is None:
                continue
            points.append((lm.x, lm.y, lm.z))
            weights.append(w)

        if not weights:
            return None

        pts = np.asarray(points, dtype=float)
        ws = np.asarray(weights, dtype=float)
        x, y, z = (pts * ws[:, None]).sum(axis=0) / ws.sum()
        return CenterOfMassSample(x=float(x), y=float(y), z=float(z), timestamp=float(timestamp))

    def update(
        self,
        previous: Optional[CenterOfMassSample],
        trail: List[CenterOfMassSample],
        frame: Frame,
        timestamp: float,
    ) -> Tuple[Optional[CenterOfMassSample], List[CenterOfMassSample]]:
        """
        새 CoM/궤적 반환. 추정 불가면 이전 값과 궤적을 그대로 유지.
        궤적은 새 샘플과의 시간 차가 window 이상인 샘플을 매번 잘라낸다
        (뒤로 탐색한 경우 "미래" 샘플도 제거).
        """
        sample = self.estimate(frame, timestamp)
        if sample is None:
            return previous, list(trail)

        new_trail = list(trail) + [sample]
        new_trail = [s for s in new_trail if abs(s.timestamp - sample.timestamp) < self.window_ms]
        return sample, new_trail
