"""
포즈 입력 관련 DTO
외부 포즈 추정기(MediaPipe 등) → 파이프라인 입력 계약
"""
import math
from typing import List, Optional

from pydantic import BaseModel, Field

from nordic_analyzer.analyze.constants import NOMINAL_FPS, VISIBILITY_THRESHOLD


class Landmark(BaseModel):
    """MediaPipe 포즈 랜드마크 (33개 중 하나)"""
    x: float = Field(..., description="정규화된 X 좌표 (대략 0~1)")
    y: float = Field(..., description="정규화된 Y 좌표 (대략 0~1)")
    z: float = Field(0.0, description="깊이 (상대적, 시점에 따라 부호 의미가 다름)")
    visibility: float = Field(1.0, ge=0.0, le=1.0, description="가시성 점수")


class Frame(BaseModel):
    """1개 프레임의 랜드마크 집합 (인덱스 = 해부학적 랜드마크 번호)"""
    landmarks: List[Optional[Landmark]] = Field(default_factory=list)

    # 영상 재생 시간(초). 라이브 카메라는 None
    playback_time: Optional[float] = Field(None, ge=0.0)
    timestamp_ms: Optional[float] = Field(None, description="캡처 시각 (ms)")

    @property
    def frame_index(self) -> Optional[int]:
        """재생 시간 기준 프레임 번호 (30fps 가정). 라이브 입력이면 None"""
        if self.playback_time is None:
            return None
        return int(math.floor(self.playback_time * NOMINAL_FPS))

    def get(self, idx: int, min_vis: float = VISIBILITY_THRESHOLD) -> Optional[Landmark]:
        """
        사용 가능한 랜드마크만 반환.
        인덱스 범위 밖이거나 visibility <= min_vis면 None (부재로 취급)
        """
        if idx < 0 or idx >= len(self.landmarks):
            return None
        lm = self.landmarks[idx]
        if lm is None or not (lm.visibility > min_vis):
            return None
        return lm

    def get_all(self, *indices: int, min_vis: float = VISIBILITY_THRESHOLD) -> Optional[List[Landmark]]:
        """여러 랜드마크를 한 번에. 하나라도 없으면 None"""
        out = []
        for idx in indices:
            lm = self.get(idx, min_vis=min_vis)
            if lm is None:
                return None
            out.append(lm)
        return out

    @classmethod
    def from_dicts(
        cls,
        landmarks: List[dict],
        playback_time: Optional[float] = None,
        timestamp_ms: Optional[float] = None,
    ) -> "Frame":
        """MediaPipe landmark dict 리스트 → Frame"""
        return cls(
            landmarks=[Landmark(**lm) if lm is not None else None for lm in landmarks],
            playback_time=playback_time,
            timestamp_ms=timestamp_ms,
        )
