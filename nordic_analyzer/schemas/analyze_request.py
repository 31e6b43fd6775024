from pydantic import BaseModel, Field, validator
from typing import List, Optional

from nordic_analyzer.analyze.constants import NUM_LANDMARKS
from nordic_analyzer.schemas.pose_dto import Frame, Landmark
from nordic_analyzer.schemas.session_dto import PipelineConfig
from nordic_analyzer.utils.enums.enums import PoleStrategyEnum, TrunkLeanConvention, ViewEnum


class CreateSessionRequest(BaseModel):
    """세션 생성 API Request (지정하지 않은 값은 settings 기본값)"""
    view: Optional[ViewEnum] = Field(default=None, description="촬영 시점 (front/back/left/right)")

    # 보정값
    pixels_per_cm: Optional[float] = Field(default=None, gt=0.0, description="px/cm 보정값")
    frame_width: Optional[int] = Field(default=None, gt=0, description="영상 폭 (px)")
    frame_height: Optional[int] = Field(default=None, gt=0, description="영상 높이 (px)")

    # 전략 선택
    pole_strategy: Optional[PoleStrategyEnum] = Field(default=None, description="폴 복원 방식")
    trunk_lean_convention: Optional[TrunkLeanConvention] = Field(default=None, description="체간 기울기 규약")
    grip_blend: Optional[float] = Field(default=None, ge=0.0, le=1.0, description="엄지 가중치 (0이면 손목만)")

    def to_config(self) -> PipelineConfig:
        return PipelineConfig.from_settings(**self.model_dump())

    class Config:
        json_schema_extra = {
            "example": {
                "view": "left",
                "pixels_per_cm": 5.0,
                "frame_width": 1280,
                "frame_height": 720,
                "pole_strategy": "ground_line",
                "trunk_lean_convention": "hip_relative",
                "grip_blend": 0.3,
            }
        }


class ViewUpdateRequest(BaseModel):
    view: ViewEnum = Field(..., description="전환할 시점")


class FrameRequest(BaseModel):
    """프레임 1개 (MediaPipe 33개 랜드마크)"""
    landmarks: List[Optional[Landmark]] = Field(..., description="인덱스 순서 랜드마크 (안 보이면 null)")
    playback_time: Optional[float] = Field(default=None, ge=0.0, description="재생 시간(초), 라이브면 생략")
    timestamp_ms: Optional[float] = Field(default=None, description="캡처 시각 (ms)")

    @validator("landmarks")
    def validate_landmarks(cls, v):
        """빈 프레임 / 토폴로지보다 긴 프레임은 거부"""
        if not v:
            raise ValueError("landmarks가 비어 있습니다")
        if len(v) > NUM_LANDMARKS:
            raise ValueError(f"landmarks는 최대 {NUM_LANDMARKS}개입니다")
        return v

    def to_frame(self) -> Frame:
        return Frame(
            landmarks=self.landmarks,
            playback_time=self.playback_time,
            timestamp_ms=self.timestamp_ms,
        )
