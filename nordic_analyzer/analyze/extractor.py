"""
영상 파일 → Frame 소스 (선택 기능, `video` extra 필요)

- OpenCV로 프레임을 읽고 MediaPipe Pose로 33개 랜드마크를 추출한다.
- FramePump.run(source)에 그대로 넘길 수 있는 비동기 callable.
- 포즈 검출 실패 프레임은 PoseNotDetectedError → FramePump가 로그 후 다음 프레임으로 진행.

static_image_mode=False: 동영상은 추적(tracking) 설정이 프레임 간 일관성이 높다.
"""
import asyncio
from typing import Optional

import cv2
import mediapipe as mp

from nordic_analyzer.schemas.pose_dto import Frame

mp_pose = mp.solutions.pose


class PoseNotDetectedError(RuntimeError):
    """해당 프레임에서 사람을 찾지 못함"""


class VideoFrameSource:
    def __init__(self, video_path: str, step: int = 1, model_complexity: int = 1):
        """
        step: 프레임 샘플링 간격 (1이면 모든 프레임)
        """
        self.video_path = video_path
        self.step = max(1, step)
        self.cap = cv2.VideoCapture(video_path)
        self.fps = self.cap.get(cv2.CAP_PROP_FPS) or 30.0
        self.pose = mp_pose.Pose(
            static_image_mode=False,
            model_complexity=model_complexity,
            enable_segmentation=False,
            min_detection_confidence=0.5,
            min_tracking_confidence=0.5,
        )
        self._frame_idx = 0
        self._closed = False
        self.seen_frames = 0
        self.detected_frames = 0

    def _read_next(self) -> Optional[Frame]:
        while self.cap.isOpened():
            ret, image = self.cap.read()
            if not ret:
                return None

            frame_idx = self._frame_idx
            self._frame_idx += 1
            if frame_idx % self.step != 0:
                continue

            self.seen_frames += 1
            playback_time = frame_idx / self.fps

            # OpenCV는 BGR → MediaPipe는 RGB
            rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
            results = self.pose.process(rgb)
            if not results.pose_landmarks:
                raise PoseNotDetectedError(f"no pose at {playback_time:.3f}s")

            self.detected_frames += 1
            return Frame.from_dicts(
                [
                    {"x": lm.x, "y": lm.y, "z": lm.z, "visibility": lm.visibility}
                    for lm in results.pose_landmarks.landmark
                ],
                playback_time=playback_time,
                timestamp_ms=playback_time * 1000.0,
            )
        return None

    async def __call__(self) -> Optional[Frame]:
        frame = await asyncio.to_thread(self._read_next)
        if frame is None:
            self.close()
        return frame

    @property
    def detection_rate(self) -> float:
        return self.detected_frames / self.seen_frames if self.seen_frames else 0.0

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.cap.release()
        self.pose.close()
