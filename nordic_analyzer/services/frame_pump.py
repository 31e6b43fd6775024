"""
비동기 프레임 전달 어댑터

포즈 소스(카메라/영상 추출기/HTTP 요청)에서 프레임을 await 하고,
동기 파이프라인을 락 안에서 끝까지 실행한 뒤 다음 프레임을 받는다.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from nordic_analyzer.schemas.pose_dto import Frame
from nordic_analyzer.schemas.session_dto import FrameMetrics
from nordic_analyzer.services.gait_analysis_service import GaitAnalysisSession

logger = logging.getLogger(__name__)

FrameSource = Callable[[], Awaitable[Optional[Frame]]]
MetricsSink = Callable[[FrameMetrics], None]


class FramePump:
    """세션 1개에 대한 프레임 직렬 처리기"""

    def __init__(self, session: GaitAnalysisSession, on_metrics: Optional[MetricsSink] = None):
        self.session = session
        self.on_metrics = on_metrics
        self._lock = asyncio.Lock()

        self.processed = 0
        self.skipped = 0
        self.failures = 0

    async def submit(self, frame: Frame) -> Optional[FrameMetrics]:
        """프레임 1개 처리. 중복 프레임이면 None"""
        async with self._lock:
            metrics = self.session.process(frame)

        if metrics is None:
            self.skipped += 1
            return None

        self.processed += 1
        if self.on_metrics is not None:
            self.on_metrics(metrics)
        return metrics

    async def reset(self) -> None:
        """진행 중인 프레임 처리가 끝난 뒤 상태 교체"""
        async with self._lock:
            self.session.reset()

    async def set_view(self, view) -> None:
        async with self._lock:
            self.session.set_view(view)

    async def run(self, source: FrameSource, max_failures: Optional[int] = None) -> int:
        """
        소스가 None을 돌려줄 때까지 반복.
        소스 예외는 로그만 남기고 이전 상태를 유지한 채 계속 진행

        Args:
            source: 다음 프레임을 돌려주는 코루틴 함수 (끝이면 None)
            max_failures: 연속 실패 허용 횟수 (None이면 무제한)

        Returns:
            이번 실행에서 처리한 프레임 수
        """
        processed_before = self.processed
        consecutive = 0

        while True:
            try:
                frame = await source()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self.failures += 1
                consecutive += 1
                logger.warning(f"[pump] pose source failed ({consecutive}): {e}")
                if max_failures is not None and consecutive >= max_failures:
                    logger.error(f"[pump] giving up after {consecutive} consecutive failures")
                    break
                continue

            consecutive = 0
            if frame is None:
                break
            await self.submit(frame)

        return self.processed - processed_before
