from collections import OrderedDict
from typing import Dict, Optional
import logging

from fastapi import HTTPException

from nordic_analyzer.config.settings import settings
from nordic_analyzer.schemas.session_dto import PipelineConfig
from nordic_analyzer.services.frame_pump import FramePump
from nordic_analyzer.services.gait_analysis_service import GaitAnalysisSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    메모리 내 세션 저장소 (프로세스 재시작 시 소멸)
    상한 초과 시 가장 오래된 세션부터 제거
    """

    def __init__(self, max_sessions: int):
        self.max_sessions = max(1, max_sessions)
        self._pumps: "OrderedDict[str, FramePump]" = OrderedDict()

    def create(self, config: PipelineConfig) -> FramePump:
        while len(self._pumps) >= self.max_sessions:
            evicted_id, _ = self._pumps.popitem(last=False)
            logger.warning(f"[registry] session limit {self.max_sessions} reached, evicted {evicted_id}")

        pump = FramePump(GaitAnalysisSession(config=config))
        self._pumps[pump.session.session_id] = pump
        return pump

    def get(self, session_id: str) -> Optional[FramePump]:
        return self._pumps.get(session_id)

    def remove(self, session_id: str) -> bool:
        return self._pumps.pop(session_id, None) is not None

    def clear(self) -> None:
        self._pumps.clear()

    def __len__(self) -> int:
        return len(self._pumps)

    def ids(self) -> Dict[str, str]:
        return {sid: pump.session.config.view.value for sid, pump in self._pumps.items()}


registry = SessionRegistry(settings.MAX_SESSIONS)


def get_registry() -> SessionRegistry:
    return registry


# 경로 파라미터 → 세션 (없으면 404)
async def get_session_pump(session_id: str) -> FramePump:
    pump = registry.get(session_id)
    if pump is None:
        logger.warning(f"⚠️ Unknown session: {session_id}")
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return pump
