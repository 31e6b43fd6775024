from typing import Literal, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from nordic_analyzer.common.dependencies import SessionRegistry, get_registry, get_session_pump
from nordic_analyzer.report.service import build_angle_report, build_statistics_report
from nordic_analyzer.schemas.analyze_request import CreateSessionRequest, FrameRequest, ViewUpdateRequest
from nordic_analyzer.schemas.session_dto import SessionSnapshot
from nordic_analyzer.services.frame_pump import FramePump

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/sessions", tags=["Gait Session"])


@router.post("", status_code=201, response_model=SessionSnapshot)
async def create_session(
        req: Optional[CreateSessionRequest] = None,
        registry: SessionRegistry = Depends(get_registry),
) -> SessionSnapshot:
    """분석 세션 생성 (시점/보정값/전략 지정)"""
    req = req or CreateSessionRequest()
    try:
        config = req.to_config()
    except ValidationError as e:
        # settings 기본값이 잘못된 경우
        raise HTTPException(status_code=422, detail=f"잘못된 세션 설정: {e}")

    pump = registry.create(config)
    logger.info(f"📥 세션 생성: {pump.session.session_id}, view={config.view.value}")
    return pump.session.snapshot()


@router.get("/{session_id}", response_model=SessionSnapshot)
async def get_session(pump: FramePump = Depends(get_session_pump)) -> SessionSnapshot:
    return pump.session.snapshot()


@router.post("/{session_id}/frames")
async def submit_frame(req: FrameRequest, pump: FramePump = Depends(get_session_pump)):
    """
    프레임 1개 처리.
    같은 재생 프레임 번호가 다시 들어오면 {"skipped": true}
    """
    metrics = await pump.submit(req.to_frame())
    if metrics is None:
        return {"skipped": True}
    return metrics.model_dump(mode="json")


@router.put("/{session_id}/view", response_model=SessionSnapshot)
async def update_view(req: ViewUpdateRequest, pump: FramePump = Depends(get_session_pump)) -> SessionSnapshot:
    """시점 전환 (누적 통계 유지)"""
    await pump.set_view(req.view)
    return pump.session.snapshot()


@router.post("/{session_id}/reset", response_model=SessionSnapshot)
async def reset_session(pump: FramePump = Depends(get_session_pump)) -> SessionSnapshot:
    await pump.reset()
    return pump.session.snapshot()


@router.get("/{session_id}/report", response_class=PlainTextResponse)
async def session_report(
        kind: Literal["statistics", "angles"] = Query("statistics"),
        pump: FramePump = Depends(get_session_pump),
) -> str:
    session = pump.session
    if kind == "angles":
        return build_angle_report(session.state, session.config)
    return build_statistics_report(session.state, session.config)


@router.delete("/{session_id}", status_code=204)
async def delete_session(
        session_id: str,
        registry: SessionRegistry = Depends(get_registry),
):
    if not registry.remove(session_id):
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    logger.info(f"🗑️ 세션 삭제: {session_id}")


ROUTERS = [router]
