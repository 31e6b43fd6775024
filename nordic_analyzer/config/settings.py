from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv

# helpers
from nordic_analyzer.config.env_utils import env_bool, env_float, env_list
from nordic_analyzer.analyze.constants import (
    DEFAULT_PIXELS_PER_CM,
    DEFAULT_FRAME_WIDTH,
    DEFAULT_FRAME_HEIGHT,
    DEFAULT_GRIP_BLEND,
)


# ─────────────────────────────────────────────────────────
# Project root 탐색
#   - .git / pyproject.toml 중 하나가 보이는 최상단을 루트로 간주
#   - 실패 시 BASE_DIR 환경변수, 그것도 없으면 현재 작업 디렉토리
# ─────────────────────────────────────────────────────────
def find_project_root() -> Path:
    cur = Path(__file__).resolve()
    for parent in cur.parents:
        if any((parent / m).exists() for m in (".git", "pyproject.toml")):
            return parent
    env_root = os.getenv("BASE_DIR")
    if env_root:
        return Path(env_root).resolve()
    return Path.cwd()


ROOT: Path = find_project_root()

# ─────────────────────────────────────────────────────────
# .env 로딩
#   - ENV_FILE 지정 시 우선
#   - 없으면 ROOT/.env.<ENV> → 없으면 ROOT/.env
# ─────────────────────────────────────────────────────────
_DEFAULT_ENV = os.getenv("ENV", "test")
_env_file_candidate = ROOT / f".env.{_DEFAULT_ENV}"
_ENV_FILE = (
    Path(os.getenv("ENV_FILE")).resolve()
    if os.getenv("ENV_FILE")
    else (_env_file_candidate if _env_file_candidate.exists() else (ROOT / ".env"))
)
load_dotenv(dotenv_path=_ENV_FILE, override=False)


class Settings:
    # ── App / Runtime ─────────────────────────────────────
    ENV: str = os.getenv("ENV", _DEFAULT_ENV)
    FASTAPI_PORT: int = int(os.getenv("FASTAPI_PORT", 8000))
    DEBUG_MODE: bool = env_bool("DEBUG_MODE", False)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    ROOT: Path = ROOT

    # ── Session defaults ──────────────────────────────────
    # 피험자별 보정값(px/cm). 세션 생성 시 덮어쓸 수 있음
    PIXELS_PER_CM: float = env_float("PIXELS_PER_CM", DEFAULT_PIXELS_PER_CM)
    FRAME_WIDTH: int = int(os.getenv("FRAME_WIDTH", DEFAULT_FRAME_WIDTH))
    FRAME_HEIGHT: int = int(os.getenv("FRAME_HEIGHT", DEFAULT_FRAME_HEIGHT))
    DEFAULT_VIEW: str = os.getenv("DEFAULT_VIEW", "front")

    # ── Strategy selection ────────────────────────────────
    POLE_STRATEGY: str = os.getenv("POLE_STRATEGY", "ground_line")  # "ground_line" | "forearm_offset"
    TRUNK_LEAN_CONVENTION: str = os.getenv("TRUNK_LEAN_CONVENTION", "hip_relative")
    GRIP_BLEND: float = env_float("GRIP_BLEND", DEFAULT_GRIP_BLEND)

    # ── In-memory session registry ────────────────────────
    MAX_SESSIONS: int = int(os.getenv("MAX_SESSIONS", 32))

    # 리포트에 포함할 섹션
    REPORT_SECTIONS = env_list(
        "REPORT_SECTIONS",
        ["angles", "pole", "stride", "com", "grip"],
    )


# 전역 싱글톤처럼 사용
settings = Settings()
