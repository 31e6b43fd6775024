from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from nordic_analyzer.api import include_all_routers
from nordic_analyzer.config.settings import settings

# 앱 생성
app = FastAPI(debug=settings.DEBUG_MODE)

# 자동으로 nordic_analyzer/api/* 모듈을 스캔해 라우터 전부 등록
include_all_routers(app)

app.openapi = lambda: get_openapi(
    title="Nordic Walking Gait Analysis API",
    version="1.0.0",
    description="노르딕 워킹 보행 분석 API",
    routes=app.routes,
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("nordic_analyzer.main:app", host="0.0.0.0", port=settings.FASTAPI_PORT,
                log_level=settings.LOG_LEVEL.lower(), reload=True)
