from fastapi import APIRouter, FastAPI
import importlib, pkgutil

# 이 패키지(root)
PACKAGE_NAME = __name__


def include_all_routers(app: FastAPI) -> None:
    """
    nordic_analyzer/api 패키지의 모든 모듈을 스캔해서
    - ROUTERS: list[APIRouter]
    - 또는 top-level APIRouter 객체
    를 자동으로 app에 include.
    """
    package = importlib.import_module(PACKAGE_NAME)

    for modinfo in pkgutil.iter_modules(package.__path__):
        mod_name = modinfo.name
        # _ 로 시작하는 내부 모듈은 무시
        if mod_name.startswith("_"):
            continue

        module = importlib.import_module(f"{PACKAGE_NAME}.{mod_name}")

        # 1) ROUTERS 리스트가 있으면 그걸 우선 사용
        routers = getattr(module, "ROUTERS", None)
        if isinstance(routers, (list, tuple)):
            for r in routers:
                if isinstance(r, APIRouter):
                    app.include_router(r)
            continue

        # 2) 아니면 모듈 내 APIRouter 인스턴스들을 전부 include
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if isinstance(obj, APIRouter):
                app.include_router(obj)
