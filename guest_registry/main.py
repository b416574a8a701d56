import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from guest_registry.config import Settings, get_settings
from guest_registry.database import Database
from guest_registry.logging_config import setup_logging
from guest_registry.migrations import run_migrations
from guest_registry.routes.guests import router as guests_router
from guest_registry.utils.exceptions import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 라이프사이클 관리"""
    database: Database = app.state.database
    # 시작: 스키마 마이그레이션 (실패하면 서버를 띄우지 않음)
    try:
        version = run_migrations(database.engine)
    except Exception:
        logger.exception("Database initialization failed")
        database.dispose()
        raise
    logger.info("✓ Database initialized (schema version %s)", version)
    yield
    # 종료: 커넥션 풀 정리
    database.dispose()
    logger.info("✓ Application shutdown")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """설정으로부터 FastAPI 애플리케이션 생성"""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.app_name,
        description="게스트 방문 등록 API",
        version=settings.app_version,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = Database(
        settings.database_url,
        pool_recycle=settings.pool_recycle,
        pool_timeout=settings.pool_timeout,
    )

    # CORS 미들웨어 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # 헬스체크 엔드포인트
    @app.get("/api/health")
    def health_check(request: Request):
        """애플리케이션 및 DB 상태 확인"""
        database_ok = request.app.state.database.health_check()
        return JSONResponse(
            status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "healthy" if database_ok else "unhealthy",
                "database": database_ok,
                "app_name": settings.app_name,
                "version": settings.app_version,
            },
        )

    # 라우터 등록
    app.include_router(guests_router)

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return {
            "message": f"Welcome to {settings.app_name} API",
            "docs": "/api/docs",
            "openapi": "/api/openapi.json"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "guest_registry.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
