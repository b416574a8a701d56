"""
데이터베이스 연결 설정
SQLAlchemy를 사용한 데이터베이스 관리

엔진/세션 팩토리는 전역 변수가 아니라 Database 객체가 소유하며,
애플리케이션 시작 시 생성되어 app.state.database 에 주입된다.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from guest_registry.utils.exceptions import InternalException

logger = logging.getLogger(__name__)

# 모델 기본 클래스
Base = declarative_base()

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Database:
    """엔진과 세션 팩토리를 묶은 저장소 리소스"""

    def __init__(self, database_url: str, pool_recycle: int = 1800, pool_timeout: int = 10):
        engine_kwargs = {"pool_pre_ping": True}   # 연결 검사

        # ✅ SQLite 여부에 따라 엔진 옵션 분기
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if database_url in _MEMORY_URLS:
                # 인메모리 DB는 하나의 연결을 공유해야 테이블이 유지됨
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_recycle"] = pool_recycle
            engine_kwargs["pool_timeout"] = pool_timeout

        self.engine = create_engine(database_url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def health_check(self) -> bool:
        """DB 연결 확인 (헬스체크 용)"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error("DB health check failed: %s", e)
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """데이터베이스 세션 의존성 (요청마다 획득/반환)"""
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(db: Session, action: str) -> Iterator[None]:
    """
    SQLAlchemy 오류를 InternalException 으로 변환
    - 세션을 롤백하고 드라이버의 원본 메시지를 그대로 전달한다.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        message = str(getattr(e, "orig", None) or e)
        logger.error("%s Error: %s", action, message)
        raise InternalException(detail=message) from e
