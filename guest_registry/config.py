"""
애플리케이션 설정 파일
환경 변수를 통해 설정 관리
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 데이터베이스 설정
    database_url: str = "sqlite:///./guests.db"
    pool_recycle: int = 1800
    pool_timeout: int = 10

    # 애플리케이션 설정
    app_name: str = "Guest Registration Service"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # 로깅 설정
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # CORS 설정
    allowed_origins: list[str] = ["*"]

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """호스팅 업체가 주는 postgres:// 스킴을 SQLAlchemy 용으로 변환"""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    class Config:
        # ✅ 실행 위치와 무관하게 "프로젝트 루트의 .env"를 찾도록 고정
        env_file = str(Path(__file__).resolve().parents[1] / ".env")
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
