"""
스키마 마이그레이션
schema_version 테이블에 적용된 버전을 기록하고, 아직 적용되지 않은 단계만 순서대로 실행한다.

각 단계는 ALTER 오류 메시지를 비교하는 대신 실제 테이블 구조를 inspect 로 확인한 뒤
필요한 경우에만 변경하므로, 버전 기록이 생기기 전에 만들어진 테이블에도 안전하다.

여러 워커로 띄우는 배포에서는 스케일 아웃 전에 아래 명령으로 한 번 실행해 둔다.
(동시에 시작하면 구조 확인과 ALTER 사이에 경합이 생길 수 있음)

    python -m guest_registry.migrations
"""
import logging
from typing import Callable

from sqlalchemy import Column, DateTime, Integer, MetaData, Table, Text, func, inspect, select, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from guest_registry.models.guest import Guest

logger = logging.getLogger(__name__)

GUESTS_TABLE = Guest.__tablename__

version_metadata = MetaData()

schema_version = Table(
    "schema_version",
    version_metadata,
    Column("version", Integer, primary_key=True, autoincrement=False),
    Column("description", Text, nullable=False),
    Column("applied_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
)


def _guest_columns(conn: Connection) -> set[str]:
    inspector = inspect(conn)
    if not inspector.has_table(GUESTS_TABLE):
        return set()
    return {column["name"] for column in inspector.get_columns(GUESTS_TABLE)}


def create_guests_table(conn: Connection) -> bool:
    """guests 테이블 생성 (이미 있으면 그대로 둠)"""
    if inspect(conn).has_table(GUESTS_TABLE):
        return False
    Guest.__table__.create(bind=conn)
    return True


def add_arrival_time(conn: Connection) -> bool:
    """arrival_time 컬럼 추가"""
    if "arrival_time" in _guest_columns(conn):
        return False
    conn.execute(text(f"ALTER TABLE {GUESTS_TABLE} ADD COLUMN arrival_time TEXT"))
    return True


def rename_date_column(conn: Connection) -> bool:
    """구버전의 date 컬럼을 visit_date 로 변경"""
    columns = _guest_columns(conn)
    if "date" not in columns or "visit_date" in columns:
        return False
    conn.execute(text(f'ALTER TABLE {GUESTS_TABLE} RENAME COLUMN "date" TO visit_date'))
    return True


def drop_date_of_birth(conn: Connection) -> bool:
    """더 이상 사용하지 않는 date_of_birth 컬럼 삭제"""
    if "date_of_birth" not in _guest_columns(conn):
        return False
    conn.execute(text(f"ALTER TABLE {GUESTS_TABLE} DROP COLUMN date_of_birth"))
    return True


# 새 마이그레이션은 버전 번호를 하나씩 올려서 끝에 추가한다.
MIGRATIONS: list[tuple[int, str, Callable[[Connection], bool]]] = [
    (1, "create guests table", create_guests_table),
    (2, "add guests.arrival_time", add_arrival_time),
    (3, "rename guests.date to visit_date", rename_date_column),
    (4, "drop guests.date_of_birth", drop_date_of_birth),
]

LATEST_VERSION = MIGRATIONS[-1][0]


def get_schema_version(engine: Engine) -> int:
    """현재 적용된 스키마 버전 (기록이 없으면 0)"""
    with engine.connect() as conn:
        if not inspect(conn).has_table(schema_version.name):
            return 0
        return conn.execute(select(func.max(schema_version.c.version))).scalar() or 0


def run_migrations(engine: Engine) -> int:
    """
    미적용 마이그레이션 실행
    - 단계마다 별도 트랜잭션에서 실행하고 schema_version 에 기록한다.
    - 최종 스키마 버전을 반환한다.
    """
    version_metadata.create_all(bind=engine, checkfirst=True)
    current = get_schema_version(engine)

    if current >= LATEST_VERSION:
        logger.info("Schema is up to date (version %s)", current)
        return current

    for version, description, step in MIGRATIONS:
        if version <= current:
            continue
        try:
            with engine.begin() as conn:
                changed = step(conn)
                conn.execute(schema_version.insert().values(version=version, description=description))
        except IntegrityError:
            # 다른 프로세스가 같은 버전을 먼저 기록함
            current = get_schema_version(engine)
            logger.info("Migration %s was recorded by another process (now at %s)", version, current)
            continue
        if changed:
            logger.info("Applied migration %s: %s", version, description)
        else:
            logger.info("Migration %s already satisfied: %s", version, description)
        current = version

    return current


if __name__ == "__main__":
    from guest_registry.config import get_settings
    from guest_registry.database import Database
    from guest_registry.logging_config import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    database = Database(settings.database_url)
    try:
        print(f"✓ Schema version {run_migrations(database.engine)}")
    finally:
        database.dispose()
