"""
방문 게스트 모델 (데이터베이스 테이블)
"""
from sqlalchemy import Column, Integer, Text, DateTime, func
from guest_registry.database import Base


class Guest(Base):
    """게스트 등록 테이블"""
    __tablename__ = "guests"
    # SQLite 에서도 삭제된 id 를 재사용하지 않도록 AUTOINCREMENT 사용
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    line_user_id = Column(Text, nullable=False)  # 등록한 LINE 사용자
    host_name = Column(Text, nullable=True, index=True)  # 방문 대상자 (구버전 행은 비어 있을 수 있음)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    visit_date = Column(Text, nullable=False, index=True)  # 자유 형식 문자열, 날짜로 파싱하지 않음
    arrival_time = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Guest(id={self.id}, host_name={self.host_name}, visit_date={self.visit_date})>"
