"""
게스트 등록 관리 서비스
비즈니스 로직 계층 (검증 + 쿼리 구성 + 응답 형태 결정)
"""
import logging
from sqlalchemy.orm import Session
from typing import List
from guest_registry.database import store_errors
from guest_registry.models.guest import Guest
from guest_registry.schemas.guest import GuestCreate
from guest_registry.utils.exceptions import NotFoundException, ValidationException

logger = logging.getLogger(__name__)


class GuestService:
    """게스트 등록 관리 서비스"""

    @staticmethod
    def create_guest(db: Session, guest_data: GuestCreate) -> Guest:
        """게스트 등록 (id, created_at 은 DB 에서 생성)"""
        data = guest_data.model_dump()
        guest = Guest(
            line_user_id=data["line_user_id"],
            host_name=data["host_name"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            phone=data["phone"],
            visit_date=data["date"],
            arrival_time=data["arrival_time"],
        )
        with store_errors(db, "Registration"):
            db.add(guest)
            db.commit()
            db.refresh(guest)

        logger.info("Registered guest id=%s for host %r", guest.id, guest.host_name)
        return guest

    @staticmethod
    def get_guests_by_host(db: Session, host_name: str) -> List[dict]:
        """
        호스트별 게스트 조회
        - 먼저 등록된 순서(created_at 오름차순)로 반환하며, visit_date 는 date 로 내보낸다.
        """
        if not host_name or not host_name.strip():
            raise ValidationException(detail="Missing hostName parameter.")

        query = (
            db.query(
                Guest.id,
                Guest.first_name,
                Guest.last_name,
                Guest.phone,
                Guest.visit_date.label("date"),
                Guest.arrival_time,
            )
            .filter(Guest.host_name == host_name)
            .order_by(Guest.created_at.asc(), Guest.id.asc())
        )
        with store_errors(db, "Fetch Guests by Host"):
            rows = query.all()
        return [dict(row._mapping) for row in rows]

    @staticmethod
    def get_guests_by_date(db: Session, visit_date: str) -> List[dict]:
        """날짜별 게스트 조회 (문자열 완전 일치, 정규화 없음)"""
        query = (
            db.query(
                Guest.host_name,
                Guest.first_name,
                Guest.last_name,
                Guest.phone,
                Guest.arrival_time,
            )
            .filter(Guest.visit_date == visit_date)
            .order_by(Guest.created_at.asc(), Guest.id.asc())
        )
        with store_errors(db, "Fetch Guests by Date"):
            rows = query.all()
        return [dict(row._mapping) for row in rows]

    @staticmethod
    def delete_guest(db: Session, guest_id: int) -> None:
        """게스트 삭제 (단일 DELETE 문, 대상이 없으면 404)"""
        with store_errors(db, "Delete Guest"):
            deleted = (
                db.query(Guest)
                .filter(Guest.id == guest_id)
                .delete(synchronize_session=False)
            )
            db.commit()

        if deleted == 0:
            raise NotFoundException(detail="Guest not found.")
        logger.info("Deleted guest id=%s", guest_id)
