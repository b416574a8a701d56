"""
게스트 등록 API 라우트
"""
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from guest_registry.database import get_db
from guest_registry.schemas.guest import (
    GuestCreate,
    GuestResponse,
    HostGuestItem,
    DateGuestItem,
    MessageResponse,
)
from guest_registry.services.guest_service import GuestService

# id 컬럼은 64비트 정수 범위
GUEST_ID_LIMIT = 2 ** 63

router = APIRouter(
    prefix="/api/guests",
    tags=["Guests"]
)


@router.post("", response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
def register_guest(
        guest_data: GuestCreate,
        db: Session = Depends(get_db)
):
    """게스트 등록"""
    return GuestService.create_guest(db, guest_data)


@router.get("/by-host/{host_name}", response_model=list[HostGuestItem])
def list_guests_by_host(
        host_name: str,
        db: Session = Depends(get_db)
):
    """호스트가 등록한 게스트 목록 조회 (먼저 등록된 순)"""
    return GuestService.get_guests_by_host(db, host_name)


@router.get("/by-date/{date}", response_model=list[DateGuestItem])
def list_guests_by_date(
        date: str,
        db: Session = Depends(get_db)
):
    """특정 날짜의 전체 게스트 목록 조회"""
    return GuestService.get_guests_by_date(db, date)


@router.delete("/{guest_id}", response_model=MessageResponse)
def delete_guest(
        guest_id: int = Path(..., ge=-GUEST_ID_LIMIT, le=GUEST_ID_LIMIT - 1),
        db: Session = Depends(get_db)
):
    """게스트 삭제"""
    GuestService.delete_guest(db, guest_id)
    return {"message": "Guest deleted successfully"}
