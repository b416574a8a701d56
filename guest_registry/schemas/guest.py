"""
게스트 관련 Pydantic 스키마 (API 요청/응답)
"""
from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError
from datetime import datetime
from typing import Optional


class GuestCreate(BaseModel):
    """게스트 등록 요청"""
    line_user_id: str = Field(..., min_length=1)
    host_name: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    date: str = Field(..., min_length=1, description="방문 날짜 (자유 형식 문자열)")
    arrival_time: Optional[str] = Field(None, description="도착 시간")

    @field_validator("line_user_id", "host_name", "first_name", "last_name", "date")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        # 공백만 있는 값은 빈 값으로 취급 (값 자체는 그대로 저장)
        if not v.strip():
            raise PydanticCustomError("blank_string", "Field must not be blank")
        return v


class GuestResponse(BaseModel):
    """게스트 등록 응답 (저장된 전체 행)"""
    id: int
    line_user_id: str
    host_name: Optional[str]
    first_name: str
    last_name: str
    phone: Optional[str]
    visit_date: str
    arrival_time: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class HostGuestItem(BaseModel):
    """호스트별 게스트 목록 항목 (visit_date 는 date 로 반환)"""
    id: int
    first_name: str
    last_name: str
    phone: Optional[str]
    date: str
    arrival_time: Optional[str]

    class Config:
        from_attributes = True


class DateGuestItem(BaseModel):
    """날짜별 게스트 목록 항목"""
    host_name: Optional[str]
    first_name: str
    last_name: str
    phone: Optional[str]
    arrival_time: Optional[str]

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    """단순 메시지 응답"""
    message: str
