"""
사용자 정의 예외 클래스 및 JSON 오류 응답 핸들러
모든 오류 응답은 {"error": <message>} 형태로 반환
"""
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class NotFoundException(HTTPException):
    """리소스를 찾을 수 없을 때 발생"""
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ValidationException(HTTPException):
    """입력 데이터 검증 실패 (필수 값 누락 또는 빈 값)"""
    def __init__(self, detail: str = "Validation error"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InternalException(HTTPException):
    """데이터베이스 등 내부 오류. 원본 메시지를 그대로 전달"""
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _missing_fields(errors: list[dict]) -> list[str]:
    """누락/빈 값 오류가 난 필드 이름 목록 (body 필드만)"""
    fields = []
    for error in errors:
        if error["type"] == "string_type":
            # null 만 누락으로 취급, 다른 타입은 잘못된 요청
            if error.get("input") is not None:
                continue
        elif error["type"] not in ("missing", "string_too_short", "blank_string"):
            continue
        loc = [str(part) for part in error["loc"] if part != "body"]
        if loc and loc[-1] not in fields:
            fields.append(loc[-1])
    return fields


def validation_error_message(errors: list[dict]) -> str:
    """RequestValidationError 목록을 하나의 메시지로 변환"""
    missing = _missing_fields(errors)
    if missing and len(missing) == len(errors):
        return f"Missing required fields: {', '.join(missing)}."

    details = "; ".join(
        f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}" for e in errors
    )
    return f"Invalid request: {details}"


def register_exception_handlers(app: FastAPI) -> None:
    """전역 예외 핸들러 등록"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = validation_error_message(exc.errors())
        logger.warning("Validation error on %s: %s", request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": message},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) or "Internal server error"},
        )
