"""Translate failed Results into HTTP errors."""
from __future__ import annotations
from typing import NoReturn

from fastapi import HTTPException, status

from feynman.domain.common.result import ErrorCode, Result

_STATUS_BY_CODE: dict[str, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_HISTORY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.COURSE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.LECTURE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONCEPT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SESSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SESSION_NOT_ACTIVE: status.HTTP_409_CONFLICT,
    ErrorCode.TURN_LIMIT_REACHED: status.HTTP_409_CONFLICT,
    ErrorCode.UPSTREAM_UNAVAILABLE: status.HTTP_502_BAD_GATEWAY,
}


def raise_for_failure(result: Result) -> NoReturn:
    raise HTTPException(
        status_code=_STATUS_BY_CODE.get(result.code, status.HTTP_400_BAD_REQUEST),
        detail={"code": result.code, "message": result.error},
    )


def not_found(code: str, message: str) -> NoReturn:
    raise_for_failure(Result.fail(message, code=code))
