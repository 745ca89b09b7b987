"""Result<T> pattern — services return this instead of raising exceptions for expected failures."""
from __future__ import annotations
from typing import TypeVar, Generic, Optional

T = TypeVar("T")


class ErrorCode:
    """Machine-readable failure codes carried by Result.fail()."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    COURSE_NOT_FOUND = "COURSE_NOT_FOUND"
    LECTURE_NOT_FOUND = "LECTURE_NOT_FOUND"
    CONCEPT_NOT_FOUND = "CONCEPT_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_NOT_ACTIVE = "SESSION_NOT_ACTIVE"
    INVALID_HISTORY = "INVALID_HISTORY"
    TURN_LIMIT_REACHED = "TURN_LIMIT_REACHED"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"


class Result(Generic[T]):
    def __init__(
        self,
        is_success: bool,
        value: Optional[T] = None,
        error: Optional[str] = None,
        code: Optional[str] = None,
    ):
        self.is_success = is_success
        self.value = value
        self.error = error
        self.code = code

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(is_success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str = ErrorCode.VALIDATION_ERROR) -> "Result[T]":
        return cls(is_success=False, error=error, code=code)

    @classmethod
    def propagate(cls, other: "Result") -> "Result[T]":
        """Re-wrap a failed Result of another type, keeping message and code."""
        return cls(is_success=False, error=other.error, code=other.code)

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.ok({self.value!r})"
        return f"Result.fail({self.error!r}, code={self.code!r})"
