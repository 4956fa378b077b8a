"""Outcome of a store write that reports failure instead of raising."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ServiceError(BaseModel):
    """Why a save (or clear) did not reach the store."""

    code: str = Field(..., description="persist_failed, mirror_disabled, clear_failed")
    message: str
    board_id: str | None = None


class ServiceResult(BaseModel, Generic[T]):
    """``data`` on success, ``error`` on failure.

    Returned by ``TripRepository.save``: the in-memory board is already
    mutated, so a failed save is reported to the caller, never raised.
    """

    success: bool
    data: T | None = None
    error: ServiceError | None = None

    @classmethod
    def ok(cls, data: T) -> "ServiceResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: str, message: str, board_id: str | None = None) -> "ServiceResult[T]":
        return cls(
            success=False,
            error=ServiceError(code=code, message=message, board_id=board_id),
        )
