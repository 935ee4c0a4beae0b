from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from pinseekr.domain import DomainValidationError
from pinseekr.storage.repository import ConcurrentUpdateError


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def validation_error(exc: DomainValidationError, details: Any | None = None) -> HTTPException:
    return api_error(code="validation_error", message=str(exc), details=details)


def cup_not_found(cup_id: str) -> HTTPException:
    return api_error(
        code="cup_not_found",
        message=f"cup {cup_id} not found",
        details={"id": cup_id},
        status_code=status.HTTP_404_NOT_FOUND,
    )


def cup_conflict(exc: ConcurrentUpdateError, cup_id: str) -> HTTPException:
    return api_error(
        code="concurrent_update",
        message=str(exc),
        details={"id": cup_id},
        status_code=status.HTTP_409_CONFLICT,
    )
