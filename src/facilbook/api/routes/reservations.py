"""Reservation endpoints.

GET    /reservations                      → list all
GET    /reservations/date/{date}          → list one day
GET    /reservations/range?start=&end=    → list inclusive date range
POST   /reservations                      → create (overlap-checked)
PUT    /reservations/{id}                 → update (overlap-checked)
DELETE /reservations/{id}                 → delete
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, ConfigDict

from facilbook.api.deps import get_store
from facilbook.domain import reservations as ledger
from facilbook.domain.errors import (
    BookingError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from facilbook.infra.db import Store
from facilbook.observability.logging import get_logger
from facilbook.observability.redaction import safe_request_fields

logger = get_logger(__name__)

router = APIRouter(prefix="/reservations", tags=["reservations"])

CREATED_MESSAGE = "예약이 성공적으로 생성되었습니다."
UPDATED_MESSAGE = "예약이 성공적으로 수정되었습니다."
DELETED_MESSAGE = "예약이 성공적으로 삭제되었습니다."
STORE_FAILURE_MESSAGE = "서버 오류가 발생했습니다."


# ── Schemas ───────────────────────────────────────────────────────────────────


class CreateReservationRequest(BaseModel):
    """Request body for POST /reservations.

    Fields are untyped and optional so that missing or mistyped values are
    reported by the ledger's validation (400) instead of as a 422.
    """

    model_config = ConfigDict(extra="ignore")

    name: Any = None
    phone: Any = None
    age: Any = None
    gender: Any = None
    facility: Any = None
    detail: Any = None
    date: Any = None
    start_time: Any = None
    end_time: Any = None
    purpose: Any = None


class UpdateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    phone: Any = None
    facility: Any = None
    date: Any = None
    start_time: Any = None
    end_time: Any = None
    purpose: Any = None


# ── Helpers ───────────────────────────────────────────────────────────────────


def _to_http(exc: BookingError) -> HTTPException:
    if isinstance(exc, (ValidationError, ConflictError)):
        return HTTPException(status_code=400, detail=exc.message)
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=exc.message)
    if isinstance(exc, StoreError):
        return HTTPException(status_code=500, detail=STORE_FAILURE_MESSAGE)
    return HTTPException(status_code=500, detail=exc.message)


def _log_rejection(action: str, exc: BookingError, fields: dict | None = None) -> None:
    extra: dict = {"action": action, "error": type(exc).__name__}
    if fields is not None:
        extra["request"] = safe_request_fields(fields)
    if isinstance(exc, StoreError):
        logger.error("reservation request failed", extra={"extra_fields": extra})
    else:
        logger.info("reservation request rejected", extra={"extra_fields": extra})


# ── GET ───────────────────────────────────────────────────────────────────────


@router.get("")
def list_reservations(store: Store = Depends(get_store)) -> list[dict]:
    """All reservations, date descending then start time ascending."""
    try:
        rows = ledger.list_all(store)
    except BookingError as exc:
        _log_rejection("list", exc)
        raise _to_http(exc) from exc
    return [r.to_dict() for r in rows]


@router.get("/date/{date}")
def list_reservations_by_date(
    date: str = Path(..., description="YYYY-MM-DD"),
    store: Store = Depends(get_store),
) -> list[dict]:
    """Reservations on one date, by start time."""
    try:
        rows = ledger.list_by_date(store, date)
    except BookingError as exc:
        _log_rejection("list_by_date", exc)
        raise _to_http(exc) from exc
    return [r.to_dict() for r in rows]


@router.get("/range")
def list_reservations_by_range(
    start: str | None = Query(None, description="First date, inclusive"),
    end: str | None = Query(None, description="Last date, inclusive"),
    store: Store = Depends(get_store),
) -> list[dict]:
    """Reservations with start <= date <= end, by date then start time."""
    try:
        rows = ledger.list_by_range(store, start, end)
    except BookingError as exc:
        _log_rejection("list_by_range", exc)
        raise _to_http(exc) from exc
    return [r.to_dict() for r in rows]


# ── POST /reservations ────────────────────────────────────────────────────────


@router.post("")
def create_reservation(
    body: CreateReservationRequest,
    store: Store = Depends(get_store),
) -> dict:
    """Book a slot.

    Returns the assigned id, a confirmation message and the stored record.
    Any validation failure or overlap returns 400.
    """
    fields = body.model_dump()
    try:
        reservation = ledger.create_reservation(store, fields)
    except BookingError as exc:
        _log_rejection("create", exc, fields)
        raise _to_http(exc) from exc

    return {
        "id": reservation.id,
        "message": CREATED_MESSAGE,
        "reservation": reservation.to_dict(),
    }


# ── PUT /reservations/{id} ────────────────────────────────────────────────────


@router.put("/{reservation_id}")
def update_reservation(
    reservation_id: int = Path(..., description="Reservation ID"),
    body: UpdateReservationRequest = ...,
    store: Store = Depends(get_store),
) -> dict:
    """Replace a reservation's editable fields."""
    fields = body.model_dump()
    try:
        ledger.update_reservation(store, reservation_id, fields)
    except BookingError as exc:
        _log_rejection("update", exc, fields)
        raise _to_http(exc) from exc
    return {"message": UPDATED_MESSAGE}


# ── DELETE /reservations/{id} ─────────────────────────────────────────────────


@router.delete("/{reservation_id}")
def delete_reservation(
    reservation_id: int = Path(..., description="Reservation ID"),
    store: Store = Depends(get_store),
) -> dict:
    try:
        ledger.delete_reservation(store, reservation_id)
    except BookingError as exc:
        _log_rejection("delete", exc)
        raise _to_http(exc) from exc
    return {"message": DELETED_MESSAGE}
