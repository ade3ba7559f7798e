"""Facility catalog endpoint.

GET /reservations/facilities → list facilities ordered by name
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from facilbook.api.deps import get_store
from facilbook.domain.errors import StoreError
from facilbook.domain.facilities import list_facilities
from facilbook.infra.db import Store
from facilbook.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/reservations", tags=["facilities"])


@router.get("/facilities")
def get_facilities(store: Store = Depends(get_store)) -> list[dict]:
    try:
        facilities = list_facilities(store)
    except StoreError as exc:
        logger.error("facility listing failed", extra={"extra_fields": {"error": type(exc).__name__}})
        raise HTTPException(status_code=500, detail="서버 오류가 발생했습니다.") from exc
    return [f.to_dict() for f in facilities]
