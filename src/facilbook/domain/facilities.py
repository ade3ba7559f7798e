"""Facility registry: the catalog of bookable resources.

Facilities are seeded once and are read-only afterwards; there is no
create/update/delete surface for them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from facilbook.infra.db import Store, advisory_xact_lock
from facilbook.infra.repositories import facilities_repository as repo
from facilbook.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Facility:
    id: int | None
    name: str
    description: str | None
    max_capacity: int
    hourly_rate: int = 0

    @classmethod
    def from_row(cls, row: tuple) -> "Facility":
        return cls(
            id=row[0],
            name=row[1],
            description=row[2],
            max_capacity=row[3],
            hourly_rate=row[4],
        )

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_FACILITIES: tuple[Facility, ...] = (
    Facility(None, "플레이스테이션", "게임 및 엔터테인먼트 공간", 4, 5000),
    Facility(None, "보드게임", "보드게임 및 카드게임 공간", 8, 3000),
    Facility(None, "강의실", "교육 및 세미나 공간", 30, 10000),
    Facility(None, "체육관", "스포츠 및 운동 공간", 50, 15000),
    Facility(None, "음악실", "음악 연습 및 공연 공간", 20, 8000),
    Facility(None, "도서관", "독서 및 학습 공간", 40, 3000),
)


def list_facilities(store: Store) -> list[Facility]:
    """All facilities ordered by name."""
    with store.txn() as cur:
        rows = repo.select_all_facilities(cur)
    return [Facility.from_row(row) for row in rows]


def seed_default_facilities(
    store: Store,
    catalog: tuple[Facility, ...] = DEFAULT_FACILITIES,
) -> int:
    """Insert the default catalog if the facilities table is empty.

    Safe to call on every start and from several processes at once.

    Returns:
        Number of facilities inserted (0 when the table already had rows).
    """
    with store.txn() as cur:
        advisory_xact_lock(cur, "seed:facilities")
        existing = repo.count_facilities(cur)
        if existing:
            logger.info(
                "facility seed skipped",
                extra={"extra_fields": {"existing": existing}},
            )
            return 0

        for facility in catalog:
            repo.insert_facility(
                cur,
                name=facility.name,
                description=facility.description,
                max_capacity=facility.max_capacity,
                hourly_rate=facility.hourly_rate,
            )

    logger.info("facilities seeded", extra={"extra_fields": {"inserted": len(catalog)}})
    return len(catalog)
