"""
Inspection Data API — SQLAlchemy Inspection Data Service
=========================================================

What:  Default InspectionDataService implementation, reading the
       `inspection_data` table through an async SQLAlchemy session.
How:   One instance per request, bound to that request's session by the
       `get_inspection_data_service` dependency.
Who:   Injected into the inspection data route handlers.

Ordering:
    Pages are ordered newest first (date_created DESC), with the id as a
    tie-breaker so that paging is stable across requests.
"""

import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inspection_api.database import get_db_session
from inspection_api.models.inspection_data import InspectionData
from inspection_api.schemas.inspection_data import QueryParameters
from inspection_api.services.inspection_data_base import InspectionDataService, PagedList

logger = logging.getLogger(__name__)


class SqlInspectionDataService(InspectionDataService):
    """Reads inspection data records from the relational store."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_inspection_data(
        self, parameters: QueryParameters
    ) -> PagedList[InspectionData]:
        """
        Offset-paged listing.

        Query plan:
            SELECT * FROM inspection_data
            ORDER BY date_created DESC, id LIMIT :page_size OFFSET :offset
            → Uses idx_inspection_data_date_created
            SELECT count(id) FROM inspection_data
        """
        query = (
            select(InspectionData)
            .order_by(desc(InspectionData.date_created), InspectionData.id)
            .offset(parameters.offset)
            .limit(parameters.page_size)
        )
        result = await self.db.execute(query)
        items = list(result.scalars().all())

        count_result = await self.db.execute(select(func.count(InspectionData.id)))
        total_count = count_result.scalar() or 0

        logger.debug(
            "Loaded page %d (size %d): %d of %d inspection data records",
            parameters.page_number,
            parameters.page_size,
            len(items),
            total_count,
        )

        return PagedList(
            items=items,
            current_page=parameters.page_number,
            page_size=parameters.page_size,
            total_count=total_count,
        )

    async def read_by_id(self, id: str) -> Optional[InspectionData]:
        result = await self.db.execute(
            select(InspectionData).where(InspectionData.id == id)
        )
        return result.scalar_one_or_none()

    async def read_by_inspection_id(self, inspection_id: str) -> Optional[InspectionData]:
        result = await self.db.execute(
            select(InspectionData).where(InspectionData.inspection_id == inspection_id)
        )
        return result.scalar_one_or_none()


def get_inspection_data_service(
    db: AsyncSession = Depends(get_db_session),
) -> InspectionDataService:
    """
    FastAPI dependency resolving the inspection data service for a request.

    Tests and alternative deployments swap the implementation with
    `app.dependency_overrides[get_inspection_data_service]`.
    """
    return SqlInspectionDataService(db)
