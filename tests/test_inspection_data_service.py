"""
Inspection Data API — SqlInspectionDataService Tests
=====================================================

What:  Tests for the default SQLAlchemy-backed service.
How:   Runs against an in-memory SQLite database (aiosqlite driver), created
       fresh for every test.

What we test:
    ✅ Pages are newest first and sized by the query parameters
    ✅ Total count and page bookkeeping
    ✅ Pages past the end are empty
    ✅ Lookups by id and inspection id; None when absent
    ✅ Unknown status strings load without error
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from inspection_api.database import Base
from inspection_api.models.inspection_data import InspectionData, WorkflowStatus
from inspection_api.schemas.inspection_data import QueryParameters
from inspection_api.services.inspection_data_base import PagedList
from inspection_api.services.inspection_data_service import SqlInspectionDataService

BASE_TIME = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as s:
        yield s

    await engine.dispose()


@pytest_asyncio.fixture
async def seeded(session):
    """Five records, insp-0 oldest ... insp-4 newest."""
    records = [
        InspectionData(
            id=f"id-{i}",
            inspection_id=f"insp-{i}",
            installation_code="JSV",
            anonymized_uri=f"https://blob/{i}.jpg",
            anonymizer_workflow_status=WorkflowStatus.EXIT_SUCCESS.value,
            date_created=BASE_TIME + timedelta(hours=i),
        )
        for i in range(5)
    ]
    session.add_all(records)
    await session.commit()
    return records


class TestGetInspectionData:

    @pytest.mark.asyncio
    async def test_first_page_newest_first(self, session, seeded):
        service = SqlInspectionDataService(session)

        page = await service.get_inspection_data(QueryParameters(page_number=1, page_size=2))

        assert [r.inspection_id for r in page] == ["insp-4", "insp-3"]
        assert page.total_count == 5
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_previous is False

    @pytest.mark.asyncio
    async def test_last_partial_page(self, session, seeded):
        service = SqlInspectionDataService(session)

        page = await service.get_inspection_data(QueryParameters(page_number=3, page_size=2))

        assert [r.inspection_id for r in page] == ["insp-0"]
        assert page.has_next is False
        assert page.has_previous is True

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, session, seeded):
        service = SqlInspectionDataService(session)

        page = await service.get_inspection_data(QueryParameters(page_number=10, page_size=2))

        assert len(page) == 0
        assert page.total_count == 5

    @pytest.mark.asyncio
    async def test_empty_store(self, session):
        service = SqlInspectionDataService(session)

        page = await service.get_inspection_data(QueryParameters())

        assert list(page) == []
        assert page.total_count == 0
        assert page.total_pages == 0


class TestLookups:

    @pytest.mark.asyncio
    async def test_read_by_id(self, session, seeded):
        service = SqlInspectionDataService(session)

        record = await service.read_by_id("id-2")

        assert record is not None
        assert record.inspection_id == "insp-2"

    @pytest.mark.asyncio
    async def test_read_by_inspection_id(self, session, seeded):
        service = SqlInspectionDataService(session)

        record = await service.read_by_inspection_id("insp-3")

        assert record is not None
        assert record.id == "id-3"

    @pytest.mark.asyncio
    async def test_absent_records_are_none(self, session, seeded):
        service = SqlInspectionDataService(session)

        assert await service.read_by_id("insp-3") is None
        assert await service.read_by_inspection_id("id-3") is None

    @pytest.mark.asyncio
    async def test_unknown_status_loads(self, session):
        session.add(
            InspectionData(
                id="odd",
                inspection_id="insp-odd",
                installation_code="JSV",
                anonymizer_workflow_status="Paused",
                date_created=BASE_TIME,
            )
        )
        await session.commit()
        service = SqlInspectionDataService(session)

        record = await service.read_by_inspection_id("insp-odd")

        assert record.anonymizer_workflow_status == "Paused"
        assert record.workflow_status is None
        assert record.anonymized_uri is None


class TestPagedList:

    def test_iterates_in_order(self):
        page = PagedList(items=["c", "a", "b"], total_count=3, page_size=3)

        assert list(page) == ["c", "a", "b"]
        assert len(page) == 3

    def test_metadata(self):
        page = PagedList(items=[1], current_page=1, page_size=1, total_count=1)

        metadata = page.metadata()

        assert metadata.total_pages == 1
        assert metadata.has_next is False
        assert metadata.has_previous is False
