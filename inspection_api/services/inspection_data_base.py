"""
Inspection Data API — Abstract Inspection Data Service Interface
=================================================================

What:  The contract route handlers use to read inspection data, and the
       PagedList container the list operation returns.
How:   Concrete implementations inherit from InspectionDataService.
       Route handlers depend only on this interface, resolved through the
       `get_inspection_data_service` FastAPI dependency.
Who:   Implemented by SqlInspectionDataService; replaced by fakes in tests.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, Iterator, List, Optional, TypeVar

from inspection_api.models.inspection_data import InspectionData
from inspection_api.schemas.inspection_data import PaginationMetadata, QueryParameters

T = TypeVar("T")


@dataclass
class PagedList(Generic[T]):
    """
    An ordered page of a larger result set plus its page bookkeeping.

    Iterating yields the items in the order the service produced them.
    """

    items: List[T] = field(default_factory=list)
    current_page: int = 1
    page_size: int = 10
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def metadata(self) -> PaginationMetadata:
        return PaginationMetadata(
            total_count=self.total_count,
            page_size=self.page_size,
            current_page=self.current_page,
            total_pages=self.total_pages,
            has_next=self.has_next,
            has_previous=self.has_previous,
        )

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


class InspectionDataService(ABC):
    """
    Read access to the inspection data store.

    Contract:
        - Lookups return None when no record matches; they never raise for "absent"
        - Any other failure (connection, query) propagates as an exception;
          the caller decides how it is reported
    """

    @abstractmethod
    async def get_inspection_data(
        self, parameters: QueryParameters
    ) -> PagedList[InspectionData]:
        """
        Return one page of inspection data records.

        Args:
            parameters: Page number and page size requested by the client.

        Returns:
            PagedList holding at most `parameters.page_size` records, in a
            stable order, with the total number of records in the store.
        """
        ...

    @abstractmethod
    async def read_by_id(self, id: str) -> Optional[InspectionData]:
        """Return the record with this internal id, or None."""
        ...

    @abstractmethod
    async def read_by_inspection_id(self, inspection_id: str) -> Optional[InspectionData]:
        """Return the record for this external inspection id, or None."""
        ...
