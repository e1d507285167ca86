"""
Inspection Data API — Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the wire contract of the API.
How:   FastAPI uses these models to validate query parameters, serialize
       responses and generate the OpenAPI documentation.
Who:   Used by route handlers as return types and by the service as input.

Schemas are separate from the SQLAlchemy model so that only the fields
listed here ever leave the service (blob locations stay internal).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from inspection_api.models.inspection_data import InspectionData


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class InspectionDataResponse(BaseModel):
    """
    What:  Read projection of one inspection data record.
    Who:   Returned by the list, by-id and by-inspection-id endpoints.

    Neither blob URI is part of the projection; the anonymized image link is
    only handed out through the storage-location endpoint, which checks the
    workflow status first.
    """
    id: str = Field(description="Internal identifier")
    inspection_id: str = Field(description="Identifier of the inspection")
    installation_code: str = Field(description="Installation the inspection belongs to")
    anonymizer_workflow_status: str = Field(
        description="Anonymization workflow status: NotStarted, Started, ExitSuccess, ExitFailure"
    )
    date_created: datetime = Field(description="When the record was created (UTC)")

    model_config = {"from_attributes": True}

    @classmethod
    def from_inspection_data(cls, inspection_data: InspectionData) -> "InspectionDataResponse":
        """Pure mapping from the domain record to the wire representation."""
        return cls(
            id=inspection_data.id,
            inspection_id=inspection_data.inspection_id,
            installation_code=inspection_data.installation_code,
            anonymizer_workflow_status=inspection_data.anonymizer_workflow_status,
            date_created=inspection_data.date_created,
        )


class PaginationMetadata(BaseModel):
    """
    What:  Page bookkeeping for the list endpoint.
    How:   Serialized into the `X-Pagination` response header (not the body),
           so the body stays a plain ordered list of records.
    """
    total_count: int = Field(serialization_alias="TotalCount")
    page_size: int = Field(serialization_alias="PageSize")
    current_page: int = Field(serialization_alias="CurrentPage")
    total_pages: int = Field(serialization_alias="TotalPages")
    has_next: bool = Field(serialization_alias="HasNext")
    has_previous: bool = Field(serialization_alias="HasPrevious")

    def to_header(self) -> str:
        return self.model_dump_json(by_alias=True)


# ══════════════════════════════════════════════════════════════════════════
# Query Parameter Models
# ══════════════════════════════════════════════════════════════════════════


class QueryParameters(BaseModel):
    """
    What:  Paging input for the list endpoint.
    How:   Built from the query string by the `query_parameters` dependency in
           the routes module; forwarded to the service untouched.

    Parameters:
        page_number: 1-based page index
        page_size:   Records per page (bounded by MAX_PAGE_SIZE)
    """
    page_number: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(default=10, ge=1, description="Records per page")

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


# ══════════════════════════════════════════════════════════════════════════
# Error and Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for errors raised to the global handlers.

    Example:
        {
            "error": "not_found",
            "message": "Could not find inspection data with id abc",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
