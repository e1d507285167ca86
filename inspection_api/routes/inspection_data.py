"""
Inspection Data API — Inspection Data Route Handlers
=====================================================

What:  Read-only endpoints over inspection data records:
           GET /InspectionData                                   (paged list)
           GET /InspectionData/id/{id}                           (by internal id)
           GET /InspectionData/{inspection_id}                   (by inspection id)
           GET /InspectionData/{inspection_id}/inspection-data-storage-location
How:   Every handler requires any authenticated role, calls the injected
       InspectionDataService, and maps the result to a response.
Who:   Called by the inspection frontend and by downstream analysis jobs.

Error Policy (all four endpoints):
    - Service returns None      → NotFoundError (404), message names the id
    - Service raises anything   → logged here once with traceback, re-raised as
                                  InspectionDataServiceError (500, generic message)
"""

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse
from rfc3986 import uri_reference, validators
from rfc3986.exceptions import RFC3986Exception

from inspection_api.config import settings
from inspection_api.exceptions import InspectionDataServiceError, NotFoundError
from inspection_api.models.inspection_data import InspectionData, WorkflowStatus
from inspection_api.schemas.inspection_data import (
    ErrorResponse,
    InspectionDataResponse,
    QueryParameters,
)
from inspection_api.security import require_any_role
from inspection_api.services.inspection_data_base import InspectionDataService, PagedList
from inspection_api.services.inspection_data_service import get_inspection_data_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/InspectionData",
    tags=["InspectionData"],
    dependencies=[Depends(require_any_role)],
)

_AUTH_RESPONSES = {
    400: {"description": "Invalid request parameters", "model": ErrorResponse},
    401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
    403: {"description": "Caller has no accepted role", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}

# Unreserved, reserved or %HH escapes only; anything else is not well formed
_URI_CHARACTERS = re.compile(r"(?:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=]|%[0-9A-Fa-f]{2})+")

_absolute_uri_validator = (
    validators.Validator()
    .require_presence_of("scheme", "host")
    .check_validity_of("scheme", "host", "port", "path", "query", "fragment")
)

# Status → (HTTP status, body) for every status that does not hand out the link
_PENDING_OR_FAILED = {
    WorkflowStatus.NOT_STARTED: (202, "Anonymization workflow has not started."),
    WorkflowStatus.STARTED: (202, "Anonymization workflow is in progress."),
    WorkflowStatus.EXIT_FAILURE: (422, "Anonymization workflow failed."),
}
UNKNOWN_WORKFLOW_STATUS = (500, "Unknown workflow status.")


def query_parameters(
    page_number: int = Query(default=1, ge=1, description="1-based page number"),
    page_size: Optional[int] = Query(
        default=None,
        ge=1,
        description="Records per page (defaults to DEFAULT_PAGE_SIZE, max MAX_PAGE_SIZE)",
    ),
) -> QueryParameters:
    """Build QueryParameters from the query string, applying configured page limits."""
    size = page_size if page_size is not None else settings.default_page_size
    return QueryParameters(
        page_number=page_number,
        page_size=min(size, settings.max_page_size),
    )


def is_well_formed_absolute_uri(value: Optional[str]) -> bool:
    """
    True when the raw string is an RFC 3986 absolute URI with an authority
    (`scheme://host...`). The value is checked as stored, never normalized.
    """
    if not value or not _URI_CHARACTERS.fullmatch(value):
        return False
    # A fragment may not itself contain '#'
    if value.count("#") > 1:
        return False
    try:
        uri = uri_reference(value)
        _absolute_uri_validator.validate(uri)
        return bool(uri.host)
    except RFC3986Exception:
        return False


async def _call_service(description: str, call):
    """Await a service call; log and wrap anything it raises."""
    try:
        return await call
    except Exception as e:
        logger.error("Error during GET of %s", description, exc_info=True)
        raise InspectionDataServiceError(
            context={"operation": description, "error_type": type(e).__name__},
        ) from e


@router.get(
    "",
    response_model=List[InspectionDataResponse],
    responses={
        200: {"description": "One page of inspection data records"},
        **_AUTH_RESPONSES,
    },
    summary="List all inspection data",
    description=(
        "Returns one page of inspection data records, newest first. Page "
        "bookkeeping is returned in the X-Pagination header."
    ),
)
async def get_all_inspection_data(
    response: Response,
    parameters: QueryParameters = Depends(query_parameters),
    service: InspectionDataService = Depends(get_inspection_data_service),
) -> List[InspectionDataResponse]:
    inspection_data: PagedList[InspectionData] = await _call_service(
        "inspection data from database",
        service.get_inspection_data(parameters),
    )

    response.headers["X-Pagination"] = inspection_data.metadata().to_header()

    return [InspectionDataResponse.from_inspection_data(item) for item in inspection_data]


@router.get(
    "/id/{id}",
    response_model=InspectionDataResponse,
    responses={
        200: {"description": "The inspection data record"},
        404: {"description": "No record with this id", "model": ErrorResponse},
        **_AUTH_RESPONSES,
    },
    summary="Get inspection data by id",
)
async def get_inspection_data_by_id(
    id: str,
    service: InspectionDataService = Depends(get_inspection_data_service),
) -> InspectionDataResponse:
    inspection_data = await _call_service(
        "inspection data from database",
        service.read_by_id(id),
    )
    if inspection_data is None:
        raise NotFoundError(
            message=f"Could not find inspection data with id {id}",
            resource_id=id,
        )
    return InspectionDataResponse.from_inspection_data(inspection_data)


@router.get(
    "/{inspection_id}",
    response_model=InspectionDataResponse,
    responses={
        200: {"description": "The inspection data record"},
        404: {"description": "No record for this inspection", "model": ErrorResponse},
        **_AUTH_RESPONSES,
    },
    summary="Get inspection data by inspection id",
)
async def get_inspection_data_by_inspection_id(
    inspection_id: str,
    service: InspectionDataService = Depends(get_inspection_data_service),
) -> InspectionDataResponse:
    inspection_data = await _call_service(
        "inspection data from database",
        service.read_by_inspection_id(inspection_id),
    )
    if inspection_data is None:
        raise NotFoundError(
            message=f"Could not find inspection data with inspection id {inspection_id}",
            resource_id=inspection_id,
        )
    return InspectionDataResponse.from_inspection_data(inspection_data)


@router.get(
    "/{inspection_id}/inspection-data-storage-location",
    responses={
        200: {"description": "Link to the anonymized image", "content": {"application/json": {"schema": {"type": "string"}}}},
        202: {"description": "Anonymization has not finished yet"},
        404: {"description": "No record, or no usable link, for this inspection", "model": ErrorResponse},
        422: {"description": "Anonymization workflow failed"},
        **_AUTH_RESPONSES,
    },
    summary="Get link to the anonymized image of an inspection",
    description=(
        "Returns the blob storage link of the anonymized image once the "
        "anonymization workflow has exited successfully; otherwise reports "
        "the workflow state."
    ),
)
async def download_uri_from_inspection_id(
    inspection_id: str,
    service: InspectionDataService = Depends(get_inspection_data_service),
) -> JSONResponse:
    inspection = await _call_service(
        "image location from blob store",
        service.read_by_inspection_id(inspection_id),
    )
    if inspection is None:
        raise NotFoundError(
            message=f"Could not find inspection data with inspection id {inspection_id}",
            resource_id=inspection_id,
        )

    download_uri = inspection.anonymized_uri

    # Checked before the status: a missing link is 404 whatever the workflow says
    if not is_well_formed_absolute_uri(download_uri):
        raise NotFoundError(
            message=f"Could not find uri for inspection {inspection_id}",
            resource_id=inspection_id,
        )

    status = inspection.workflow_status
    if status is WorkflowStatus.EXIT_SUCCESS:
        return JSONResponse(status_code=200, content=download_uri)

    status_code, message = _PENDING_OR_FAILED.get(status, UNKNOWN_WORKFLOW_STATUS)
    if status is None:
        logger.warning(
            "Inspection %s has unknown workflow status '%s'",
            inspection_id,
            inspection.anonymizer_workflow_status,
        )
    return JSONResponse(status_code=status_code, content=message)
