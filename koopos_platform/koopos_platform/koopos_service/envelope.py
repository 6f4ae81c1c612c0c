"""
Response envelope builders.

All endpoints answer with the same envelope shape:

    {"responseStatus": {"responseCode": ..., "responseMessage": ...},
     "data": ..., "errorDetails": [...], "detailPages": {...}}

Optional members are left unset here and dropped at serialization time
(``exclude_none``), never sent as null.
"""
from typing import Any, Dict, Iterable, List, Optional, TypeVar

from .errors import ApplicationCode, ServiceError
from .schemas import ErrorDetail, PaginatedResponse, PagingMetadata, ResponseStatus, RestResponse

T = TypeVar("T")


def response_status(code: ApplicationCode) -> ResponseStatus:
    return ResponseStatus(response_code=code.value, response_message=code.message)


def success(data: Optional[Any] = None) -> RestResponse:
    return RestResponse(response_status=response_status(ApplicationCode.SUCCESS), data=data)


def failure(code: ApplicationCode, error_details: Optional[Iterable[ErrorDetail]] = None) -> RestResponse:
    details = list(error_details or [])
    return RestResponse(response_status=response_status(code), error_details=details or None)


def from_error(error: ServiceError) -> RestResponse:
    return failure(error.code, error.details)


def paginated(items: List[T], page_index: int, size: int, total: int) -> PaginatedResponse:
    """Wrap one page of results.

    Args:
        items: The rows of the requested page, already converted to DTOs
        page_index: 0-based page index as given to the store
        size: Requested page size, echoed back as ``rowPerPage``
        total: Total number of rows across all pages

    Returns:
        PaginatedResponse whose ``detailPages.page`` is 1-based
    """
    return PaginatedResponse(
        response_status=response_status(ApplicationCode.SUCCESS),
        data=list(items),
        detail_pages=PagingMetadata(page=page_index + 1, row_per_page=size, total_data=total),
    )


def to_json(envelope) -> Dict[str, Any]:
    """JSON-ready dict with camelCase keys and absent members dropped."""
    return envelope.model_dump(mode="json", by_alias=True, exclude_none=True)
