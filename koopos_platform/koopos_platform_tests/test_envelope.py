"""
Tests for the response envelope builders.
"""
import pytest
from pydantic import ValidationError

from koopos_platform.koopos_platform.koopos_service import envelope
from koopos_platform.koopos_platform.koopos_service.errors import ApplicationCode, ServiceError, user_already_exists
from koopos_platform.koopos_platform.koopos_service.schemas import ErrorDetail, SignInResponse


def test_success_without_payload_omits_data():
    body = envelope.to_json(envelope.success())

    assert body == {"responseStatus": {"responseCode": "KPS-000", "responseMessage": "Success"}}


def test_success_with_payload_uses_camel_case():
    body = envelope.to_json(envelope.success(SignInResponse(access_token="abc")))

    assert body["data"] == {"accessToken": "abc"}
    assert "errorDetails" not in body


def test_failure_keeps_detail_order():
    details = [
        ErrorDetail(field="email", message="bad email"),
        ErrorDetail(field="address", message="missing"),
        ErrorDetail(message="no field"),
    ]
    body = envelope.to_json(envelope.failure(ApplicationCode.VALIDATION_ERROR, details))

    assert body["responseStatus"]["responseCode"] == "KPS-400"
    assert body["errorDetails"] == [
        {"field": "email", "message": "bad email"},
        {"field": "address", "message": "missing"},
        {"message": "no field"},
    ]
    assert "data" not in body


def test_from_error_carries_kind_code():
    body = envelope.to_json(envelope.from_error(ServiceError.conflict(user_already_exists())))

    assert body["responseStatus"] == {"responseCode": "KPS-409", "responseMessage": "Resource already exists"}
    assert body["errorDetails"][0]["field"] == "username"


@pytest.mark.parametrize("page_index,size,total", [(0, 10, 0), (0, 5, 12), (2, 5, 12), (7, 3, 12)])
def test_paginated_reports_one_based_page(page_index, size, total):
    body = envelope.to_json(envelope.paginated([], page_index, size, total))

    assert body["detailPages"] == {"page": page_index + 1, "rowPerPage": size, "totalData": total}
    assert body["data"] == []


def test_envelopes_are_immutable():
    response = envelope.success()

    with pytest.raises(ValidationError):
        response.data = "changed"
