import pytest

from agentplatform.api import (
    STATUS_ERROR,
    STATUS_SUCCESS,
    Api,
    ApiError,
    ErrorDetail,
    Meta,
    Pagination,
)


@pytest.fixture
def api():
    return Api()


def _meta():
    return Meta(
        pagination=Pagination(
            page=1, limit=10, total=100, total_pages=10, has_next_page=True, has_prev_page=False
        )
    )


def test_success(api):
    reply = api.success({"key": "value"})
    assert reply.status_code == 200
    assert reply.headers["Content-Type"] == "application/json"
    body = reply.json()
    assert body["status"] == STATUS_SUCCESS
    assert body["data"] == {"key": "value"}
    assert "error" not in body


def test_created(api):
    reply = api.created({"key": "value"})
    assert reply.status_code == 201
    assert reply.headers["Content-Type"] == "application/json"
    body = reply.json()
    assert body["status"] == STATUS_SUCCESS
    assert body["data"] == {"key": "value"}


def test_error(api):
    reply = api.error(400, ApiError(code="TEST_ERROR", message="Test error message"))
    assert reply.status_code == 400
    body = reply.json()
    assert body["status"] == STATUS_ERROR
    assert body["error"]["code"] == "TEST_ERROR"
    assert body["error"]["message"] == "Test error message"
    assert "data" not in body


@pytest.mark.parametrize(
    "method, status, code",
    [
        ("bad_request", 400, "BAD_REQUEST"),
        ("unauthorized", 401, "UNAUTHORIZED"),
        ("forbidden", 403, "FORBIDDEN"),
        ("not_found", 404, "NOT_FOUND"),
        ("conflict", 409, "CONFLICT"),
        ("internal_server_error", 500, "INTERNAL_SERVER_ERROR"),
    ],
)
def test_error_shortcuts(api, method, status, code):
    reply = getattr(api, method)("some message")
    assert reply.status_code == status
    body = reply.json()
    assert body["error"]["code"] == code
    assert body["error"]["message"] == "some message"
    assert "details" not in body["error"]


def test_validation_error(api):
    details = [
        ErrorDetail(field="name", message="Name is required"),
        ErrorDetail(field="email", message="Email is invalid"),
    ]
    reply = api.validation_error(details)
    assert reply.status_code == 422
    body = reply.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["message"] == "Validation failed"
    assert len(body["error"]["details"]) == 2
    assert body["error"]["details"][0] == {"field": "name", "message": "Name is required"}


def test_success_with_meta(api):
    reply = api.success_with_meta("test data", _meta())
    body = reply.json()
    assert body["meta"]["pagination"]["page"] == 1
    assert body["meta"]["pagination"]["has_next_page"] is True
    assert body["data"] == "test data"


def test_request_id_is_included(api):
    reply = api.success("x", request_id="test-request-id")
    assert reply.json()["request_id"] == "test-request-id"


def test_request_id_defaults_to_empty(api):
    assert api.not_found("gone").json()["request_id"] == ""


def test_build_response(api):
    meta = Meta()
    api_error = ApiError(code="TEST")
    response = api.build_response(STATUS_SUCCESS, "test data", meta, api_error)
    assert response.status == STATUS_SUCCESS
    assert response.data == "test data"
    assert response.meta is meta
    assert response.error is api_error


def test_success_with_code(api):
    reply = api.success_with_code({"key": "value"})
    assert reply.status_code == 200
    assert reply.headers["Content-Type"] == "application/json"
    body = reply.json()
    assert body["status"] == STATUS_SUCCESS
    assert body["data"] == {"key": "value"}


def test_success_with_code_and_meta(api):
    body = api.success_with_code_and_meta("test data", _meta()).json()
    assert body["meta"]["pagination"]["page"] == 1
    assert body["status"] == STATUS_SUCCESS


def test_empty_meta_serializes_without_pagination(api):
    body = api.success_with_meta("d", Meta()).json()
    assert body["meta"] == {}


def test_body_ends_with_newline(api):
    assert api.success(1).body.endswith("\n")


def test_dataclass_data_is_serialized(api):
    body = api.success(ErrorDetail(field="f", message="m")).json()
    assert body["data"] == {"field": "f", "message": "m"}