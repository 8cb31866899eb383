"""Standard JSON response envelopes for HTTP handlers."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass
class Pagination:
    page: int = 0
    limit: int = 0
    total: int = 0
    total_pages: int = 0
    has_next_page: bool = False
    has_prev_page: bool = False

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass
class Meta:
    pagination: Pagination | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({"pagination": self.pagination.to_dict() if self.pagination else None})


@dataclass
class ErrorDetail:
    field: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message}


@dataclass
class ApiError:
    code: str
    message: str = ""
    details: list[ErrorDetail] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            result["details"] = [detail.to_dict() for detail in self.details]
        return result


@dataclass
class ApiResponse:
    request_id: str
    status: str
    data: Any = None
    error: ApiError | None = None
    meta: Meta | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, leaving out empty members."""
        return _drop_none(
            {
                "request_id": self.request_id,
                "status": self.status,
                "data": self.data,
                "error": self.error.to_dict() if self.error else None,
                "meta": self.meta.to_dict() if self.meta else None,
            }
        )


def _encode(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


@dataclass
class JsonReply:
    """An HTTP reply with a status code, headers and a JSON body."""

    status_code: int
    headers: dict[str, str]
    body: str

    def json(self) -> Any:
        return json.loads(self.body)


class Api:
    """Builds standard success and error replies."""

    def build_response(
        self,
        status: str,
        data: Any = None,
        meta: Meta | None = None,
        error: ApiError | None = None,
        request_id: str = "",
    ) -> ApiResponse:
        return ApiResponse(request_id=request_id, status=status, data=data, error=error, meta=meta)

    def _reply(self, status_code: int, response: ApiResponse) -> JsonReply:
        body = json.dumps(response.to_dict(), default=_encode) + "\n"
        return JsonReply(int(status_code), {"Content-Type": "application/json"}, body)

    def success(self, data: Any, request_id: str = "") -> JsonReply:
        return self._reply(HTTPStatus.OK, self.build_response(STATUS_SUCCESS, data, request_id=request_id))

    def created(self, data: Any, request_id: str = "") -> JsonReply:
        return self._reply(HTTPStatus.CREATED, self.build_response(STATUS_SUCCESS, data, request_id=request_id))

    def success_with_code(self, data: Any, request_id: str = "") -> JsonReply:
        return self.success(data, request_id)

    def success_with_meta(self, data: Any, meta: Meta | None, request_id: str = "") -> JsonReply:
        response = self.build_response(STATUS_SUCCESS, data, meta, request_id=request_id)
        return self._reply(HTTPStatus.OK, response)

    def success_with_code_and_meta(self, data: Any, meta: Meta | None, request_id: str = "") -> JsonReply:
        return self.success_with_meta(data, meta, request_id)

    def error(self, status_code: int, api_error: ApiError | None, request_id: str = "") -> JsonReply:
        response = self.build_response(STATUS_ERROR, None, None, api_error, request_id)
        return self._reply(status_code, response)

    def bad_request(self, message: str, request_id: str = "") -> JsonReply:
        return self.error(HTTPStatus.BAD_REQUEST, ApiError("BAD_REQUEST", message), request_id)

    def unauthorized(self, message: str, request_id: str = "") -> JsonReply:
        return self.error(HTTPStatus.UNAUTHORIZED, ApiError("UNAUTHORIZED", message), request_id)

    def forbidden(self, message: str, request_id: str = "") -> JsonReply:
        return self.error(HTTPStatus.FORBIDDEN, ApiError("FORBIDDEN", message), request_id)

    def not_found(self, message: str, request_id: str = "") -> JsonReply:
        return self.error(HTTPStatus.NOT_FOUND, ApiError("NOT_FOUND", message), request_id)

    def conflict(self, message: str, request_id: str = "") -> JsonReply:
        return self.error(HTTPStatus.CONFLICT, ApiError("CONFLICT", message), request_id)

    def internal_server_error(self, message: str, request_id: str = "") -> JsonReply:
        return self.error(
            HTTPStatus.INTERNAL_SERVER_ERROR, ApiError("INTERNAL_SERVER_ERROR", message), request_id
        )

    def validation_error(self, details: list[ErrorDetail], request_id: str = "") -> JsonReply:
        api_error = ApiError("VALIDATION_ERROR", "Validation failed", list(details))
        return self.error(HTTPStatus.UNPROCESSABLE_ENTITY, api_error, request_id)