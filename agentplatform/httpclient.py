"""HTTP client with a base URL, default headers, retries and JSON helpers."""

from __future__ import annotations

import dataclasses
import json
import time
from typing import IO, Any, Mapping

import requests

from agentplatform.logger import Logger

DEFAULT_TIMEOUT = 30.0

Body = bytes | str | IO[bytes] | IO[str] | None


class HttpClientError(Exception):
    """Raised when a request cannot be sent or its reply cannot be used."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def _encode(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _marshal(data: Any) -> bytes:
    try:
        return json.dumps(data, default=_encode).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise HttpClientError(f"failed to marshal request body: {exc}") from exc


class HttpClient:
    """Sends requests relative to a base URL with shared default headers.

    Failed sends (connection errors, timeouts) are retried ``retry_count``
    times with an exponential back-off plus a small jitter.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Mapping[str, str] | None = None,
        retry_count: int = 0,
        session: requests.Session | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._headers = dict(headers or {})
        self._retry_count = retry_count
        self._session = session if session is not None else requests.Session()
        self._logger = logger

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def retry_count(self) -> int:
        return self._retry_count

    @property
    def logger(self) -> Logger | None:
        return self._logger

    @property
    def default_headers(self) -> dict[str, str]:
        return dict(self._headers)

    def get(self, path: str, headers: Mapping[str, str] | None = None) -> requests.Response:
        return self.request("GET", path, None, headers)

    def post(self, path: str, data: Any, headers: Mapping[str, str] | None = None) -> requests.Response:
        return self.request("POST", path, _marshal(data), headers)

    def put(self, path: str, data: Any, headers: Mapping[str, str] | None = None) -> requests.Response:
        return self.request("PUT", path, _marshal(data), headers)

    def delete(self, path: str, headers: Mapping[str, str] | None = None) -> requests.Response:
        return self.request("DELETE", path, None, headers)

    def request(
        self,
        method: str,
        path: str,
        body: Body = None,
        headers: Mapping[str, str] | None = None,
    ) -> requests.Response:
        """Send ``body`` with ``method`` to the base URL joined with ``path``."""
        url = self._base_url + path
        payload = body.read() if hasattr(body, "read") else body

        merged: dict[str, str] = {}
        if payload is not None:
            merged["Content-Type"] = "application/json"
        merged.update(self._headers)
        merged.update(headers or {})

        if self._logger is not None:
            self._logger.info("HTTP request", "method", method, "url", url, "headers", dict(headers or {}))

        last_error: requests.RequestException | None = None
        response: requests.Response | None = None
        attempts = max(self._retry_count, 0) + 1
        for attempt in range(attempts):
            try:
                response = self._session.request(
                    method, url, data=payload, headers=merged, timeout=self._timeout
                )
                last_error = None
                break
            except requests.RequestException as exc:
                last_error = exc
                if attempt == attempts - 1:
                    break
                time.sleep(2**attempt + (attempt + 1) * 0.1)
                if self._logger is not None:
                    self._logger.info("Retrying HTTP request", "attempt", attempt + 1, "error", str(exc))

        if last_error is not None or response is None:
            message = f"request failed after {self._retry_count} retries"
            if self._logger is not None:
                self._logger.error(message, "method", method, "url", url, "error", str(last_error))
            raise HttpClientError(f"{message}: {last_error}") from last_error

        if self._logger is not None:
            self._logger.info(
                "HTTP response",
                "method", method,
                "url", url,
                "status", f"{response.status_code} {response.reason or ''}".strip(),
                "statusCode", response.status_code,
            )
        return response

    def get_json(self, path: str, headers: Mapping[str, str] | None = None) -> Any:
        """GET ``path`` and return its decoded JSON body."""
        return self._decode(path, self.get(path, headers))

    def post_json(self, path: str, data: Any, headers: Mapping[str, str] | None = None) -> Any:
        """POST ``data`` as JSON to ``path`` and return the decoded JSON reply."""
        try:
            payload = _marshal(data)
        except HttpClientError as exc:
            if self._logger is not None:
                self._logger.error("Failed to marshal request body", "path", path, "error", str(exc))
            raise
        return self._decode(path, self.request("POST", path, payload, headers))

    def _decode(self, path: str, response: requests.Response) -> Any:
        with response:
            text = response.text
            if not 200 <= response.status_code < 300:
                if self._logger is not None:
                    self._logger.error(
                        "HTTP request failed", "path", path, "status", response.status_code, "body", text
                    )
                raise HttpClientError(
                    f"request failed with status: {response.status_code}, body: {text}",
                    status_code=response.status_code,
                    body=text,
                )
            try:
                return json.loads(text)
            except ValueError as exc:
                if self._logger is not None:
                    self._logger.error("Failed to unmarshal response", "path", path, "error", str(exc))
                raise HttpClientError(
                    f"failed to unmarshal response: {exc}", status_code=response.status_code, body=text
                ) from exc