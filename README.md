# agentplatform

Shared building blocks for the services of an agent platform:

- **`agentplatform.logger`**: structured logging to a stream, as JSON objects or `key=value` text lines, with levels, option functions and a no-op logger.
- **`agentplatform.api`**: a standard JSON reply envelope (`request_id`, `status`, `data`, `error`, `meta`) with helpers for the common HTTP status codes.
- **`agentplatform.httpclient`**: an HTTP client built on `requests` with a base URL, default headers, a timeout, retries with back-off and JSON helpers.

## Installation

```
pip install agentplatform
```

To run the test suite:

```
pip install "agentplatform[test]"
pytest
```

## Logging

```python
import io
from agentplatform.logger import Level, new_json, new_with_options, with_level, with_text_format

buf = io.StringIO()
log = new_json(buf, Level.INFO)
log.info("agent created", "agent_id", "agent-1")
# buf now holds one JSON line with "time", "level", "msg" and "agent_id"

debug_log = new_with_options(with_level(Level.DEBUG), with_text_format())
debug_log.debug("starting up")   # written to stdout as key=value text
```

Key/value pairs follow the message as alternating arguments; a key that is not a string, or one left without a value, is written under `!BADKEY`.

Levels are `Level.DEBUG`, `Level.INFO`, `Level.WARN` and `Level.ERROR`; records below the configured level are dropped, and `Logger.enabled(level)` reports whether a level would be written.

Loggers are built with `new_logger(config)` from a `LoggerConfig`, or with the shortcuts `new_with_options`, `new_with_format`, `new_json`, `new_text`, `new_default`, `new_json_default` and `new_text_default`. `default_config()` gives INFO level, stdout, JSON and RFC 3339 time. The options are `with_level`, `with_output`, `with_format`, `with_source` (adds the caller's function, file and line under `source`), `with_time`, `with_time_format` (a `strftime` format; when it differs from RFC 3339 the record also carries `time_formatted`), `with_json_format`, `with_text_format`, `with_stdout` and `with_stderr`. Any format other than `"text"` writes JSON.

`noop_logger()` returns a logger that discards everything.

## API replies

```python
from agentplatform.api import Api, ErrorDetail, Meta, Pagination

api = Api()

reply = api.success({"key": "value"}, request_id="req-1")
reply.status_code   # 200
reply.headers       # {"Content-Type": "application/json"}
reply.json()        # {"request_id": "req-1", "status": "success", "data": {"key": "value"}}

api.not_found("agent not found", request_id="req-2").status_code   # 404

api.validation_error(
    [ErrorDetail(field="email", message="Email is invalid")],
    request_id="req-3",
).status_code   # 422

meta = Meta(pagination=Pagination(page=1, limit=10, total=100, total_pages=10,
                                  has_next_page=True, has_prev_page=False))
api.success_with_meta(["a", "b"], meta, request_id="req-4")
```

Every method returns a `JsonReply` with `status_code`, `headers` and a JSON `body` string; `JsonReply.json()` decodes the body. Members that are unset (`data`, `error`, `meta`, and empty error `details`) are left out of the body.

| Method | Status | Error code |
| --- | --- | --- |
| `success`, `success_with_code`, `success_with_meta`, `success_with_code_and_meta` | 200 | |
| `created` | 201 | |
| `bad_request` | 400 | `BAD_REQUEST` |
| `unauthorized` | 401 | `UNAUTHORIZED` |
| `forbidden` | 403 | `FORBIDDEN` |
| `not_found` | 404 | `NOT_FOUND` |
| `conflict` | 409 | `CONFLICT` |
| `validation_error` | 422 | `VALIDATION_ERROR` |
| `internal_server_error` | 500 | `INTERNAL_SERVER_ERROR` |

`error(status_code, api_error)` sends any status with an `ApiError`, and `build_response` returns the `ApiResponse` envelope itself. Data objects with a `to_dict()` method, and dataclasses, are encoded as JSON objects.

## HTTP client

```python
from agentplatform.httpclient import HttpClient, HttpClientError

client = HttpClient(
    "https://api.example.com",
    headers={"Authorization": "Bearer token"},
    timeout=10.0,
    retry_count=2,
)

try:
    agents = client.get_json("/agents")
    created = client.post_json("/agents", {"agent_name": "Acme"})
except HttpClientError as exc:
    print("request failed:", exc, exc.status_code, exc.body)
```

The URL of each request is the base URL followed by the path. Default headers are sent with every request and per-request headers override them; requests with a body get `Content-Type: application/json`.

`get`, `post`, `put`, `delete` and `request` return the `requests.Response`. `get_json` and `post_json` return the decoded JSON body and raise `HttpClientError` on a status outside 2xx or a body that is not valid JSON. A request that cannot be sent at all (connection error, timeout) is retried `retry_count` times, waiting 2^n seconds plus a short jitter between attempts, and then raises `HttpClientError`.

A `requests.Session` may be passed as `session=`, and a `Logger` from `agentplatform.logger` as `logger=` to record each request, retry and response.

## What this package does not do

It has no request or response contracts and no input validation, and it runs no server: `Api` only builds replies for a web framework to send, and `HttpClient` only sends requests.