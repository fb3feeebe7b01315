from __future__ import annotations

import json
import re
import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError
from .tracing import TRACE_HEADER, TraceContext

ResponseHook = Callable[[requests.Response], None]

_CONTENT_RANGE_TOTAL = re.compile(r"/(\d+)$")


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


def parse_content_range(value: str | None) -> int | None:
    """Return the total from a PostgREST ``Content-Range`` header (``0-9/42`` or ``*/42``)."""
    if not value:
        return None
    match = _CONTENT_RANGE_TOTAL.search(value.strip())
    if match is None:
        return None
    return int(match.group(1))


@dataclass
class HttpClient:
    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None
    after_response: ResponseHook | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.backend_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | list[Any] | None = None,
        params: dict[str, Any] | None = None,
        response_hook: ResponseHook | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        response = self._send(
            method,
            path,
            headers=headers,
            json_body=json_body,
            params=params,
            module=module,
            operation=operation,
        )
        if response_hook:
            response_hook(response)
        if not response.content:
            return None
        return response.json()

    def count(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "count",
    ) -> int:
        request_headers = {"Prefer": "count=exact"}
        if headers:
            request_headers.update(headers)
        response = self._send(
            "HEAD",
            path,
            headers=request_headers,
            params=params,
            module=module,
            operation=operation,
        )
        total = parse_content_range(response.headers.get("Content-Range"))
        return total or 0

    def _send(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None,
        params: dict[str, Any] | None,
        module: str,
        operation: str,
        json_body: dict[str, Any] | list[Any] | None = None,
    ) -> requests.Response:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json", "apikey": self.config.anon_key}
        if headers:
            request_headers.update(headers)
        # Fresh id per request; the shared context only reports the last one.
        trace_context = TraceContext()
        request_headers[TRACE_HEADER] = trace_context.ensure()

        normalized_method = method.upper()
        url = self._build_url(path)

        can_retry = normalized_method in {"GET", "HEAD"}
        attempts = self.config.retries + 1 if can_retry else 1

        started = time.monotonic()
        last_transport_error: Exception | None = None
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    params=params,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                last_transport_error = exc
                if attempt >= attempts - 1:
                    self._record_operation(module, operation, started, "error", trace_context.trace_id)
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=trace_context.trace_id,
                        status_code=0,
                        raw_payload=None,
                    ) from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
                last_transport_error = None
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError(f"HTTP request failed without response: {last_transport_error}")

        if self.after_response:
            self.after_response(response)
        trace_context.update_from_headers(response.headers)
        if response.ok:
            self._record_operation(module, operation, started, "success", trace_context.trace_id)
            return response

        payload: Any = None
        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            payload = {"message": response.text}
        if not isinstance(payload, dict):
            payload = {"message": str(payload)}
        trace_context.update_from_payload(payload)
        self._record_operation(module, operation, started, "error", trace_context.trace_id)
        raise map_error(response.status_code, payload, trace_context.trace_id)

    def _record_operation(self, module: str, operation: str, started: float, result: str, trace_id: str | None) -> None:
        if self.trace is not None:
            self.trace.trace_id = trace_id
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=trace_id,
        )
