from __future__ import annotations

import time
import uuid
from typing import Any, Dict, Iterable, List, Tuple

import structlog

from tripsplit import settings

logger = structlog.get_logger(__name__)

SKIP_PATH_PARTS = {
    "docs",
    "openapi.json",
    "favicon.ico",
}


def _should_skip(path: str) -> bool:
    parts = [part for part in path.split("/") if part]
    return any(part in SKIP_PATH_PARTS for part in parts)


def _header_value(headers: Iterable[Tuple[bytes, bytes]], key: bytes) -> str | None:
    for header_key, header_value in headers:
        if header_key.lower() == key:
            return header_value.decode("latin-1")
    return None


def _request_id(headers: Iterable[Tuple[bytes, bytes]]) -> str:
    existing = _header_value(headers, b"x-request-id")
    return existing or str(uuid.uuid4())


def resolve_module(path: str, root_path: str, mount_map: Dict[str, str]) -> str:
    root_path = root_path.rstrip("/")
    if root_path and root_path in mount_map:
        return mount_map[root_path]

    if not path.startswith("/"):
        path = "/" + path
    for mount in sorted(mount_map.keys(), key=len, reverse=True):
        if path == mount or path.startswith(f"{mount}/"):
            return mount_map[mount]
    return "tripsplit"


def classify_outcome(method: str, status_code: int) -> str:
    if status_code < 400:
        return "success"
    if status_code == 404:
        return "not_found"
    if method in {"POST", "PUT", "PATCH"} and status_code < 500:
        return "validation_error"
    if status_code < 500:
        return "client_error"
    return "error"


class RequestLogMiddleware:
    """Emit one ``request_completed`` event per HTTP request."""

    def __init__(self, app: Any, mount_map: Dict[str, str] | None = None) -> None:
        self.app = app
        self.mount_map = mount_map or {}

    async def __call__(self, scope: Dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        method = scope.get("method", "").upper()
        if method in {"HEAD", "OPTIONS"} or _should_skip(path):
            await self.app(scope, receive, send)
            return

        headers = scope.get("headers", [])
        start = time.perf_counter()
        request_id = _request_id(headers)
        status_code = 500

        async def send_wrapper(message: Dict[str, Any]) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
                response_headers: List[Tuple[bytes, bytes]] = list(
                    message.get("headers", [])
                )
                if not _header_value(response_headers, b"x-request-id"):
                    response_headers.append((b"x-request-id", request_id.encode("latin-1")))
                message["headers"] = response_headers
            await send(message)

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            logger.exception("request_failed", method=method, path=path)
            raise
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "request_completed",
            request_id=request_id,
            module=resolve_module(path, scope.get("root_path", ""), self.mount_map),
            method=method,
            path=path,
            status=status_code,
            outcome=classify_outcome(method, status_code),
            duration_ms=duration_ms,
        )


def attach_request_log(app: Any, mount_map: Dict[str, str] | None = None) -> None:
    if not settings.request_log_enabled():
        return
    app.add_middleware(RequestLogMiddleware, mount_map=mount_map or {})
