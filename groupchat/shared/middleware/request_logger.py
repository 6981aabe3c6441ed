# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request access logging and correlation ids."""

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from groupchat.shared.logging import clear_correlation_id, logger, set_correlation_id

_HIDDEN_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})


def remote_ip() -> str | None:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr


def _masked_headers() -> dict[str, str]:
    masked = {}
    for key, value in request.headers.items():
        if key.lower() in _HIDDEN_HEADERS:
            value = f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"
        masked[key] = value
    return masked


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _start() -> None:
        correlation_id = request.headers.get("X-Request-ID") or secrets.token_urlsafe(8)
        set_correlation_id(correlation_id)
        g.correlation_id = correlation_id
        g.request_started = time.perf_counter()

        if debug_mode:
            logger.debug(
                f"--> {request.method} {request.path} from {remote_ip()} "
                f"headers={_masked_headers()} body_size={len(request.get_data())}"
            )

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        logger.info(
            f"<-- {request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms user={g.get('user_id', '-')}"
        )
        response.headers.setdefault("X-Request-ID", g.get("correlation_id", "-"))
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"Request failed: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["configure_request_logging", "remote_ip"]
