# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from groupchat.shared.logging import logger
from groupchat.shared.middleware.request_logger import remote_ip

from .base import AppError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    return response, error.status


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if debug_mode:
            logger.info(
                f"Handled application error {exc.code} on {request.method} {request.path}"
            )
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        response = jsonify({"error": exc.name.lower().replace(" ", "_"), "message": exc.name})
        return response, exc.code or default_status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        user_id = getattr(g, "user_id", None)
        logger.exception(
            f"Unhandled exception: {type(exc).__name__} on {request.method} {request.path} "
            f"from {remote_ip()}, user={user_id}"
        )
        response = jsonify({"error": "internal_error", "message": "Internal Server Error"})
        return response, default_status
