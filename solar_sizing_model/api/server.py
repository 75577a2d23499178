"""WSGI application exposing the calculator and lead endpoints.

Routes
------
GET  /api/calculator – endpoint self-description.
POST /api/calculator – size a system.
POST /api/leads      – submit a contact lead to the CMS.

Everything else answers 404 (unknown path) or 405 (wrong method).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable
from wsgiref.simple_server import make_server

from solar_sizing_model.api.routes import (
    describe_calculator_endpoint,
    handle_calculator_post,
    handle_lead_post,
)
from solar_sizing_model.config.defaults import (
    API_MESSAGES,
    CALCULATOR_ENDPOINT,
    DEFAULT_HTTP_HOST,
    DEFAULT_HTTP_PORT,
    LEADS_ENDPOINT,
)
from solar_sizing_model.leads.cms_client import PayloadClient
from solar_sizing_model.sizing.models import DEFAULT_CONSTANTS, SizingConstants

logger = logging.getLogger(__name__)

_REASONS = {
    200: "OK",
    201: "Created",
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    500: "Internal Server Error",
    502: "Bad Gateway",
}

WSGIApp = Callable[[dict, Callable], Iterable[bytes]]


class _BadRequestBody(ValueError):
    """The request body is not valid UTF-8 JSON."""


def _read_json_body(environ: dict) -> Any:
    try:
        length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        length = 0
    raw = environ["wsgi.input"].read(length) if length > 0 else b""
    try:
        return json.loads(raw.decode("utf-8")) if raw else None
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise _BadRequestBody(str(exc)) from exc


def _respond(
    start_response: Callable,
    status: int,
    payload: dict[str, Any],
    extra_headers: list[tuple[str, str]] | None = None,
) -> list[bytes]:
    body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    headers = [
        ("Content-Type", "application/json; charset=utf-8"),
        ("Content-Length", str(len(body))),
    ]
    headers.extend(extra_headers or [])
    start_response(f"{status} {_REASONS.get(status, '')}".strip(), headers)
    return [body]


def create_app(
    cms_client: PayloadClient | None = None,
    constants: SizingConstants = DEFAULT_CONSTANTS,
) -> WSGIApp:
    """Build the WSGI application.

    Parameters
    ----------
    cms_client:
        Client used to forward leads. Defaults to a :class:`PayloadClient`
        configured from the environment.
    constants:
        Sizing assumptions for the calculator endpoint.
    """
    client = cms_client or PayloadClient()
    allowed = {
        CALCULATOR_ENDPOINT: ("GET", "POST"),
        LEADS_ENDPOINT: ("POST",),
    }

    def app(environ: dict, start_response: Callable) -> list[bytes]:
        path = environ.get("PATH_INFO", "").rstrip("/") or "/"
        method = environ.get("REQUEST_METHOD", "GET").upper()
        logger.debug("%s %s", method, path)

        if path not in allowed:
            return _respond(start_response, 404, {"error": "Not found"})
        if method not in allowed[path]:
            return _respond(
                start_response,
                405,
                {"error": "Method not allowed"},
                [("Allow", ", ".join(allowed[path]))],
            )

        if method == "GET":
            return _respond(start_response, 200, describe_calculator_endpoint())

        try:
            body = _read_json_body(environ)
        except _BadRequestBody as exc:
            logger.info("Rejected malformed JSON body on %s: %s", path, exc)
            return _respond(
                start_response,
                400,
                {"error": "Invalid JSON", "message": API_MESSAGES["invalid_json"]},
            )

        if path == CALCULATOR_ENDPOINT:
            status, payload = handle_calculator_post(body, constants)
        else:
            status, payload = handle_lead_post(body, client)
        return _respond(start_response, status, payload)

    return app


def serve(
    host: str = DEFAULT_HTTP_HOST,
    port: int = DEFAULT_HTTP_PORT,
    app: WSGIApp | None = None,
) -> None:
    """Serve the application until interrupted."""
    app = app or create_app()
    with make_server(host, port, app) as httpd:
        logger.info("Serving solar calculator on http://%s:%d", host, port)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down.")
