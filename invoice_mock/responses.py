"""Response builders.

Successful responses are the fixture body itself (the real backend does not
wrap invoices in an envelope) plus a ``request`` echo. Error responses use the
flat ``{code, message}`` shape of the real API.
"""

from __future__ import annotations

from typing import Any, Mapping

from fastapi.responses import JSONResponse

from .context import RequestEcho
from .errors import ErrorCode
from .fixtures import Fixture


JsonObject = dict[str, Any]

ECHO_FIELD = "request"
DEFAULT_STATUS = 200


def build_body(body: Mapping[str, Any], echo: RequestEcho) -> JsonObject:
    """Return a new body with the request echo set; ``body`` is left untouched."""

    out: JsonObject = dict(body)
    out[ECHO_FIELD] = echo.as_dict()
    return out


def compose_invoice_response(fixture: Fixture, echo: RequestEcho) -> JSONResponse:
    status = fixture.status if fixture.status is not None else DEFAULT_STATUS
    headers = dict(fixture.headers) if fixture.headers else {}
    return JSONResponse(build_body(fixture.body, echo), status_code=status, headers=headers)


def error_response(error: ErrorCode, locale: str | None = None) -> JSONResponse:
    return JSONResponse(error.as_error(locale), status_code=error.status_code)
