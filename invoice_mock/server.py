"""HTTP server for the invoice mock.

Routes:
  GET /mobile/v1/invoices   fixture-backed invoice listing
  GET /health               liveness probe

No request may end in an unhandled exception: anything that escapes a route is
logged and turned into an opaque MOCK_ERROR response.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .config import MockConfig
from .context import QUERYSTRING_HEADER, build_request_echo, extract_msisdn, resolve_locale
from .errors import INVALID_REQUEST, MOCK_ERROR
from .fixtures import FixtureError, FixtureStore
from .responses import compose_invoice_response, error_response


log = logging.getLogger("invoice_mock.server")

INVOICES_PATH = "/mobile/v1/invoices"
HEALTH_PATH = "/health"


def create_app(config: MockConfig | None = None) -> FastAPI:
    if config is None:
        config = MockConfig.from_env()

    app = FastAPI(
        title="Invoice Mock Server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.config = config  # type: ignore[attr-defined]
    app.state.fixtures = FixtureStore(config.mocks_dir)  # type: ignore[attr-defined]

    # Browser UIs and tunneled setups frequently require permissive CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    @app.middleware("http")
    async def _exception_guard(request: Request, call_next):
        """Ensure unexpected exceptions never escape as framework 500s."""

        locale = resolve_locale(request.headers, config.default_locale)
        request.state.locale = locale
        try:
            response: Response = await call_next(request)
            return response
        except Exception:  # noqa: BLE001
            log.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response(MOCK_ERROR, locale)

    @app.get(HEALTH_PATH)
    async def health():
        return PlainTextResponse("ok")

    @app.get(INVOICES_PATH)
    async def list_invoices(request: Request) -> Response:
        locale = getattr(request.state, "locale", config.default_locale)

        msisdn = extract_msisdn(request.query_params, request.headers)
        if not msisdn:
            log.info("Rejected %s: no msisdn in query or %s header", request.url.path, QUERYSTRING_HEADER)
            return error_response(INVALID_REQUEST, locale)

        echo = build_request_echo(msisdn, request.query_params)

        store: FixtureStore = request.app.state.fixtures  # type: ignore[attr-defined]
        try:
            fixture = await store.load(msisdn)
        except FixtureError as exc:
            log.exception("Fixture lookup failed for msisdn=%s (path=%s)", msisdn, exc.path)
            return error_response(MOCK_ERROR, locale)

        log.debug("Serving %s for msisdn=%s", fixture.path.name, msisdn)
        return compose_invoice_response(fixture, echo)

    return app


app = create_app()
