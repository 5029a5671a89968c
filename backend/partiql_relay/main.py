from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from . import __version__
from .http_errors import install_error_handlers
from .middleware.cors import build_allowed_origins
from .middleware.request_log import REQUEST_ID_HEADER, RequestLogMiddleware
from .observability.logging import configure_logging, get_logger
from .routers.health import router as health_router
from .routers.query import QUERY_PAGES_HEADER, QUERY_TRUNCATED_HEADER
from .routers.query import router as query_router
from .settings import settings


def create_app() -> FastAPI:
    configure_logging(level=settings.log_level, log_file=settings.log_file)
    get_logger("startup").info("app_starting", settings=settings.to_log_safe_dict())

    app = FastAPI(
        title="PartiQL Relay",
        version=__version__,
        default_response_class=ORJSONResponse,
        redirect_slashes=False,
    )

    # Last added is outermost, so request logging also sees CORS preflights.
    allowed_origins = build_allowed_origins(settings.cors_allow_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        # Browsers refuse credentialed requests against a wildcard origin.
        allow_credentials=allowed_origins != ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER, QUERY_PAGES_HEADER, QUERY_TRUNCATED_HEADER],
        max_age=3000,
    )
    app.add_middleware(RequestLogMiddleware)

    install_error_handlers(app)

    app.include_router(health_router)
    app.include_router(query_router)

    return app


app = create_app()
