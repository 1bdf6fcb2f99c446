# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
LaunchList Waitlist Service
===========================
Backs a single-page waitlist: email signups with UTM/referrer attribution,
a public signup counter, and a password-protected admin analytics dashboard.

    public:  POST /api/v1/signups      GET /api/v1/count
    admin:   POST /api/v1/admin/login  POST /api/v1/admin/logout
             GET  /api/v1/admin/session GET /api/v1/admin/dashboard
    ops:     GET  /health  /health/ready  /metrics

Port: 8000
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from launchlist.controllers import admin_controller, signup_controller, system_controller
from launchlist.core.clock import Clock, utc_now
from launchlist.core.config import Settings, settings as default_settings
from launchlist.core.database import build_engine
from launchlist.core.dependencies import Container
from launchlist.core.errors import InvalidEmail, InvalidRequest, LaunchListError
from launchlist.core.logging import get_logger
from launchlist.middleware import MetricsMiddleware, RequestIDMiddleware
from launchlist.models.tables import metadata

logger = get_logger()


def request_validation_error(exc: RequestValidationError) -> LaunchListError:
    """Map schema rejections onto the domain errors: any problem with the
    email field is an invalid email, everything else a malformed request."""
    errors = exc.errors()
    if any(tuple(err.get("loc", ()))[-1:] == ("email",) for err in errors):
        return InvalidEmail()
    detail = "; ".join(
        "{}: {}".format(".".join(str(p) for p in err.get("loc", ()) if p != "body") or "body",
                        err.get("msg", "invalid"))
        for err in errors
    )
    return InvalidRequest(detail or None)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """
    Build the application. ``engine`` is created from ``DATABASE_URL`` during
    start-up unless one is supplied; a supplied engine is left for the caller
    to dispose.
    """
    cfg = settings or default_settings

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        db = engine if engine is not None else build_engine(cfg)
        if cfg.AUTO_CREATE_SCHEMA:
            try:
                metadata.create_all(db)
                logger.info("Database schema verified")
            except SQLAlchemyError:
                logger.warning("Could not create schema — DB may not be ready yet", exc_info=True)
        application.state.container = Container(cfg, db, clock=clock)
        logger.info("%s v%s started", cfg.SERVICE_NAME, cfg.SERVICE_VERSION)
        yield
        if engine is None:
            db.dispose()
            logger.info("Shutting down — connection pool disposed")

    application = FastAPI(
        title="LaunchList — Waitlist Service",
        version=cfg.SERVICE_VERSION,
        lifespan=lifespan,
    )

    application.add_middleware(MetricsMiddleware)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.exception_handler(LaunchListError)
    async def domain_error_handler(request: Request, exc: LaunchListError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(),
                            headers=exc.headers())

    @application.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = request_validation_error(exc)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return JSONResponse(status_code=500,
                            content={"error": "internal_server_error", "detail": "Internal server error"})

    application.include_router(system_controller.router)
    application.include_router(signup_controller.router)
    application.include_router(admin_controller.router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=default_settings.SERVICE_PORT)
