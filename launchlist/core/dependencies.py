# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.

The container is built once per process by the app lifespan around an
explicitly created engine and stored on ``app.state``; dependency functions
read it from the incoming request.
"""

import secrets
from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.engine import Engine

from launchlist.core.clock import Clock, utc_now
from launchlist.core.config import Settings
from launchlist.core.logging import get_logger
from launchlist.core.security import SessionTokenCodec
from launchlist.models.domain import AdminSession
from launchlist.repositories import RevokedSessionRepository, SignupRepository
from launchlist.services.analytics_service import AnalyticsService
from launchlist.services.auth_service import AuthService
from launchlist.services.rate_limiter import LoginAttemptLimiter
from launchlist.services.signup_service import SignupService

logger = get_logger(__name__)


class Container:
    """Per-process object graph: engine → repositories → services."""

    def __init__(self, settings: Settings, engine: Engine, clock: Clock = utc_now):
        self.settings = settings
        self.engine = engine

        secret = settings.SESSION_SECRET
        if not secret:
            secret = secrets.token_urlsafe(32)
            logger.warning("SESSION_SECRET is not set — using an ephemeral key, "
                           "admin sessions will not survive a restart")

        # ── Repositories ──
        self.signup_repo = SignupRepository(engine, clock=clock)
        self.revoked_repo = RevokedSessionRepository()

        # ── Services ──
        self.login_limiter = LoginAttemptLimiter(
            settings.LOGIN_MAX_FAILURES, settings.LOGIN_WINDOW_SECONDS,
        )
        self.signup_service = SignupService(self.signup_repo)
        self.analytics_service = AnalyticsService(
            self.signup_repo,
            report_timezone=settings.REPORT_TIMEZONE,
            max_trailing_days=settings.MAX_TIMELINE_DAYS,
            recent_limit=settings.RECENT_SIGNUPS_LIMIT,
            clock=clock,
        )
        self.auth_service = AuthService(
            admin_username=settings.ADMIN_USERNAME,
            admin_password=settings.ADMIN_PASSWORD,
            codec=SessionTokenCodec(secret),
            limiter=self.login_limiter,
            revoked_repo=self.revoked_repo,
            session_ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
            clock=clock,
        )


# ── FastAPI dependency functions ──
def get_container(request: Request) -> Container:
    return request.app.state.container


def get_settings(container: Container = Depends(get_container)) -> Settings:
    return container.settings


def get_signup_service(container: Container = Depends(get_container)) -> SignupService:
    return container.signup_service


def get_analytics_service(container: Container = Depends(get_container)) -> AnalyticsService:
    return container.analytics_service


def get_auth_service(container: Container = Depends(get_container)) -> AuthService:
    return container.auth_service


def get_signup_repo(container: Container = Depends(get_container)) -> SignupRepository:
    return container.signup_repo


def get_client_ip(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """Client identifier for login throttling."""
    if settings.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()
    return request.client.host if request.client else "unknown"


def get_session_token(request: Request, settings: Settings = Depends(get_settings)) -> str | None:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def require_admin_session(
    token: str | None = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> AdminSession:
    """Gate for admin routes; resolves before the route body runs."""
    return auth.authorize(token)
