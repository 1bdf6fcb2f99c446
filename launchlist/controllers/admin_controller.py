# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Admin endpoints — login, logout, session, dashboard.
Thin HTTP layer — auth lives in AuthService, numbers in AnalyticsService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from launchlist.core.config import Settings, settings as default_settings
from launchlist.core.dependencies import (
    get_analytics_service,
    get_auth_service,
    get_client_ip,
    get_session_token,
    get_settings,
    require_admin_session,
)
from launchlist.core.errors import InvalidRequest
from launchlist.models.domain import AdminSession, DashboardSnapshot
from launchlist.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    SessionResponse,
)
from launchlist.services.analytics_service import AnalyticsService
from launchlist.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/admin", tags=["Admin"])


@router.post("/login", response_model=LoginResponse,
             responses={401: {"model": ErrorResponse}, 429: {"model": ErrorResponse}})
def login(
    payload: LoginRequest,
    response: Response,
    client_ip: str = Depends(get_client_ip),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    """Check the admin credential and set the session cookie."""
    session, token = auth.authenticate(payload.username, payload.password, client_ip)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(auth.session_ttl.total_seconds()),
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return LoginResponse(success=True, principal=session.principal,
                         expires_at=session.expires_at)


@router.post("/logout", response_model=LogoutResponse)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    auth.logout(token)
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return LogoutResponse(success=True)


@router.get("/session", response_model=SessionResponse,
            responses={401: {"model": ErrorResponse}})
def current_session(session: AdminSession = Depends(require_admin_session)):
    return SessionResponse(principal=session.principal, issued_at=session.issued_at,
                           expires_at=session.expires_at)


@router.get("/dashboard", response_model=DashboardSnapshot,
            responses={401: {"model": ErrorResponse}, 422: {"model": ErrorResponse},
                       503: {"model": ErrorResponse}})
def dashboard(
    days: Optional[int] = Query(default=None, ge=1, le=default_settings.MAX_TIMELINE_DAYS,
                                description="Trailing window for the timeline"),
    _session: AdminSession = Depends(require_admin_session),
    analytics: AnalyticsService = Depends(get_analytics_service),
    settings: Settings = Depends(get_settings),
):
    """Stat cards, per-source breakdown and daily timeline for the admin view."""
    try:
        return analytics.compute_dashboard(days or settings.DEFAULT_TIMELINE_DAYS)
    except ValueError as exc:
        raise InvalidRequest(str(exc)) from exc
