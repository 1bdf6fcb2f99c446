# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Admin Access Guard — credential check, login throttling, sessions.

    Anonymous ─► Authenticating ─► Authenticated ─► (Expired | LoggedOut) ─► Anonymous
"""

import hmac
import secrets
from datetime import timedelta
from typing import Optional

from launchlist.core.clock import Clock, utc_now
from launchlist.core.errors import InvalidCredentials, RateLimited, Unauthenticated
from launchlist.core.logging import get_logger
from launchlist.core.security import SessionTokenCodec
from launchlist.metrics import ADMIN_LOGIN_ATTEMPTS
from launchlist.models.domain import AdminSession
from launchlist.repositories import RevokedSessionRepository
from launchlist.services.rate_limiter import LoginAttemptLimiter

logger = get_logger(__name__)


class AuthService:
    def __init__(
        self,
        admin_username: str,
        admin_password: str,
        codec: SessionTokenCodec,
        limiter: LoginAttemptLimiter,
        revoked_repo: RevokedSessionRepository,
        session_ttl: timedelta = timedelta(hours=24),
        clock: Clock = utc_now,
    ):
        self._username = admin_username
        self._password = admin_password
        self._codec = codec
        self._limiter = limiter
        self._revoked = revoked_repo
        self._ttl = session_ttl
        self._clock = clock
        if not admin_password:
            logger.warning("ADMIN_PASSWORD is not set — admin login is disabled")

    def _credentials_match(self, username: str, password: str) -> bool:
        # Both digests are always computed so timing does not reveal which field failed.
        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        pass_ok = hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        return bool(self._password) and user_ok and pass_ok

    def authenticate(self, username: str, password: str, client_id: str) -> tuple[AdminSession, str]:
        """
        Verify the admin credential for ``client_id``.
        Returns the new session and its encrypted token.
        Raises RateLimited (checked before any comparison) or InvalidCredentials.
        """
        allowed, retry_after = self._limiter.try_acquire(client_id)
        if not allowed:
            ADMIN_LOGIN_ATTEMPTS.labels(result="rate_limited").inc()
            logger.warning("Admin login throttled client=%s retry_after=%s", client_id, retry_after)
            raise RateLimited(retry_after)

        if not self._credentials_match(username or "", password or ""):
            ADMIN_LOGIN_ATTEMPTS.labels(result="failure").inc()
            logger.warning("Admin login failed client=%s failures=%s",
                           client_id, self._limiter.failures(client_id))
            raise InvalidCredentials()

        self._limiter.reset(client_id)
        now = self._clock()
        session = AdminSession(
            principal=self._username,
            session_id=secrets.token_urlsafe(16),
            issued_at=now,
            expires_at=now + self._ttl,
        )
        ADMIN_LOGIN_ATTEMPTS.labels(result="success").inc()
        logger.info("Admin login succeeded client=%s", client_id)
        return session, self._codec.encode(session)

    def authorize(self, token: Optional[str]) -> AdminSession:
        """Raises Unauthenticated for a missing, tampered, expired or revoked token."""
        if not token:
            raise Unauthenticated()
        session = self._codec.decode(token)
        now = self._clock()
        if session.is_expired(now):
            raise Unauthenticated("Session expired")
        if session.principal != self._username:
            raise Unauthenticated()
        if self._revoked.is_revoked(session.session_id, now):
            raise Unauthenticated("Session has been signed out")
        return session

    def logout(self, token: Optional[str]) -> Optional[AdminSession]:
        """Revoke the session behind ``token``. Unreadable tokens are ignored."""
        if not token:
            return None
        try:
            session = self._codec.decode(token)
        except Unauthenticated:
            return None
        self._revoked.revoke(session.session_id, session.expires_at)
        logger.info("Admin session revoked outstanding_revocations=%s", self._revoked.count())
        return session

    @property
    def session_ttl(self) -> timedelta:
        return self._ttl
