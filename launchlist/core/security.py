# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Admin session tokens.

Tokens are Fernet-encrypted JSON claims: the holder can neither read nor
alter them, and any modification fails authentication on decrypt.
"""

import base64
import hashlib
import json
from datetime import datetime, timezone

from cryptography.fernet import Fernet, InvalidToken

from launchlist.core.errors import Unauthenticated
from launchlist.models.domain import AdminSession


def derive_fernet_key(secret: str) -> bytes:
    """SHA-256 the configured secret into the 32-byte urlsafe key Fernet expects."""
    return base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest())


class SessionTokenCodec:
    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Session secret must not be empty")
        self._fernet = Fernet(derive_fernet_key(secret))

    def encode(self, session: AdminSession) -> str:
        claims = {
            "sub": session.principal,
            "sid": session.session_id,
            "iat": session.issued_at.timestamp(),
            "exp": session.expires_at.timestamp(),
        }
        payload = json.dumps(claims, separators=(",", ":")).encode("utf-8")
        return self._fernet.encrypt(payload).decode("ascii")

    def decode(self, token: str) -> AdminSession:
        """Decrypt a token back into a session. Expiry is checked by the caller."""
        try:
            raw = self._fernet.decrypt(token.encode("ascii"))
            claims = json.loads(raw)
            return AdminSession(
                principal=claims["sub"],
                session_id=claims["sid"],
                issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            )
        except (InvalidToken, UnicodeError, ValueError, KeyError, TypeError):
            raise Unauthenticated("Invalid session")
