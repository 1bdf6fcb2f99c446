# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain error taxonomy.

Every failure a caller is expected to handle is a subclass of
``LaunchListError`` carrying a stable ``code``, a user-facing ``message`` and
the HTTP status the API renders it with. Services raise them, the exception
handlers registered in ``main.py`` turn them into JSON responses.
"""

from typing import Any, Optional


class LaunchListError(Exception):
    code: str = "error"
    status_code: int = 500
    message: str = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "detail": self.message}

    def headers(self) -> Optional[dict[str, str]]:
        return None


# ── Signup Writer ──

class SignupError(LaunchListError):
    pass


class InvalidEmail(SignupError):
    code = "invalid_email"
    status_code = 422
    message = "Please enter a valid email address"


class DuplicateSignup(SignupError):
    code = "duplicate"
    status_code = 409
    message = "You're already on the waitlist!"


class TransientStoreError(SignupError):
    code = "transient"
    status_code = 503
    message = "Something went wrong. Please try again."


# ── Read paths (counter, dashboard) ──

class StoreUnavailable(LaunchListError):
    code = "store_unavailable"
    status_code = 503
    message = "Signup data is temporarily unavailable."


# ── Admin Access Guard ──

class AuthError(LaunchListError):
    pass


class RateLimited(AuthError):
    code = "rate_limited"
    status_code = 429
    message = "Too many failed login attempts. Try again later."

    def __init__(self, retry_after: int, message: Optional[str] = None):
        self.retry_after = max(int(retry_after), 1)
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["retry_after"] = self.retry_after
        return data

    def headers(self) -> Optional[dict[str, str]]:
        return {"Retry-After": str(self.retry_after)}


class InvalidCredentials(AuthError):
    code = "invalid_credentials"
    status_code = 401
    message = "Invalid credentials"


class Unauthenticated(AuthError):
    code = "unauthenticated"
    status_code = 401
    message = "Authentication required"
    login_url = "/api/v1/admin/login"

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["login_url"] = self.login_url
        return data


# ── Request shape ──

class InvalidRequest(LaunchListError):
    code = "validation_error"
    status_code = 422
    message = "Request is malformed."
