# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports the data-access classes."""
from launchlist.repositories.signup_repository import SignupRepository
from launchlist.repositories.session_repository import RevokedSessionRepository

__all__ = ["SignupRepository", "RevokedSessionRepository"]
