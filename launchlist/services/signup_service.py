# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Signup Writer — normalisation, validation, duplicate classification.
"""

import uuid
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from launchlist.core.errors import (
    DuplicateSignup,
    InvalidEmail,
    StoreUnavailable,
    TransientStoreError,
)
from launchlist.core.logging import get_logger, mask_email
from launchlist.metrics import SIGNUPS_TOTAL
from launchlist.models.domain import Confirmation
from launchlist.repositories import SignupRepository

logger = get_logger(__name__)

MAX_EMAIL_LENGTH = 320
MAX_SOURCE_LENGTH = 100
MAX_REFERRER_LENGTH = 2048
SUCCESS_MESSAGE = "You're on the list! We'll be in touch soon."


def normalize_email(raw: Any) -> str:
    """Trim and case-fold. Returns an empty string for anything that is not text."""
    if not isinstance(raw, str):
        return ""
    return raw.strip().lower()


def clean_attribution(value: Any, max_length: int) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value[:max_length] or None


def is_valid_email(email: str) -> bool:
    if not email or len(email) > MAX_EMAIL_LENGTH:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class SignupService:
    """Accepts waitlist submissions and exposes the public counter."""

    def __init__(self, signup_repo: SignupRepository):
        self._repo = signup_repo

    def submit(self, email: Any, source: Any = None, referrer: Any = None) -> Confirmation:
        """
        Persist one signup.

        Raises InvalidEmail before touching the store, DuplicateSignup when the
        unique constraint rejects the address, TransientStoreError on any other
        storage failure.
        """
        normalized = normalize_email(email)
        if not is_valid_email(normalized):
            SIGNUPS_TOTAL.labels(outcome="invalid").inc()
            raise InvalidEmail()

        try:
            self._repo.insert_signup(
                record_id=str(uuid.uuid4()),
                email=normalized,
                source=clean_attribution(source, MAX_SOURCE_LENGTH),
                referrer=clean_attribution(referrer, MAX_REFERRER_LENGTH),
            )
        except IntegrityError:
            SIGNUPS_TOTAL.labels(outcome="duplicate").inc()
            logger.info("Duplicate signup rejected email=%s", mask_email(normalized))
            raise DuplicateSignup()
        except SQLAlchemyError as exc:
            SIGNUPS_TOTAL.labels(outcome="error").inc()
            logger.error("Signup insert failed email=%s", mask_email(normalized), exc_info=True)
            raise TransientStoreError() from exc

        SIGNUPS_TOTAL.labels(outcome="created").inc()
        logger.info("Signup created email=%s", mask_email(normalized))
        return Confirmation(message=SUCCESS_MESSAGE, email=normalized)

    def count(self) -> int:
        """Current waitlist size for the public counter."""
        try:
            return self._repo.count_all()
        except SQLAlchemyError as exc:
            logger.error("Signup count query failed", exc_info=True)
            raise StoreUnavailable() from exc
