# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Wall-clock source, injectable so time-dependent logic can be pinned in tests."""
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
