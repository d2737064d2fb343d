from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

from ..core.exceptions import StoreTimeoutError, StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def call_with_retry(
    fn: Callable[[], T],
    *,
    attempts: int,
    delay_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``fn`` retrying on StoreUnavailableError with a linear back-off.

    Timeouts are raised immediately. Once the attempts are used up a generic
    StoreUnavailableError is raised, chained to the last failure.
    """
    attempts = max(1, int(attempts))
    last_exc: StoreUnavailableError | None = None

    for attempt in range(1, attempts + 1):
        try:
            return fn()
        except StoreTimeoutError:
            raise
        except StoreUnavailableError as exc:
            last_exc = exc
            logger.warning("Store unavailable (attempt %d/%d): %s", attempt, attempts, exc)
            if attempt < attempts:
                sleep(delay_seconds * attempt)

    raise StoreUnavailableError("Shift store is unavailable") from last_exc
