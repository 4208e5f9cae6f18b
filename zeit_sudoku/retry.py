import time
from typing import Callable, Tuple, Type, TypeVar

from playwright.sync_api import Error as PWError

from .errors import RetryExhaustedError, TransientInteractionFailure
from .utils import logger

T = TypeVar("T")

# Playwright's TimeoutError subclasses Error, so an element that stays
# non-interactable past the action timeout is retried as well.
RECOVERABLE_ERRORS: Tuple[Type[BaseException], ...] = (TransientInteractionFailure, PWError)


def retry(
    action: Callable[[], T],
    max_attempts: int = 10,
    backoff: float = 0.2,
    recoverable: Tuple[Type[BaseException], ...] = RECOVERABLE_ERRORS,
) -> T:
    """
    Run `action` until it succeeds or `max_attempts` calls have failed.

    Only exceptions listed in `recoverable` are retried, with `backoff`
    seconds between attempts. Anything else propagates on the spot. Once the
    attempts are used up the last recoverable failure is raised as a
    RetryExhaustedError.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
    if backoff < 0:
        raise ValueError(f"backoff must be >= 0, got {backoff}")

    last_error = None
    for attempt in range(1, max_attempts + 1):
        try:
            return action()
        except recoverable as e:
            last_error = e
            left = max_attempts - attempt
            logger.debug("Retry (%d to go) on exception: %s: %s", left, type(e).__name__, e)
            if left:
                time.sleep(backoff)

    raise RetryExhaustedError(max_attempts, last_error) from last_error
