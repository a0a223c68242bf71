# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Bounded condition polling for UI interactions.
#
# Every dynamic interaction waits for a condition with a hard timeout and a
# fixed poll interval. There are no fixed sleeps and no retries of the
# interaction itself: a wait either observes the condition or fails once.
#
# Usage:
#   waiter = AsyncWaiter(WaitConfig(timeout=10))
#   locator = await waiter.wait(check_visible, description="username visible")
#
# ================================================================================

from __future__ import annotations

import asyncio
import inspect
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar, Union

from loguru import logger


T = TypeVar("T")

CheckResult = Tuple[bool, T]
CheckFn = Callable[[], Union[CheckResult, Awaitable[CheckResult]]]

# Explicit-wait defaults for page objects (seconds)
DEFAULT_TIMEOUT = 10.0
DEFAULT_POLL_INTERVAL = 0.5


@dataclass(frozen=True)
class WaitConfig:
    """
    Configuration for wait operations.

    Attributes:
        timeout: Total timeout in seconds
        poll_interval: Fixed delay between condition checks in seconds
    """
    timeout: float = DEFAULT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL

    def __post_init__(self) -> None:
        if self.timeout < 0:
            raise ValueError(f"timeout must not be negative: {self.timeout}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive: {self.poll_interval}")


class WaitTimeoutError(Exception):
    """Raised when a wait operation times out."""

    def __init__(self, message: str, last_result: object = None, last_error: Optional[str] = None):
        super().__init__(message)
        self.last_result = last_result
        self.last_error = last_error


class AsyncWaiter:
    """
    Async waiter with a fixed poll interval.

    The condition is always checked at least once, so a zero timeout still
    observes an element that is already in the required state.

    Exceptions raised by the check count as "not yet" and are retried until
    the deadline, except for the types listed in `fatal_errors`, which
    propagate immediately.
    """

    def __init__(
        self,
        config: Optional[WaitConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        fatal_errors: Tuple[Type[BaseException], ...] = (),
    ):
        """
        Initialize async waiter.

        Args:
            config: Default wait configuration
            clock: Monotonic clock used to measure the deadline
            fatal_errors: Exception types that abort the wait instead of retrying
        """
        self.config = config or WaitConfig()
        self._clock = clock
        self.fatal_errors = fatal_errors

    async def wait(
        self,
        check_fn: CheckFn,
        description: str = "Waiting for condition",
        timeout: Optional[float] = None,
    ) -> T:
        """
        Poll `check_fn` until it reports success or the timeout expires.

        Args:
            check_fn: Sync or async function returning (success, result)
            description: Description for logging and error messages
            timeout: Overrides the configured timeout for this call

        Returns:
            Result from check_fn when successful

        Raises:
            WaitTimeoutError: If the timeout is reached without success
            Any type in `fatal_errors` raised by check_fn, unchanged
        """
        limit = self.config.timeout if timeout is None else timeout
        deadline = self._clock() + limit
        attempt = 0
        last_result = None
        last_error = None

        while True:
            attempt += 1
            try:
                outcome = check_fn()
                if inspect.isawaitable(outcome):
                    outcome = await outcome
                success, result = outcome
                last_result = result

                if success:
                    logger.debug(f"Wait satisfied after {attempt} attempt(s): {description}")
                    return result

            except self.fatal_errors:
                raise
            except Exception as e:
                # Elements detach and re-render while the page settles
                last_error = str(e)
                logger.debug(f"Wait check {attempt} raised: {e}")

            remaining = deadline - self._clock()
            if remaining <= 0:
                message = (
                    f"Timeout after {limit:.1f}s waiting for: {description}. "
                    f"Attempts: {attempt}, last result: {last_result}, last error: {last_error}"
                )
                raise WaitTimeoutError(message, last_result=last_result, last_error=last_error)

            await asyncio.sleep(min(self.config.poll_interval, remaining))


__all__ = [
    "AsyncWaiter",
    "WaitConfig",
    "WaitTimeoutError",
    "DEFAULT_TIMEOUT",
    "DEFAULT_POLL_INTERVAL",
]
