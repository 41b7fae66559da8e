# src/quire/providers/retry.py
"""Retry discipline shared by every provider transport.

The schedule is split in two:

- backoff_delay() is a pure function from attempt number to delay, so the
  schedule can be checked without time passing.
- call_with_retry() runs the attempts with tenacity, waiting on an injected
  sleep function and passing every attempt through the pacing gate.

Only TransientProviderError is retried. The delay before a retry is the
larger of the computed backoff and the server's Retry-After value.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
)

from quire.errors import (
    FatalProviderError,
    ProviderError,
    ProviderRetriesExhaustedError,
    TransientProviderError,
)

if TYPE_CHECKING:
    from quire.pacing import PacingGate
    from quire.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How many times and how patiently to retry transient failures.

    Args:
        max_attempts: Total attempts, including the first one.
        base_delay: Backoff before the first retry, in seconds.
        max_delay: Upper bound for the exponential backoff, in seconds.
        jitter: Relative randomization applied to each delay (0.25 = ±25%).
    """

    max_attempts: int = 10
    base_delay: float = 3.0
    max_delay: float = 30.0
    jitter: float = 0.25

    @classmethod
    def from_settings(cls, settings: Settings) -> RetryPolicy:
        return cls(
            max_attempts=settings.max_attempts,
            base_delay=settings.backoff_base_seconds,
            max_delay=settings.backoff_max_seconds,
        )


def backoff_delay(
    attempt: int,
    base: float = 3.0,
    cap: float = 30.0,
    jitter: float = 0.25,
    rng: Callable[[], float] = random.random,
) -> float:
    """Compute the delay after a failed attempt.

    The delay doubles with every attempt, starting at base and capped at cap,
    then is scaled by a random factor in [1 - jitter, 1 + jitter].

    Args:
        attempt: 1-based number of the attempt that just failed.
        base: Delay after the first failed attempt, in seconds.
        cap: Maximum delay before jitter, in seconds.
        jitter: Relative randomization.
        rng: Returns a float in [0, 1).

    Returns:
        Delay in seconds, never negative.
    """
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    delay = min(base * 2 ** (attempt - 1), cap)
    factor = 1.0 + jitter * (2.0 * rng() - 1.0)
    return max(0.0, delay * factor)


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in whole seconds."""
    if value is None:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    return float(seconds) if seconds > 0 else None


def error_for_status(
    status_code: int,
    detail: str,
    retry_after: str | None = None,
) -> ProviderError:
    """Classify a non-2xx HTTP status as transient or fatal.

    Args:
        status_code: HTTP status code of the response.
        detail: Short description for the error message.
        retry_after: Raw Retry-After header value, if any.
    """
    if status_code == 429 or 500 <= status_code < 600:
        return TransientProviderError(
            f"{detail}: HTTP {status_code}",
            retry_after=parse_retry_after(retry_after),
            status_code=status_code,
        )
    return FatalProviderError(f"{detail}: HTTP {status_code}", status_code=status_code)


def call_with_retry(
    fn: Callable[[], T],
    *,
    policy: RetryPolicy,
    gate: PacingGate | None = None,
    sleep: Callable[[float], None] = time.sleep,
    rng: Callable[[], float] = random.random,
    description: str = "provider call",
) -> T:
    """Call fn, pacing every attempt and retrying transient failures.

    Args:
        fn: The single-attempt call. Raises TransientProviderError to request
            a retry; any other exception propagates immediately.
        policy: Attempt limit and backoff parameters.
        gate: Pacing gate acquired before every attempt.
        sleep: Function used to wait between attempts.
        rng: Random source for jitter.
        description: Used in log and error messages.

    Returns:
        Whatever fn returns.

    Raises:
        ProviderRetriesExhaustedError: Every attempt failed transiently.
    """

    def before(retry_state: RetryCallState) -> None:
        if gate is not None:
            gate.acquire()

    def wait(retry_state: RetryCallState) -> float:
        delay = backoff_delay(
            retry_state.attempt_number,
            base=policy.base_delay,
            cap=policy.max_delay,
            jitter=policy.jitter,
            rng=rng,
        )
        outcome = retry_state.outcome
        error = outcome.exception() if outcome is not None else None
        retry_after = getattr(error, "retry_after", None)
        if retry_after is not None:
            delay = max(delay, retry_after)
        return delay

    def before_sleep(retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        error = outcome.exception() if outcome is not None else None
        next_sleep = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            "%s failed (attempt %d/%d): %s; retrying in %.1fs",
            description,
            retry_state.attempt_number,
            policy.max_attempts,
            error,
            next_sleep,
        )

    retrying = Retrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait,
        retry=retry_if_exception_type(TransientProviderError),
        before=before,
        before_sleep=before_sleep,
        sleep=sleep,
    )

    try:
        return retrying(fn)
    except RetryError as e:
        last_error = e.last_attempt.exception()
        logger.error("%s gave up after %d attempts", description, policy.max_attempts)
        raise ProviderRetriesExhaustedError(
            f"{description} failed after {policy.max_attempts} attempts: {last_error}",
            attempts=policy.max_attempts,
        ) from last_error
