"""
Retry state machine for unreliable extraction calls.

States:
    ATTEMPTING(n) --success--> SUCCEEDED
    ATTEMPTING(n) --failure--> WAITING(n)   if another attempt is left
    ATTEMPTING(n) --failure--> FAILED       on the last attempt
    WAITING(n)    --resume---> ATTEMPTING(n + 1)

The machine only tracks transitions; run_with_retries drives it with a real
(or injected) sleep function.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, Optional, Sequence, TypeVar

from config import RETRY_DELAYS_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryState(str, Enum):
    ATTEMPTING = "attempting"
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class InvalidTransitionError(RuntimeError):
    """Raised when an event is fed to the machine in a state that does not accept it."""
    pass


@dataclass
class RetryMachine:
    delays: Sequence[float] = RETRY_DELAYS_SECONDS
    state: RetryState = RetryState.ATTEMPTING
    attempt: int = 1
    last_error: Optional[BaseException] = field(default=None, repr=False)

    @property
    def max_attempts(self) -> int:
        return len(self.delays) + 1

    @property
    def done(self) -> bool:
        return self.state in (RetryState.SUCCEEDED, RetryState.FAILED)

    def _expect(self, state: RetryState) -> None:
        if self.state is not state:
            raise InvalidTransitionError(f"Expected state {state.value}, machine is {self.state.value}")

    def record_success(self) -> None:
        self._expect(RetryState.ATTEMPTING)
        self.state = RetryState.SUCCEEDED

    def record_failure(self, error: BaseException) -> None:
        self._expect(RetryState.ATTEMPTING)
        self.last_error = error
        self.state = RetryState.WAITING if self.attempt < self.max_attempts else RetryState.FAILED

    def current_delay(self) -> float:
        """Seconds to wait before the next attempt (only valid while WAITING)."""
        self._expect(RetryState.WAITING)
        return self.delays[self.attempt - 1]

    def resume(self) -> None:
        self._expect(RetryState.WAITING)
        self.attempt += 1
        self.state = RetryState.ATTEMPTING


@dataclass
class RetryResult(Generic[T]):
    value: Optional[T]
    machine: RetryMachine

    @property
    def succeeded(self) -> bool:
        return self.machine.state is RetryState.SUCCEEDED


def run_with_retries(
    operation: Callable[[], T],
    delays: Sequence[float] = RETRY_DELAYS_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> RetryResult[T]:
    """
    Call `operation` until it returns or the attempts run out.

    Any exception raised by `operation` counts as a failed attempt; the last
    one is kept on the machine instead of being re-raised.
    """
    machine = RetryMachine(delays=tuple(delays))

    while not machine.done:
        try:
            value = operation()
        except Exception as e:  # every failure class is retried the same way
            machine.record_failure(e)
            logger.warning(
                "Attempt %d/%d failed: %s", machine.attempt, machine.max_attempts, e
            )
            if machine.state is RetryState.WAITING:
                delay = machine.current_delay()
                logger.debug("Waiting %.1fs before attempt %d", delay, machine.attempt + 1)
                sleep(delay)
                machine.resume()
        else:
            machine.record_success()
            return RetryResult(value=value, machine=machine)

    return RetryResult(value=None, machine=machine)
