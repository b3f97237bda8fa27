"""Blocking poll loops with an injectable sleep."""
import logging
import time
from typing import Callable, Optional, TypeVar

from harbormaster.errors import PollTimeoutError
from harbormaster.models import PollState

logger = logging.getLogger(__name__)

T = TypeVar('T')

Sleep = Callable[[float], None]


def poll_until(fetch: Callable[[], T], condition: Callable[[T], bool], target: str,
               interval: float, max_attempts: Optional[int] = None,
               sleep: Sleep = time.sleep, log: Optional[logging.Logger] = None) -> T:
    """Wait, fetch, and test until condition holds.

    Each attempt sleeps for ``interval`` before fetching, so a freshly
    triggered provider action has a chance to register first.

    Args:
        fetch: Returns a fresh observation of the remote resource
        condition: True once the observation is what we are waiting for
        target: Human-readable description of what we are waiting for
        interval: Seconds between attempts
        max_attempts: Attempt ceiling, or None to wait indefinitely. A
            ceiling below 1 times out without fetching; PollSettings
            rejects such values
        sleep: Sleep function, replaced in tests
        log: Logger for progress messages

    Returns:
        The observation that satisfied the condition

    Raises:
        PollTimeoutError: If max_attempts observations all failed the condition
    """
    log = log or logger
    state = PollState(target=target, interval=interval, max_attempts=max_attempts)
    while not state.exhausted:
        sleep(state.interval)
        state.attempts += 1
        observed = fetch()
        if condition(observed):
            log.debug(f"Reached {state.target} after {state.attempts} attempt(s)")
            return observed
        log.debug(f"Waiting for {state.target} (attempt {state.attempts}/{state.max_attempts or 'unbounded'})")
    raise PollTimeoutError(f"Timed out waiting for {state.target} after {state.attempts} attempts")
