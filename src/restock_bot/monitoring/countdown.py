"""Fixed-length countdown between availability checks"""

import asyncio
from typing import Awaitable, Callable, Optional


def print_remaining(remaining: int):
    """Overwrite the same terminal line each tick, ending it on the last one"""
    print(f"\rRetrying in {remaining}s...", end="" if remaining else "\n", flush=True)


class Countdown:
    """
    Counts down one second at a time, reporting the seconds left.

    Reports go out as N, N-1, ... 1 before each one-second delay and a final
    0 once the wait is over, so a run of N seconds makes N delays and N + 1
    reports. remaining is observable while the countdown runs. The delay
    coroutine is injectable so the same reports can be produced without
    sleeping.
    """

    def __init__(self, seconds: int,
                 delay: Callable[[float], Awaitable] = asyncio.sleep,
                 reporter: Optional[Callable[[int], None]] = print_remaining):
        if seconds <= 0:
            raise ValueError(f"Countdown length must be positive, got {seconds}")
        self.seconds = seconds
        self.delay = delay
        self.reporter = reporter
        self.remaining = seconds

    @property
    def elapsed(self) -> int:
        return self.seconds - self.remaining

    def _report(self):
        if self.reporter:
            self.reporter(self.remaining)

    async def run(self) -> int:
        """Wait out the full countdown; returns the number of seconds waited"""
        self.remaining = self.seconds
        while self.remaining > 0:
            self._report()
            await self.delay(1)
            self.remaining -= 1
        self._report()
        return self.elapsed
