import asyncio
import time


class RateLimiter:
    """
    A simple token bucket / leaky bucket rate limiter for async operations.
    Ensures a minimum delay between acquisitions.
    """

    def __init__(self, calls_per_second: float = 1.0):
        self.delay = 1.0 / calls_per_second if calls_per_second > 0 else 0
        self.last_call = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self):
        """
        Waits until the rate limit allows for a new call.
        Shared by every task that talks to the same upstream, so acquisitions are serialized.
        """
        async with self._lock:
            # penalize() may push last_call forward while we sleep, so re-check after waking
            while True:
                wait_time = self.delay - (time.time() - self.last_call)
                if wait_time <= 0:
                    break
                await asyncio.sleep(wait_time)

            self.last_call = max(self.last_call, time.time())

    def penalize(self, seconds: float):
        """Pushes the next allowed call back, e.g. after a 429."""
        self.last_call = max(self.last_call, time.time() + seconds - self.delay)
