# processors/rate_limiter.py
import logging
import random
import threading
import time
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Keep a minimum delay between requests to the same host

    Safe to share between worker threads: each caller reserves the next free
    slot for its host under a lock and then sleeps outside it.
    """

    def __init__(self, delay=0.0, jitter=0.0, clock=time.monotonic, sleep=time.sleep):
        self.delay = max(0.0, delay)
        self.jitter = max(0.0, jitter)
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_slot = {}

    def wait(self, url):
        """Block until a request to ``url``'s host is allowed"""
        if not self.delay and not self.jitter:
            return

        host = urlparse(url).netloc
        with self._lock:
            now = self._clock()
            slot = max(now, self._next_slot.get(host, now))
            self._next_slot[host] = slot + self.delay + random.uniform(0, self.jitter)

        wait = slot - now
        if wait > 0:
            logger.debug(f"Waiting {wait:.2f}s before next request to {host}")
            self._sleep(wait)
