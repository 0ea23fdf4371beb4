import random
import threading
import time
from uuid import uuid4

from group_dining.core.config import settings
from group_dining.interfaces.IIdGenerator import IIdGenerator


class TimestampIdGenerator(IIdGenerator):
    """
    SESSION_<epochMillis> and ORD_<epochMillis>_<0..999>.
    Millis are forced strictly increasing within the process so two calls in
    the same millisecond still get distinct ids.
    """

    def __init__(self, clock_ms=None):
        self._clock_ms = clock_ms or (lambda: int(time.time() * 1000))
        self._last_ms = 0
        self._lock = threading.Lock()  # sync endpoints run in a threadpool

    def _next_ms(self) -> int:
        with self._lock:
            now_ms = self._clock_ms()
            if now_ms <= self._last_ms:
                now_ms = self._last_ms + 1
            self._last_ms = now_ms
            return now_ms

    def session_id(self) -> str:
        return f"SESSION_{self._next_ms()}"

    def order_id(self) -> str:
        return f"ORD_{self._next_ms()}_{random.randint(0, 999)}"


class UuidIdGenerator(IIdGenerator):
    def session_id(self) -> str:
        return f"SESSION_{uuid4().hex}"

    def order_id(self) -> str:
        return f"ORD_{uuid4().hex}"


def build_id_generator(strategy: str | None = None) -> IIdGenerator:
    strategy = (strategy or settings.ID_STRATEGY).strip().lower()
    if strategy == "uuid":
        return UuidIdGenerator()
    if strategy == "timestamp":
        return TimestampIdGenerator()
    raise ValueError(f"Unknown ID_STRATEGY: {strategy}")
