"""Recurring rental-hour timer with explicit start/cancel."""
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Countdown:
    """Calls on_tick every interval_sec on a daemon thread until cancelled.

    cancel() never blocks, so it is safe to call while holding a lock the
    tick callback also takes, or from inside on_tick. A tick that already
    woke up may still run once; callers that must not see it compare the
    handle passed to on_tick against their current one.
    """

    def __init__(self, interval_sec: float, on_tick: Callable[["Countdown"], None]) -> None:
        self.interval_sec = interval_sec
        self._on_tick = on_tick
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and not self._stop.is_set()

    def start(self) -> None:
        if self.running:
            return
        self._stop = threading.Event()
        stop = self._stop

        def _loop() -> None:
            while not stop.wait(timeout=self.interval_sec):
                try:
                    self._on_tick(self)
                except Exception as e:
                    logger.warning("Countdown tick: %s", e)

        self._thread = threading.Thread(target=_loop, daemon=True)
        self._thread.start()
        logger.debug("Countdown started (interval %.1fs)", self.interval_sec)

    def cancel(self) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread = None
        logger.debug("Countdown cancelled")
