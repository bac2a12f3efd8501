# refresh_timer.py
# Background thread that refreshes a RateStore now and then every N seconds.

import threading
from typing import Callable, Optional

import settings
from logging_setup import get_logger

log = get_logger(__name__)


class RefreshTimer:
    """Cancellable periodic task.

    Use it as a context manager so the thread is always stopped:

        with RefreshTimer(store.refresh):
            demo.launch()

    ``stop()`` interrupts the wait between runs; a fetch already in flight is
    allowed to finish.
    """

    def __init__(self, callback: Callable[[], object],
                 interval: float = settings.REFRESH_INTERVAL_SECS,
                 join_timeout: Optional[float] = settings.REQUEST_TIMEOUT_SECS + 1):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.callback = callback
        self.interval = interval
        self.join_timeout = join_timeout
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "RefreshTimer":
        if self.running:
            raise RuntimeError("RefreshTimer already started")
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="rate-refresh", daemon=True)
        self._thread.start()
        log.info("Rate refresh scheduled every %.0f s", self.interval)
        return self

    def stop(self) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(self.join_timeout)
            self._thread = None
            log.info("Rate refresh stopped")

    def _run(self) -> None:
        while not self._stopped.is_set():
            try:
                self.callback()
            except Exception:
                log.exception("Scheduled rate refresh raised")
            if self._stopped.wait(self.interval):
                break

    def __enter__(self) -> "RefreshTimer":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
