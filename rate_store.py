# rate_store.py
# Latest USD-based rate table, fetched from exchangerate-api.com.

import threading
from typing import Dict, Optional

import requests

import settings
from logging_setup import get_logger

log = get_logger(__name__)


class RateFetchFailure(Exception):
    """Network error, non-success status or unusable payload from the provider."""


def _try_fetch(url, timeout):
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    return r.json()


def _validate(data) -> Dict[str, float]:
    # expected shape: {"base": "USD", "date": "YYYY-MM-DD", "rates": {"EUR": 0.92, ...}}
    if not isinstance(data, dict) or not isinstance(data.get("rates"), dict):
        raise RateFetchFailure("payload has no 'rates' mapping")
    rates = {}
    for code, value in data["rates"].items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise RateFetchFailure(f"rate for {code!r} is not a number: {value!r}")
        if not value > 0:
            raise RateFetchFailure(f"rate for {code!r} is not positive: {value!r}")
        rates[str(code)] = float(value)
    if not rates:
        raise RateFetchFailure("payload has an empty 'rates' mapping")
    return rates


def fetch_rates(url: str, timeout: float = settings.REQUEST_TIMEOUT_SECS):
    """GET the provider endpoint and return ``(rates, date)``.

    Raises RateFetchFailure for every kind of failure so callers only have one
    thing to catch.
    """
    try:
        data = _try_fetch(url, timeout)
    except (requests.RequestException, ValueError) as exc:
        raise RateFetchFailure(f"request to {url} failed: {exc}") from exc
    rates = _validate(data)
    return rates, data.get("date")


class RateStore:
    """Holds the freshest RateTable; ``refresh()`` replaces it wholesale.

    A refresh that starts while another one is still in flight is rejected
    rather than racing it.
    """

    def __init__(self, base: str = settings.BASE_CURRENCY, url: Optional[str] = None,
                 timeout: float = settings.REQUEST_TIMEOUT_SECS):
        self.base = base.upper()
        self.url = url or settings.rates_url(self.base)
        self.timeout = timeout
        self._rates: Dict[str, float] = {}
        self._error = ""
        self._version = 0
        self._updated_on: Optional[str] = None
        self._in_flight = threading.Lock()
        self._swap = threading.Lock()

    @property
    def rates(self) -> Dict[str, float]:
        with self._swap:
            return dict(self._rates)

    @property
    def error(self) -> str:
        return self._error

    @property
    def has_error(self) -> bool:
        return bool(self._error)

    @property
    def version(self) -> int:
        return self._version

    @property
    def updated_on(self) -> Optional[str]:
        return self._updated_on

    def snapshot(self):
        """Return ``(rates, version, error, updated_on)`` read together."""
        with self._swap:
            return dict(self._rates), self._version, self._error, self._updated_on

    def refresh(self) -> bool:
        if not self._in_flight.acquire(blocking=False):
            log.debug("Refresh already in flight, skipping")
            return False
        try:
            try:
                rates, updated_on = fetch_rates(self.url, self.timeout)
            except RateFetchFailure as exc:
                log.warning("Rate refresh failed, keeping %d cached rates: %s", len(self._rates), exc)
                with self._swap:
                    self._error = settings.ERROR_MESSAGE
                return False
            with self._swap:
                self._rates = rates
                self._updated_on = updated_on
                self._error = ""
                self._version += 1
            log.info("Loaded %d %s rates (date %s)", len(rates), self.base, updated_on)
            return True
        finally:
            self._in_flight.release()
