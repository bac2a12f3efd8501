# settings.py
# Runtime constants for the converter. Every value can be overridden through
# the environment so the app can point at a mirror or a test server.

import os

RATES_URL = os.getenv("FX_RATES_URL", "https://api.exchangerate-api.com/v4/latest/{base}")
BASE_CURRENCY = os.getenv("FX_BASE_CURRENCY", "USD").upper()
REFRESH_INTERVAL_SECS = float(os.getenv("FX_REFRESH_INTERVAL_SECS", "300"))
REQUEST_TIMEOUT_SECS = float(os.getenv("FX_REQUEST_TIMEOUT_SECS", "10"))
UI_SYNC_SECS = float(os.getenv("FX_UI_SYNC_SECS", "5"))
LOG_LEVEL = os.getenv("FX_LOG_LEVEL", "INFO").upper()

FLAG_URL = "https://flagcdn.com/w40/{code}.png"
ERROR_MESSAGE = "Failed to fetch exchange rates. Try again later."

DEFAULT_AMOUNT = 1.0
DEFAULT_SOURCE = "USD"
DEFAULT_TARGET = "EUR"
POPULAR = ["USD", "EUR", "GBP", "PKR", "INR", "AED", "SAR", "CNY", "JPY"]


def rates_url(base: str = BASE_CURRENCY) -> str:
    return RATES_URL.format(base=base.upper())
