"""Logging helpers shared by the converter modules."""

from __future__ import annotations

import logging
from typing import Optional

import settings

_CONFIGURED: Optional[bool] = None


def get_logger(name: str = "fx_widget") -> logging.Logger:
    """Return a named logger, configuring the root handler on first use."""
    global _CONFIGURED
    if _CONFIGURED is None:
        logging.basicConfig(
            level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        _CONFIGURED = True
    return logging.getLogger(name)
