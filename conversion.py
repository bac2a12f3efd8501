# conversion.py
# Converter state as an immutable snapshot plus a pure reducer.
#
# The UI never edits state in place: every control fires an event and the
# page re-renders from reduce(state, event).

import math
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional

import settings


@dataclass(frozen=True)
class ConverterState:
    amount: float = settings.DEFAULT_AMOUNT
    source: str = settings.DEFAULT_SOURCE
    target: str = settings.DEFAULT_TARGET
    rates: Dict[str, float] = field(default_factory=dict)
    rates_version: int = 0
    updated_on: Optional[str] = None
    result: float = 0.0
    error: str = ""
    dark_mode: bool = False


# Events

@dataclass(frozen=True)
class SetAmount:
    value: object


@dataclass(frozen=True)
class SetSource:
    code: str


@dataclass(frozen=True)
class SetTarget:
    code: str


@dataclass(frozen=True)
class Swap:
    pass


@dataclass(frozen=True)
class RatesLoaded:
    rates: Mapping[str, float]
    version: int = 0
    updated_on: Optional[str] = None


@dataclass(frozen=True)
class RatesFailed:
    message: str = settings.ERROR_MESSAGE


@dataclass(frozen=True)
class ToggleDarkMode:
    pass


def parse_amount(value) -> float:
    """Coerce raw input to float; anything unparseable becomes NaN."""
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def convert(rates: Mapping[str, float], amount: float, source: str, target: str) -> Optional[float]:
    """(amount / rate[source]) * rate[target], rounded to 2 places.

    Returns None when either currency is missing from ``rates``. The amount is
    not validated: negatives give negative results, NaN gives NaN.
    """
    r_from = rates.get(source)
    r_to = rates.get(target)
    if not r_from or not r_to:
        return None
    return round((amount / r_from) * r_to, 2)


def _recompute(state: ConverterState, gated: bool = True) -> ConverterState:
    if gated and not state.amount > 0:
        return state
    result = convert(state.rates, state.amount, state.source, state.target)
    if result is None:
        return state
    return replace(state, result=result)


def reduce(state: ConverterState, event) -> ConverterState:
    if isinstance(event, SetAmount):
        return _recompute(replace(state, amount=parse_amount(event.value)))
    if isinstance(event, SetSource):
        return _recompute(replace(state, source=event.code))
    if isinstance(event, SetTarget):
        return _recompute(replace(state, target=event.code))
    if isinstance(event, Swap):
        return _recompute(replace(state, source=state.target, target=state.source))
    if isinstance(event, RatesLoaded):
        loaded = replace(
            state,
            rates=dict(event.rates),
            rates_version=event.version,
            updated_on=event.updated_on,
            error="",
        )
        # a fresh table always recomputes, whatever the amount
        return _recompute(loaded, gated=False)
    if isinstance(event, RatesFailed):
        return replace(state, error=event.message)
    if isinstance(event, ToggleDarkMode):
        return replace(state, dark_mode=not state.dark_mode)
    raise TypeError(f"Unknown event: {event!r}")


def sync_with_store(state: ConverterState, store) -> ConverterState:
    """Pull a newer RateTable (and the current error) from a RateStore."""
    rates, version, error, updated_on = store.snapshot()
    if version != state.rates_version:
        state = reduce(state, RatesLoaded(rates, version, updated_on))
    if error and error != state.error:
        state = reduce(state, RatesFailed(error))
    elif not error and state.error:
        state = replace(state, error="")
    return state


def flag_url(code: str) -> str:
    # First two letters of the currency code, not a real country lookup:
    # EUR -> "eu", XOF -> "xo".
    return settings.FLAG_URL.format(code=(code or "")[:2].lower())


def currency_choices(rates: Mapping[str, float]) -> List[str]:
    codes = set(rates)
    popular = [c for c in settings.POPULAR if c in codes]
    rest = sorted(c for c in codes if c not in popular)
    return popular + rest


def _fmt_amount(amount: float) -> str:
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def format_result(state: ConverterState) -> str:
    # nothing to show before the first conversion (0) or for NaN input
    if state.result == 0 or math.isnan(state.result):
        return ""
    return f"{_fmt_amount(state.amount)} {state.source} = {state.result:.2f} {state.target}"


def format_rate(state: ConverterState) -> str:
    if not state.rates.get(state.source) or not state.rates.get(state.target):
        return ""
    # unrounded so small rates (e.g. JPY -> USD) stay readable
    exact = state.rates[state.target] / state.rates[state.source]
    line = f"1 {state.source} = {exact:.6f} {state.target}"
    if state.updated_on:
        line += f"  (last update {state.updated_on})"
    return line
