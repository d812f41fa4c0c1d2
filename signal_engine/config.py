"""
Configuration for the signal pipeline.

``SignalOptions`` holds the field-name mapping used to read raw candles
and the indicator periods/thresholds.  Option names can be given in
snake_case or in the camelCase spelling used by upstream producers
(``emaPeriod``, ``timestampISO8601Key`` ...).  Values are validated
strictly: a period given as ``"30"`` or ``30.5`` is rejected rather than
coerced.
"""
from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


def _env(name: str, default: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    v = (os.environ if environ is None else environ).get(name)
    if v is None:
        return default
    v = v.strip()
    if (v.startswith('"') and v.endswith('"')) or (v.startswith("'") and v.endswith("'")):
        v = v[1:-1].strip()
    return v or default


ENV_PREFIX = "SIGNAL_"
LOG_LEVEL = (_env("SIGNAL_LOG_LEVEL", "INFO") or "INFO").upper()


class SignalOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    open_key: str = Field("open", alias="openKey", strict=True)
    close_key: str = Field("close", alias="closeKey", strict=True)
    low_key: str = Field("low", alias="lowKey", strict=True)
    high_key: str = Field("high", alias="highKey", strict=True)
    timestamp_key: str = Field(
        "timestamp",
        alias="timestampISO8601Key",
        strict=True,
        description="Field holding an ISO-8601 timestamp, compared as a string",
    )
    ema_period: int = Field(30, alias="emaPeriod", gt=0, strict=True)
    ema_buy_ratio: float = Field(
        0.005, alias="emaBuyRatio", strict=True, description="Buy band offset below the EMA (0.005 = 0.5%)"
    )
    ema_sell_ratio: float = Field(
        0.005, alias="emaSellRatio", strict=True, description="Sell band offset above the EMA"
    )
    macd_fast_period: int = Field(5, alias="macdFastPeriod", gt=0, strict=True)
    macd_slow_period: int = Field(10, alias="macdSlowPeriod", gt=0, strict=True)
    macd_signal_period: int = Field(7, alias="macdSignalPeriod", gt=0, strict=True)
    williams_r_period: int = Field(20, alias="williamsRPeriod", gt=0, strict=True)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SignalOptions":
        """
        Build options from ``SIGNAL_<FIELD>`` variables, e.g.
        ``SIGNAL_EMA_PERIOD=50`` or ``SIGNAL_CLOSE_KEY=c``.  Unset
        variables keep their defaults.
        """
        values: dict[str, Any] = {}
        for name, field in cls.model_fields.items():
            raw = _env(ENV_PREFIX + name.upper(), environ=environ)
            if raw is None:
                continue
            if field.annotation is int:
                values[name] = int(raw)
            elif field.annotation is float:
                values[name] = float(raw)
            else:
                values[name] = raw
        return cls(**values)


DEFAULT_OPTIONS = SignalOptions()


def _canonical(values: Mapping[str, Any]) -> dict[str, Any]:
    """Rename camelCase aliases to field names so later keys override earlier ones."""
    aliases = {f.alias: name for name, f in SignalOptions.model_fields.items() if f.alias}
    return {aliases.get(key, key): value for key, value in values.items()}


def resolve_options(options: Any = None, **overrides: Any) -> SignalOptions:
    """
    Merge ``options`` (None, a ``SignalOptions`` or a mapping of option
    names) with keyword ``overrides`` into one validated instance.
    """
    if options is None:
        base: dict[str, Any] = {}
    elif isinstance(options, SignalOptions):
        if not overrides:
            return options
        base = options.model_dump()
    elif isinstance(options, Mapping):
        base = _canonical(options)
    else:
        raise TypeError(f"options must be a SignalOptions or a mapping, got {type(options).__name__}")
    if not base and not overrides:
        return DEFAULT_OPTIONS
    return SignalOptions.model_validate({**base, **_canonical(overrides)})
