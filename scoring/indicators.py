"""
Indicator calculator: RSI and EMA over daily closes.

RSI (Wilder):
  first avg gain/loss = simple mean of the first `period` price changes
  avg[t] = (avg[t-1] * (period - 1) + x[t]) / period
  RSI = 100 - 100 / (1 + avg_gain / avg_loss)

EMA:
  seed = simple mean of the first `period` closes
  ema[t] = ema[t-1] + k * (close[t] - ema[t-1]),  k = 2 / (period + 1)

Both return the last value only, or None when the series is shorter than the
window or contains non-finite values.
"""
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

RSI_PERIOD = 14
EMA_PERIOD = 200


@dataclass(frozen=True)
class IndicatorSnapshot:
    rsi: Optional[float]
    ema_long: Optional[float]

    @property
    def ready(self) -> bool:
        return self.rsi is not None and self.ema_long is not None


def _as_series(values: Sequence[float]) -> pd.Series | None:
    series = pd.Series(values, dtype=float).reset_index(drop=True)
    if not np.isfinite(series.to_numpy()).all():
        return None
    return series


def _seeded_ewm(values: pd.Series, period: int, **ewm_kwargs) -> float:
    """Seed with the SMA of the first `period` values, then smooth the rest."""
    seed = pd.Series([values.iloc[:period].mean()])
    smoothed = pd.concat([seed, values.iloc[period:]], ignore_index=True)
    return float(smoothed.ewm(adjust=False, **ewm_kwargs).mean().iloc[-1])


def ema(closes: Sequence[float], period: int = EMA_PERIOD) -> Optional[float]:
    close = _as_series(closes)
    if close is None or len(close) < period:
        return None
    return _seeded_ewm(close, period, span=period)


def rsi(closes: Sequence[float], period: int = RSI_PERIOD) -> Optional[float]:
    close = _as_series(closes)
    if close is None or len(close) <= period:
        return None

    delta = close.diff().iloc[1:].reset_index(drop=True)
    avg_gain = _seeded_ewm(delta.clip(lower=0), period, alpha=1 / period)
    avg_loss = _seeded_ewm((-delta).clip(lower=0), period, alpha=1 / period)

    if avg_loss == 0:
        return 100.0
    if avg_gain == 0:
        return 0.0
    return 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)


def latest_indicators(closes: Sequence[float]) -> IndicatorSnapshot:
    return IndicatorSnapshot(rsi=rsi(closes), ema_long=ema(closes))
