"""
Auxiliary decision metrics.

Informational only, none of these feed the score. Each metric degrades to
None on its own when its input is missing:
  - avg cost comparison      needs avg_cost > 0
  - volume shock             needs >= 20 volumes and a positive 20-day mean
  - distance from ATH        high of closes and live price, needs it > 0
  - support distance         60-day low, needs that low > 0
  - risk/reward              |EMA200 - price| / support distance, needs distance > 0
"""
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from common.models import DecisionMetrics

VOLUME_WINDOW = 20
VOLUME_SHOCK_PCT = 50
SUPPORT_LOOKBACK = 60


def volume_shock(volumes: Optional[Sequence[float]]) -> tuple[Optional[float], Optional[bool]]:
    if volumes is None:
        return None, None
    vol = pd.Series(volumes, dtype=float).dropna()
    if len(vol) < VOLUME_WINDOW:
        return None, None
    last = vol.iloc[-1]
    avg20 = vol.iloc[-VOLUME_WINDOW:].mean()
    if not avg20 > 0:
        return None, None
    pct = (last - avg20) / avg20 * 100
    return round(float(pct), 2), bool(abs(pct) >= VOLUME_SHOCK_PCT)


def support_distance(price: float, close: pd.Series) -> Optional[float]:
    lookback = min(SUPPORT_LOOKBACK, len(close))
    if not lookback:
        return None
    support = close.iloc[-lookback:].min()
    if not support > 0:
        return None
    return round(float(price - support), 2)


def compute_metrics(price: float, closes: Sequence[float], ema_long: float, rsi: float,
                    avg_cost: float = 0.0,
                    volumes: Optional[Sequence[float]] = None) -> DecisionMetrics:
    close = pd.Series(closes, dtype=float)

    fields = {"rsi": round(rsi, 2), "ema_long": round(ema_long, 2)}

    if avg_cost and avg_cost > 0:
        fields.update(
            avg_cost_available=True,
            avg_cost_diff_abs=round(price - avg_cost, 2),
            avg_cost_diff_pct=round((price - avg_cost) / avg_cost * 100, 2),
            is_above_avg_cost=bool(price > avg_cost),
        )

    fields["volume_shock_pct"], fields["volume_shock_flag"] = volume_shock(volumes)

    # the live quote can print above the highest close
    ath = max(close.max(), price) if len(close) else np.nan
    if ath > 0:
        fields["dist_from_ath_pct"] = round(float((price - ath) / ath * 100), 2)

    distance = support_distance(price, close)
    fields["support_distance"] = distance
    upside = round(abs(ema_long - price), 2)
    if distance is not None and distance > 0:
        fields["risk_reward_ratio"] = round(upside / distance, 2)

    return DecisionMetrics(**fields)
