"""Backtest return aggregation -- per symbol and portfolio-wide."""
from typing import Optional, Sequence

import numpy as np

from common.models import BacktestOutcome, PortfolioBacktestSummary


def median(values: Sequence[float]) -> float:
    """Median of forward returns; an even count averages the two middle values."""
    if not len(values):
        return 0.0
    return float(np.median(np.asarray(values, dtype=float)))


def outcome_from_returns(symbol: str, returns: Sequence[float]) -> BacktestOutcome:
    """Fractions in, percentages out (one decimal). No signals -> all zeros."""
    if not returns:
        return BacktestOutcome(symbol=symbol)

    rets = np.asarray(returns, dtype=float)
    return BacktestOutcome(
        symbol=symbol,
        signal_count=len(rets),
        hit_rate_pct=round(float((rets > 0).mean()) * 100, 1),
        avg_return_pct=round(float(rets.mean()) * 100, 1),
        median_return_pct=round(median(rets) * 100, 1),
    )


def summarize(outcomes: Sequence[BacktestOutcome], lookahead_days: int, history_days: int,
              fear_greed: Optional[float] = None) -> PortfolioBacktestSummary:
    """
    Portfolio-wide view: unweighted mean of per-symbol rates.

    A symbol with zero signals still counts as 0% in every mean, so a thin
    symbol drags the averages down as much as a busy one.
    """
    def _mean(field: str) -> float:
        if not outcomes:
            return 0.0
        return round(sum(getattr(o, field) for o in outcomes) / len(outcomes), 1)

    return PortfolioBacktestSummary(
        lookahead_days=lookahead_days,
        history_days=history_days,
        fear_greed=fear_greed,
        total_signals=sum(o.signal_count for o in outcomes),
        avg_hit_rate_pct=_mean("hit_rate_pct"),
        avg_return_pct=_mean("avg_return_pct"),
        avg_median_return_pct=_mean("median_return_pct"),
        per_symbol=list(outcomes),
    )
