"""
Walk-forward backtest of the decision score.

For every day i from 200 on, the scorer only sees closes[:i + 1]. Actionable
signals (anything but WAIT) are scored against the close `lookahead_days`
later:

  forward return = (close[i + lookahead] - close[i]) / close[i]
"""
from typing import Sequence

from backtest.metrics import outcome_from_returns
from common.logger import get_logger
from common.models import Action, Asset, BacktestOutcome, MarketSeries
from scoring.aggregator import MIN_CLOSES, score

logger = get_logger("backtest")

MIN_HISTORY = 220


def forward_returns(asset: Asset, closes: Sequence[float], fear_greed: float,
                    lookahead_days: int) -> list[float]:
    returns = []
    for i in range(MIN_CLOSES, len(closes) - lookahead_days):
        price = closes[i]
        if not price or price <= 0:
            continue

        decision = score(
            price, closes[:i + 1],
            avg_cost=asset.avg_cost,
            current_alloc=asset.current_alloc,
            target_alloc=asset.target_alloc,
            fear_greed=fear_greed,
            budget=0,
        )
        if decision.insufficient or decision.action is Action.WAIT:
            continue

        future = closes[i + lookahead_days]
        if not future or future <= 0:
            continue
        returns.append((future - price) / price)
    return returns


def backtest(asset: Asset, historical_series: MarketSeries | Sequence[float],
             fear_greed: float, lookahead_days: int = 20,
             history_days: int = 720) -> BacktestOutcome:
    closes = (historical_series.closes if isinstance(historical_series, MarketSeries)
              else list(historical_series))

    if len(closes) < MIN_HISTORY:
        logger.warning(f"{asset.symbol}: {len(closes)} closes over {history_days}d, "
                       f"need {MIN_HISTORY} to backtest")
        return BacktestOutcome(symbol=asset.symbol)

    returns = forward_returns(asset, closes, fear_greed, lookahead_days)
    outcome = outcome_from_returns(asset.symbol, returns)
    logger.info(f"{asset.symbol} backtest: {outcome.signal_count} signals, "
                f"hit {outcome.hit_rate_pct}%, avg {outcome.avg_return_pct}% "
                f"({lookahead_days}d lookahead)")
    return outcome
