"""
DCA Brain — Decision aggregator

Sums five capped bands into a 0..100 score and maps it onto an action tier:

  Valuation vs EMA200   0-30
  RSI oscillator        0-15
  Trend direction       0-15
  Fear & Greed          0-20
  Allocation gap        0-20

  >= 85  STRONG_BUY  budget + 100
  >= 60  BUY         budget
  >= 40  ACCUMULATE  budget * 0.5
  else   WAIT        0

Band order is fixed; it decides the order of the reasons.
"""
import math
from typing import Optional, Sequence

from common.logger import get_logger
from common.models import Action, Asset, Decision, MarketSeries
from scoring.allocation import AllocationBand
from scoring.base import BandContext
from scoring.indicators import EMA_PERIOD, latest_indicators
from scoring.metrics import compute_metrics
from scoring.sentiment import SentimentBand
from scoring.trend import OscillatorBand, TrendBand
from scoring.valuation import ValuationBand

logger = get_logger("aggregator")

BANDS = (ValuationBand(), OscillatorBand(), TrendBand(), SentimentBand(), AllocationBand())

assert sum(b.max_points for b in BANDS) == 100, "Band caps must sum to 100"

MIN_CLOSES = EMA_PERIOD
STRONG_BUY_BONUS = 100


def action_from_score(score: int) -> Action:
    if score >= 85:   return Action.STRONG_BUY
    if score >= 60:   return Action.BUY
    if score >= 40:   return Action.ACCUMULATE
    return Action.WAIT


def recommend_usd(action: Action, budget: float) -> int:
    amount = {
        Action.STRONG_BUY: budget + STRONG_BUY_BONUS,
        Action.BUY:        budget,
        Action.ACCUMULATE: budget * 0.5,
    }.get(action, 0)
    return max(0, int(round(amount)))


def _valid_price(price: Optional[float]) -> bool:
    return price is not None and math.isfinite(price) and price > 0


def score(price: float, closes: Sequence[float], volumes: Optional[Sequence[float]] = None,
          avg_cost: float = 0.0, current_alloc: float = 0.0, target_alloc: float = 0.0,
          fear_greed: float = 50, budget: float = 0) -> Decision:
    """Score one asset as of the last close in `closes`."""
    indicators = latest_indicators(closes)
    if not indicators.ready or not _valid_price(price):
        return Decision.insufficient_data()

    ctx = BandContext(
        price=price,
        rsi=indicators.rsi,
        ema_long=indicators.ema_long,
        fear_greed=fear_greed,
        current_alloc=current_alloc,
        target_alloc=target_alloc,
    )

    total = 0
    reasons = []
    for band in BANDS:
        result = band.evaluate(ctx)
        total += result.points
        if result.reason:
            reasons.append(result.reason)

    action = action_from_score(total)
    return Decision(
        score=total,
        action=action,
        recommend_usd=recommend_usd(action, budget),
        reasons=reasons,
        metrics=compute_metrics(price, closes, indicators.ema_long, indicators.rsi,
                                avg_cost=avg_cost, volumes=volumes),
    )


def score_asset(asset: Asset, series: MarketSeries, fear_greed: float,
                budget: float = 0) -> Decision:
    """Score a portfolio holding, short-circuiting on missing price or short history."""
    if not series.latest_price or len(series.closes) < MIN_CLOSES:
        logger.warning(f"{asset.symbol}: insufficient data "
                       f"(price={series.latest_price}, closes={len(series.closes)})")
        return Decision.insufficient_data()

    decision = score(
        series.latest_price, series.closes, series.volumes or None,
        avg_cost=asset.avg_cost,
        current_alloc=asset.current_alloc,
        target_alloc=asset.target_alloc,
        fear_greed=fear_greed,
        budget=budget,
    )
    logger.info(f"{asset.symbol} score={decision.score} → {decision.action.value} "
                f"(${decision.recommend_usd})")
    return decision
