"""Core Pydantic models for DCA Brain."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Asset(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    avg_cost: float = Field(default=0.0, ge=0)
    current_alloc: float = Field(default=0.0, ge=0, le=1)
    target_alloc: float = Field(default=0.0, ge=0, le=1)
    qty: float = Field(default=0.0, ge=0)


class MarketSeries(BaseModel):
    """Daily closes/volumes for one symbol, oldest first."""
    closes: list[float] = []
    volumes: list[float] = []
    latest_price: float = 0.0

    @property
    def empty(self) -> bool:
        return not self.closes


class Action(str, Enum):
    WAIT = "WAIT"
    ACCUMULATE = "ACCUMULATE"
    BUY = "BUY"
    STRONG_BUY = "STRONG_BUY"

    @property
    def label(self) -> str:
        return {"STRONG_BUY": "STRONG_BUY 🚀", "BUY": "BUY ✅",
                "ACCUMULATE": "ACCUMULATE ⚠️"}.get(self.value, self.value)


class DecisionStatus(str, Enum):
    OK = "OK"
    INSUFFICIENT_DATA = "Insufficient Data"


class DecisionMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    avg_cost_available: bool = False
    avg_cost_diff_abs: Optional[float] = None
    avg_cost_diff_pct: Optional[float] = None
    is_above_avg_cost: Optional[bool] = None
    rsi: Optional[float] = None
    ema_long: Optional[float] = None
    volume_shock_pct: Optional[float] = None
    volume_shock_flag: Optional[bool] = None
    dist_from_ath_pct: Optional[float] = None
    support_distance: Optional[float] = None
    risk_reward_ratio: Optional[float] = None


INSUFFICIENT_REASON = "⚠️ Insufficient indicator data"


class Decision(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    action: Action
    recommend_usd: int = Field(ge=0)
    reasons: list[str]
    metrics: DecisionMetrics = DecisionMetrics()
    status: DecisionStatus = DecisionStatus.OK

    @property
    def insufficient(self) -> bool:
        return self.status is DecisionStatus.INSUFFICIENT_DATA

    @classmethod
    def insufficient_data(cls) -> "Decision":
        return cls(score=0, action=Action.WAIT, recommend_usd=0,
                   reasons=[INSUFFICIENT_REASON],
                   status=DecisionStatus.INSUFFICIENT_DATA)


class BacktestOutcome(BaseModel):
    symbol: str
    signal_count: int = Field(default=0, ge=0)
    hit_rate_pct: float = 0.0
    avg_return_pct: float = 0.0
    median_return_pct: float = 0.0


class PortfolioBacktestSummary(BaseModel):
    lookahead_days: int
    history_days: int
    fear_greed: Optional[float] = None
    total_signals: int = 0
    avg_hit_rate_pct: float = 0.0
    avg_return_pct: float = 0.0
    avg_median_return_pct: float = 0.0
    per_symbol: list[BacktestOutcome] = []
