"""Tests for the walk-forward backtest and its aggregation."""
import pytest
from unittest.mock import patch

from backtest.metrics import median, outcome_from_returns, summarize
from backtest.simulator import backtest
from common.models import Asset, BacktestOutcome, MarketSeries
from scoring.aggregator import score

ZERO = {"signal_count": 0, "hit_rate_pct": 0.0, "avg_return_pct": 0.0, "median_return_pct": 0.0}


def rising(n=300):
    return [100 + i * 0.5 for i in range(n)]


def falling(n=260):
    return [300.0 - i for i in range(n)]


class TestMedian:
    def test_odd(self):
        assert median([0.10, -0.05, 0.02]) == pytest.approx(0.02)

    def test_even_averages_middle(self):
        assert median([-0.05, 0.02, 0.10, 0.20]) == pytest.approx(0.06)

    def test_empty(self):
        assert median([]) == 0.0


class TestOutcome:
    def test_no_signals_reports_zeros(self):
        outcome = outcome_from_returns("AAPL", [])
        assert outcome.model_dump(exclude={"symbol"}) == ZERO

    def test_rates_in_percent(self):
        outcome = outcome_from_returns("AAPL", [-0.05, 0.02, 0.10])
        assert outcome.signal_count == 3
        assert outcome.hit_rate_pct == 66.7
        assert outcome.avg_return_pct == 2.3
        assert outcome.median_return_pct == 2.0

    def test_even_median(self):
        outcome = outcome_from_returns("AAPL", [-0.05, 0.02, 0.10, 0.20])
        assert outcome.hit_rate_pct == 75.0
        assert outcome.median_return_pct == 6.0

    def test_zero_return_is_not_a_hit(self):
        assert outcome_from_returns("X", [0.0, 0.01]).hit_rate_pct == 50.0


class TestSummary:
    def test_unweighted_mean_counts_empty_symbols(self):
        busy = BacktestOutcome(symbol="BTC", signal_count=50, hit_rate_pct=60.0,
                               avg_return_pct=4.0, median_return_pct=3.0)
        idle = BacktestOutcome(symbol="AAPL")
        summary = summarize([busy, idle], lookahead_days=20, history_days=720, fear_greed=30)
        assert summary.total_signals == 50
        assert summary.avg_hit_rate_pct == 30.0
        assert summary.avg_return_pct == 2.0
        assert summary.avg_median_return_pct == 1.5
        assert summary.lookahead_days == 20
        assert summary.history_days == 720
        assert summary.fear_greed == 30
        assert [o.symbol for o in summary.per_symbol] == ["BTC", "AAPL"]

    def test_empty_portfolio(self):
        summary = summarize([], lookahead_days=20, history_days=720)
        assert summary.total_signals == 0
        assert summary.avg_hit_rate_pct == 0.0
        assert summary.per_symbol == []


class TestBacktest:
    def setup_method(self):
        self.asset = Asset(symbol="AAPL", avg_cost=120, current_alloc=0.1, target_alloc=0.1)

    def test_short_history_returns_zero_outcome(self):
        outcome = backtest(self.asset, [100.0] * 219, fear_greed=10)
        assert outcome.symbol == "AAPL"
        assert outcome.model_dump(exclude={"symbol"}) == ZERO

    def test_no_actionable_signals(self):
        # steady uptrend: far above EMA200, RSI 100 -> trend band only -> WAIT
        outcome = backtest(self.asset, rising(), fear_greed=50, lookahead_days=20)
        assert outcome.model_dump(exclude={"symbol"}) == ZERO

    def test_every_day_signals_in_downtrend(self):
        # below EMA200 (+30) and RSI 0 (+15) -> ACCUMULATE on every day
        closes = falling()
        outcome = backtest(self.asset, closes, fear_greed=50, lookahead_days=20)
        assert outcome.signal_count == len(closes) - 20 - 200
        assert outcome.hit_rate_pct == 0.0
        assert outcome.avg_return_pct < 0
        assert outcome.median_return_pct < 0

    def test_accepts_market_series(self):
        closes = falling()
        as_list = backtest(self.asset, closes, fear_greed=50)
        as_series = backtest(self.asset, MarketSeries(closes=closes, latest_price=closes[-1]),
                             fear_greed=50)
        assert as_list == as_series

    def test_lookahead_longer_than_tail(self):
        outcome = backtest(self.asset, falling(230), fear_greed=50, lookahead_days=40)
        assert outcome.signal_count == 0

    def test_sentiment_can_make_signals_actionable(self):
        quiet = backtest(self.asset, rising(), fear_greed=50)
        fearful = Asset(symbol="AAPL", current_alloc=0.0, target_alloc=0.3)
        loud = backtest(fearful, rising(), fear_greed=10)
        # trend 15 + sentiment 20 + allocation 20 = 55 -> ACCUMULATE
        assert quiet.signal_count == 0
        assert loud.signal_count == 300 - 20 - 200
        assert loud.hit_rate_pct == 100.0

    def test_walk_forward_never_sees_the_future(self):
        closes = falling()
        seen = []

        def spy(price, prefix, **kwargs):
            seen.append((price, len(prefix)))
            assert kwargs["budget"] == 0
            return score(price, prefix, **kwargs)

        with patch("backtest.simulator.score", side_effect=spy):
            backtest(self.asset, closes, fear_greed=50, lookahead_days=20)

        assert [n for _, n in seen] == list(range(201, len(closes) - 20 + 1))
        assert all(price == closes[n - 1] for price, n in seen)
