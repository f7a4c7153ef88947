"""Tests for the REST layer: presentation, concurrent analysis and backtest routes."""
import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from api.main import app, present_decision, run_analysis, run_backtest
from common.models import Asset, Decision, MarketSeries
from scoring.aggregator import score

JUMP = [100.0] * 200 + [110.0] * 20
SENTIMENT = {"crypto": 20, "equity": 60}
ASSETS = [
    Asset(symbol="AAPL", avg_cost=100, current_alloc=0.10, target_alloc=0.30),
    Asset(symbol="BTC", avg_cost=0, current_alloc=0.05, target_alloc=0.08),
]


def fake_fetch(symbol, days=365, include_quote=True):
    if symbol == "NEW":
        return MarketSeries(closes=[100.0] * 50, latest_price=100.0)
    return MarketSeries(closes=JUMP, volumes=[1000.0] * len(JUMP), latest_price=110.0)


@pytest.fixture
def client():
    return TestClient(app)


class TestPresentDecision:
    def test_insufficient_is_status_only(self):
        payload = present_decision("AAPL", 0.0, Decision.insufficient_data())
        assert payload == {"symbol": "AAPL", "status": "Insufficient Data"}

    def test_label_added_at_boundary(self):
        payload = present_decision("AAPL", 110.0, score(110.0, JUMP))
        assert payload["symbol"] == "AAPL"
        assert payload["price"] == 110.0
        assert payload["action"] == "WAIT"
        assert payload["action_label"] == "WAIT"
        assert payload["status"] == "OK"
        assert "rsi" in payload["metrics"]


class TestRunAnalysis:
    @pytest.mark.asyncio
    async def test_sentiment_source_per_asset_class(self):
        with patch("api.main.INGESTOR.fetch", side_effect=fake_fetch):
            results = await run_analysis(ASSETS, 300, SENTIMENT)

        aapl, btc = results
        # equity F&G 60 -> no sentiment points: valuation 10 + trend 15 + allocation 20
        assert aapl["score"] == 45
        assert aapl["action"] == "ACCUMULATE"
        assert aapl["recommend_usd"] == 150
        # crypto F&G 20 -> +20: valuation 10 + trend 15 + sentiment 20 + allocation 10
        assert btc["score"] == 55
        assert btc["metrics"]["avg_cost_available"] is False

    @pytest.mark.asyncio
    async def test_insufficient_history(self):
        with patch("api.main.INGESTOR.fetch", side_effect=fake_fetch):
            results = await run_analysis([Asset(symbol="NEW")], 300, SENTIMENT)
        assert results == [{"symbol": "NEW", "status": "Insufficient Data"}]


class TestRunBacktest:
    @pytest.mark.asyncio
    async def test_short_history_yields_zero_summary(self):
        with patch("api.main.INGESTOR.fetch", side_effect=fake_fetch):
            summary = await run_backtest(ASSETS, SENTIMENT, lookahead=20, days=720)
        assert summary.total_signals == 0
        assert summary.avg_hit_rate_pct == 0.0
        assert summary.fear_greed == 20
        assert [o.symbol for o in summary.per_symbol] == ["AAPL", "BTC"]


class TestRoutes:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_analyze(self, client):
        with patch("api.main.load_portfolio", return_value=ASSETS), \
             patch("api.main.load_budget", return_value=300.0), \
             patch("api.main.fetch_sentiment", new=AsyncMock(return_value=SENTIMENT)), \
             patch("api.main.INGESTOR.fetch", side_effect=fake_fetch):
            resp = client.get("/api/analyze")
        assert resp.status_code == 200
        body = resp.json()
        assert body["budget_remaining"] == 300.0
        assert body["fear_greed"] == SENTIMENT
        assert [r["symbol"] for r in body["analysis"]] == ["AAPL", "BTC"]

    def test_analyze_overspent_budget(self, client):
        with patch("api.main.load_portfolio", return_value=ASSETS), \
             patch("api.main.load_budget", return_value=-120.0), \
             patch("api.main.fetch_sentiment", new=AsyncMock(return_value=SENTIMENT)), \
             patch("api.main.INGESTOR.fetch", side_effect=fake_fetch):
            resp = client.get("/analyze")
        assert resp.status_code == 200
        body = resp.json()
        assert body["budget_remaining"] == -120.0
        assert [r["action"] for r in body["analysis"]] == ["ACCUMULATE", "ACCUMULATE"]
        assert [r["recommend_usd"] for r in body["analysis"]] == [0, 0]

    def test_analyze_missing_portfolio(self, client):
        with patch("api.main.load_portfolio", side_effect=FileNotFoundError("portfolio_summary.csv")):
            resp = client.get("/analyze")
        assert resp.status_code == 500
        assert "portfolio_summary.csv" in resp.json()["detail"]

    def test_backtest(self, client):
        with patch("api.main.load_portfolio", return_value=ASSETS), \
             patch("api.main.fetch_sentiment", new=AsyncMock(return_value=SENTIMENT)), \
             patch("api.main.INGESTOR.fetch", side_effect=fake_fetch):
            resp = client.get("/backtest", params={"lookahead": 10, "days": 400})
        assert resp.status_code == 200
        body = resp.json()
        assert body["lookahead_days"] == 10
        assert body["history_days"] == 400
        # days 200..209 are all actionable and the price never moves again
        assert body["total_signals"] == 20
        assert body["avg_hit_rate_pct"] == 0.0
        assert body["avg_return_pct"] == 0.0
        assert len(body["per_symbol"]) == 2

    def test_backtest_rejects_bad_lookahead(self, client):
        assert client.get("/backtest", params={"lookahead": 0}).status_code == 422
