"""DCA Brain — FastAPI REST API."""
import asyncio
from datetime import datetime, timezone
from fastapi import FastAPI, HTTPException, APIRouter, Query
from fastapi.middleware.cors import CORSMiddleware

from backtest.metrics import summarize
from backtest.simulator import backtest
from common.logger import get_logger, new_request_id
from common.models import Asset, Decision, PortfolioBacktestSummary
from config.settings import (
    AllocationConfig, BACKTEST_DAYS, BACKTEST_LOOKAHEAD, BUDGET_CSV, DEFAULT_BUDGET,
    HISTORY_DAYS, PORTFOLIO_CSV,
)
from ingest.fear_greed import crypto_fear_greed, equity_fear_greed, fear_greed_for
from ingest.portfolio import load_budget, load_portfolio
from ingest.yahoo_finance import YahooFinanceIngestor
from scoring.aggregator import score_asset

logger = get_logger("api")

ALLOCATION = AllocationConfig.from_env()
INGESTOR = YahooFinanceIngestor(ALLOCATION)


def present_decision(symbol: str, price: float, decision: Decision) -> dict:
    """Wire shape for one asset; presentation labels are added only here."""
    if decision.insufficient:
        return {"symbol": symbol, "status": decision.status.value}
    payload = decision.model_dump(mode="json")
    payload.update(symbol=symbol, price=price, action_label=decision.action.label)
    return payload


async def fetch_sentiment() -> dict[str, int]:
    crypto, equity = await asyncio.gather(
        asyncio.to_thread(crypto_fear_greed),
        asyncio.to_thread(equity_fear_greed, INGESTOR),
    )
    return {"crypto": crypto, "equity": equity}


async def analyze_asset(asset: Asset, budget: float, sentiment: dict[str, int]) -> dict:
    series = await asyncio.to_thread(INGESTOR.fetch, asset.symbol, HISTORY_DAYS)
    fng = fear_greed_for(asset.symbol, ALLOCATION, sentiment["crypto"], sentiment["equity"])
    decision = score_asset(asset, series, fng, budget)
    return present_decision(asset.symbol, series.latest_price, decision)


async def run_analysis(assets: list[Asset], budget: float, sentiment: dict[str, int]) -> list[dict]:
    logger.info(f"🔄 Analyzing {len(assets)} assets, budget={budget}, sentiment={sentiment}")
    return list(await asyncio.gather(*(analyze_asset(a, budget, sentiment) for a in assets)))


async def backtest_asset(asset: Asset, sentiment: dict[str, int], lookahead: int, days: int):
    series = await asyncio.to_thread(INGESTOR.fetch, asset.symbol, days, False)
    fng = fear_greed_for(asset.symbol, ALLOCATION, sentiment["crypto"], sentiment["equity"])
    return await asyncio.to_thread(backtest, asset, series, fng, lookahead, days)


async def run_backtest(assets: list[Asset], sentiment: dict[str, int],
                       lookahead: int, days: int) -> PortfolioBacktestSummary:
    logger.info(f"🔄 Backtesting {len(assets)} assets, lookahead={lookahead}d, history={days}d")
    outcomes = await asyncio.gather(*(backtest_asset(a, sentiment, lookahead, days) for a in assets))
    summary = summarize(outcomes, lookahead, days, fear_greed=sentiment["crypto"])
    logger.info(f"🏁 Backtest done: {summary.total_signals} signals, "
                f"avg hit rate {summary.avg_hit_rate_pct}%")
    return summary


app = FastAPI(title="DCA Brain API", version="0.1.0")

app.add_middleware(CORSMiddleware,
    allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

router = APIRouter()

@router.get("/health")
def health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

@router.get("/analyze")
async def analyze():
    new_request_id()
    try:
        assets = load_portfolio(PORTFOLIO_CSV, ALLOCATION)
        budget = load_budget(BUDGET_CSV, DEFAULT_BUDGET)
        sentiment = await fetch_sentiment()
        results = await run_analysis(assets, budget, sentiment)
        return {"budget_remaining": budget, "fear_greed": sentiment, "analysis": results}
    except Exception as e:
        logger.error(f"❌ Analyze failed: {e}")
        raise HTTPException(500, str(e))

@router.get("/backtest", response_model=PortfolioBacktestSummary)
async def backtest_portfolio(lookahead: int = Query(BACKTEST_LOOKAHEAD, ge=1),
                             days: int = Query(BACKTEST_DAYS, ge=1)):
    new_request_id()
    try:
        assets = load_portfolio(PORTFOLIO_CSV, ALLOCATION)
        sentiment = await fetch_sentiment()
        return await run_backtest(assets, sentiment, lookahead, days)
    except Exception as e:
        logger.error(f"❌ Backtest failed: {e}")
        raise HTTPException(500, str(e))

app.include_router(router)
app.include_router(router, prefix="/api")
