"""
DCA Brain — Entry point
Prints the buy/accumulate/wait table for the portfolio, or a walk-forward backtest.
Run: python run.py [analyze | backtest [--lookahead N] [--days N] | serve]
"""
import argparse
import asyncio
import warnings
warnings.filterwarnings("ignore")

from common.logger import get_logger, new_request_id
from config.settings import (
    BACKTEST_DAYS, BACKTEST_LOOKAHEAD, BUDGET_CSV, DEFAULT_BUDGET, PORTFOLIO_CSV,
)

logger = get_logger("run")


def print_analysis():
    from api.main import ALLOCATION, fetch_sentiment, run_analysis
    from ingest.portfolio import load_budget, load_portfolio

    assets = load_portfolio(PORTFOLIO_CSV, ALLOCATION)
    budget = load_budget(BUDGET_CSV, DEFAULT_BUDGET)
    sentiment = asyncio.run(fetch_sentiment())
    results = asyncio.run(run_analysis(assets, budget, sentiment))

    print("\n" + "="*78)
    print(f"  🧠  DCA Brain  —  budget ${budget:,.0f}  |  "
          f"F&G crypto {sentiment['crypto']}  equity {sentiment['equity']}")
    print("="*78)
    print(f"{'Symbol':<8} {'Price':>11} {'Score':>6} {'RSI':>6} {'vs Avg':>8} {'USD':>6}  Action")
    print("-"*78)
    for r in results:
        if r.get("status") != "OK":
            print(f"{r['symbol']:<8} {'':>41}  ⚪ {r['status']}")
            continue
        m = r["metrics"]
        vs_avg = f"{m['avg_cost_diff_pct']:+.1f}%" if m["avg_cost_available"] else "n/a"
        print(
            f"{r['symbol']:<8}"
            f" {r['price']:>11,.2f}"
            f" {r['score']:>6}"
            f" {m['rsi']:>6.1f}"
            f" {vs_avg:>8}"
            f" {r['recommend_usd']:>6}"
            f"  {r['action_label']}"
        )
        for reason in r["reasons"]:
            print(f"{'':<10}{reason}")
    print("="*78 + "\n")


def print_backtest(lookahead: int, days: int):
    from api.main import ALLOCATION, fetch_sentiment, run_backtest
    from ingest.portfolio import load_portfolio

    assets = load_portfolio(PORTFOLIO_CSV, ALLOCATION)
    sentiment = asyncio.run(fetch_sentiment())
    summary = asyncio.run(run_backtest(assets, sentiment, lookahead, days))

    print("\n" + "="*64)
    print(f"  📊  Walk-forward backtest  —  {lookahead}d lookahead, {days}d history")
    print("="*64)
    print(f"{'Symbol':<8} {'Signals':>8} {'Hit %':>8} {'Avg %':>8} {'Median %':>10}")
    print("-"*64)
    for o in summary.per_symbol:
        print(f"{o.symbol:<8} {o.signal_count:>8} {o.hit_rate_pct:>8.1f} "
              f"{o.avg_return_pct:>8.1f} {o.median_return_pct:>10.1f}")
    print("-"*64)
    print(f"{'TOTAL':<8} {summary.total_signals:>8} {summary.avg_hit_rate_pct:>8.1f} "
          f"{summary.avg_return_pct:>8.1f} {summary.avg_median_return_pct:>10.1f}")
    print("="*64)
    print("  Averages are unweighted across symbols (0-signal symbols count as 0%).\n")


def main(argv=None):
    parser = argparse.ArgumentParser(description="DCA Brain")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("analyze")
    bt = sub.add_parser("backtest")
    bt.add_argument("--lookahead", type=int, default=BACKTEST_LOOKAHEAD)
    bt.add_argument("--days", type=int, default=BACKTEST_DAYS)
    srv = sub.add_parser("serve")
    srv.add_argument("--host", default="0.0.0.0")
    srv.add_argument("--port", type=int, default=3001)
    args = parser.parse_args(argv)

    new_request_id()
    if args.command == "backtest":
        print_backtest(args.lookahead, args.days)
    elif args.command == "serve":
        import uvicorn
        uvicorn.run("api.main:app", host=args.host, port=args.port)
    else:
        print_analysis()

if __name__ == "__main__":
    main()
