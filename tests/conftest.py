"""Pytest configuration."""
import sys
from pathlib import Path

import pytest

# Ensure project root is importable regardless of where pytest is invoked
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

PORTFOLIO_HEADER = "Symbol,Qty,Name,Value,Avg Cost,Price,Current %,Target %\n"


@pytest.fixture
def portfolio_csv(tmp_path):
    """Portfolio_Summary export: two stocks, one crypto, one blank row, one blank target."""
    path = tmp_path / "portfolio_summary.csv"
    path.write_text(
        PORTFOLIO_HEADER
        + 'AAPL,10,Apple,"$1,900.00","$175.50",190,12.5%,20%\n'
        + 'BTC,0.05,Bitcoin,"$3,000",60000,62000,5%,10%\n'
        + ',,,,,,,\n'
        + 'MSFT,4,Microsoft,1600,380,400,8%,\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def budget_csv(tmp_path):
    path = tmp_path / "budget_log.csv"
    path.write_text(
        "Date,Added,Spent,Remaining\n"
        "2026-09-01,500,200,300\n"
        '2026-10-01,500,\"$1,050.00\",\"$1,250.00\"\n',
        encoding="utf-8",
    )
    return path
