"""
Portfolio + budget loader.

Reads CSV exports of the two spreadsheet tabs:

  Portfolio_Summary  A=symbol  B=qty  E=avg cost  G=current %  H=target %
  Budget_Log         D=remaining budget (last row wins)

Cells may carry currency symbols, thousands separators or a % sign.
"""
import re
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from common.logger import get_logger
from common.models import Asset
from config.settings import AllocationConfig, DEFAULT_BUDGET
from scoring.allocation import derive_target_alloc

logger = get_logger("portfolio")

COL_SYMBOL, COL_QTY, COL_AVG_COST, COL_CURRENT, COL_TARGET = 0, 1, 4, 6, 7
COL_REMAINING = 3

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")


def clean_num(value) -> float:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return 0.0
    cleaned = _NON_NUMERIC.sub("", str(value))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def _cell(row: pd.Series, col: int):
    return row.iloc[col] if col < len(row) else None


def load_portfolio(path: Path, cfg: AllocationConfig | None = None) -> list[Asset]:
    cfg = cfg or AllocationConfig.from_env()
    df = pd.read_csv(path, header=0, dtype=str, keep_default_na=False)

    rows = [r for _, r in df.iterrows() if str(_cell(r, COL_SYMBOL) or "").strip()]
    if cfg.stock_count <= 0:
        stocks = sum(1 for r in rows if not cfg.is_crypto(str(_cell(r, COL_SYMBOL))))
        cfg = cfg.model_copy(update={"stock_count": stocks})

    assets = []
    for row in rows:
        symbol = str(_cell(row, COL_SYMBOL)).strip().upper()
        target_raw = str(_cell(row, COL_TARGET) or "").strip()
        target = clean_num(target_raw) / 100 if target_raw else derive_target_alloc(symbol, cfg)
        try:
            asset = Asset(
                symbol=symbol,
                qty=clean_num(_cell(row, COL_QTY)),
                avg_cost=clean_num(_cell(row, COL_AVG_COST)),
                current_alloc=clean_num(_cell(row, COL_CURRENT)) / 100,
                target_alloc=target,
            )
        except ValidationError as e:
            logger.warning(f"Skipping {symbol}: {e.errors()[0]['msg']}")
            continue
        logger.info(f"[Data] {symbol} | AvgCost: {asset.avg_cost} | "
                    f"Current: {asset.current_alloc * 100:.1f}% | Target: {asset.target_alloc * 100:.1f}%")
        assets.append(asset)
    return assets


def load_budget(path: Path, default: float = DEFAULT_BUDGET) -> float:
    if not Path(path).exists():
        logger.warning(f"No budget log at {path}. Using default {default}.")
        return default
    df = pd.read_csv(path, header=0, dtype=str, keep_default_na=False)
    if df.empty:
        return default
    return clean_num(_cell(df.iloc[-1], COL_REMAINING))
