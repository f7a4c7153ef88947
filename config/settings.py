"""Configuration loader."""
import os
from pathlib import Path
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

ROOT_DIR = Path(__file__).parent.parent
load_dotenv(ROOT_DIR / ".env")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Spreadsheet exports (Portfolio_Summary / Budget_Log sheets saved as CSV)
PORTFOLIO_CSV = Path(os.getenv("PORTFOLIO_CSV", str(ROOT_DIR / "data" / "portfolio_summary.csv")))
BUDGET_CSV = Path(os.getenv("BUDGET_CSV", str(ROOT_DIR / "data" / "budget_log.csv")))
DEFAULT_BUDGET = float(os.getenv("DEFAULT_BUDGET", "300"))

HISTORY_DAYS = int(os.getenv("HISTORY_DAYS", "365"))
BACKTEST_DAYS = int(os.getenv("BACKTEST_DAYS", "720"))
BACKTEST_LOOKAHEAD = int(os.getenv("BACKTEST_LOOKAHEAD", "20"))

FEAR_GREED_URL = os.getenv("FEAR_GREED_URL", "https://api.alternative.me/fng/")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))


class AllocationConfig(BaseModel):
    """Target-allocation policy: which symbols are crypto and how weight is split."""
    model_config = ConfigDict(frozen=True)

    crypto_symbols: frozenset[str] = frozenset({"BTC", "ETH", "SOL"})
    crypto_target_pct: float = 0.10
    stock_total_target_pct: float = 0.90
    stock_count: int = 0

    def is_crypto(self, symbol: str) -> bool:
        return symbol.strip().upper() in self.crypto_symbols

    @classmethod
    def from_env(cls) -> "AllocationConfig":
        symbols = os.getenv("CRYPTO_SYMBOLS", "BTC,ETH,SOL")
        return cls(
            crypto_symbols=frozenset(s.strip().upper() for s in symbols.split(",") if s.strip()),
            crypto_target_pct=float(os.getenv("CRYPTO_TARGET_PCT", "0.10")),
            stock_total_target_pct=float(os.getenv("STOCK_TOTAL_TARGET_PCT", "0.90")),
            stock_count=int(os.getenv("STOCK_COUNT", "0")),
        )
