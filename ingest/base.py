"""Base ingestor abstract class."""
from abc import ABC, abstractmethod
import pandas as pd
from common.logger import get_logger
from common.models import MarketSeries

class BaseIngestor(ABC):
    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    @abstractmethod
    def fetch(self, symbol: str, days: int = 365, include_quote: bool = True) -> MarketSeries:
        """Fetch daily history. Returns an empty MarketSeries when the provider fails."""
        pass

    def validate(self, df: pd.DataFrame) -> bool:
        required = {"close", "volume"}
        return not df.empty and required.issubset({c.lower() for c in df.columns})

    def to_series(self, df: pd.DataFrame, latest_price: float | None = None) -> MarketSeries:
        """Drop rows without a close; a missing volume stays NaN, aligned to its close."""
        df = df[df["close"].notna() & (df["close"] > 0)]
        closes = df["close"].astype(float).tolist()
        volumes = df["volume"].astype(float).tolist()
        price = latest_price or (closes[-1] if closes else 0.0)
        return MarketSeries(closes=closes, volumes=volumes, latest_price=float(price))
