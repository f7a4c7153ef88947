"""Yahoo Finance ingestor via yfinance."""
from datetime import datetime, timedelta
import pandas as pd
from config.settings import AllocationConfig
from common.models import MarketSeries
from ingest.base import BaseIngestor

class YahooFinanceIngestor(BaseIngestor):
    def __init__(self, allocation: AllocationConfig | None = None):
        super().__init__()
        self.allocation = allocation or AllocationConfig.from_env()

    def yahoo_symbol(self, symbol: str) -> str:
        sym = symbol.strip().upper()
        if self.allocation.is_crypto(sym):
            sym += "-USD"
        return sym

    def fetch(self, symbol: str, days: int = 365, include_quote: bool = True) -> MarketSeries:
        ticker = self.yahoo_symbol(symbol)
        try:
            self.logger.info(f"Fetching {ticker} ({days}d) from Yahoo Finance...")
            df = self._download(ticker, days)
            if not self.validate(df):
                raise ValueError("Empty response")
            price = self._quote(ticker) if include_quote else None
            series = self.to_series(df, latest_price=price)
            self.logger.info(f"Got {len(series.closes)} closes for {ticker}, price={series.latest_price}")
            return series
        except Exception as e:
            self.logger.warning(f"Yahoo Finance failed for {ticker}: {e}")
            return MarketSeries()

    def last_close(self, ticker: str, days: int = 30) -> float | None:
        """Latest close for an index ticker such as ^VIX (no crypto mapping)."""
        try:
            df = self._download(ticker, days)
            closes = df["close"].dropna() if "close" in df.columns else pd.Series(dtype=float)
            return float(closes.iloc[-1]) if len(closes) else None
        except Exception as e:
            self.logger.warning(f"Failed to fetch {ticker}: {e}")
            return None

    def _download(self, ticker: str, days: int) -> pd.DataFrame:
        import yfinance as yf
        end = datetime.now()
        df = yf.download(ticker, start=end - timedelta(days=days), end=end,
                         interval="1d", progress=False, auto_adjust=True)
        if isinstance(df.columns, pd.MultiIndex):
            df.columns = [c[0].lower() for c in df.columns]
        else:
            df.columns = [str(c).lower() for c in df.columns]
        return df

    def _quote(self, ticker: str) -> float | None:
        try:
            import yfinance as yf
            price = yf.Ticker(ticker).fast_info["last_price"]
            return float(price) if price and price > 0 else None
        except Exception as e:
            self.logger.warning(f"Quote failed for {ticker}: {e}. Using last close.")
            return None
