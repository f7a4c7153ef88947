"""
Fear & Greed sentiment sources.

Crypto: alternative.me Fear & Greed index (0..100), no API key required.
Stocks: VIX proxy -- the latest ^VIX close mapped onto 0..100, piecewise
linear between the anchors below (low VIX = greed, high VIX = fear).

  VIX   10   15   20   30   40
  F&G   90   70   50   25    5
"""
import numpy as np
import requests

from common.logger import get_logger
from config.settings import FEAR_GREED_URL, HTTP_TIMEOUT, AllocationConfig
from ingest.yahoo_finance import YahooFinanceIngestor

logger = get_logger("fear_greed")

NEUTRAL = 50
VIX_TICKER = "^VIX"
VIX_ANCHORS = [10, 15, 20, 30, 40]
FNG_ANCHORS = [90, 70, 50, 25, 5]


def crypto_fear_greed(url: str = FEAR_GREED_URL) -> int:
    try:
        resp = requests.get(url, timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
        value = int(resp.json()["data"][0]["value"])
        logger.info(f"Crypto Fear & Greed: {value}")
        return value
    except Exception as e:
        logger.warning(f"Fear & Greed index failed: {e}. Using neutral {NEUTRAL}.")
        return NEUTRAL


def vix_to_fear_greed(vix: float) -> int:
    return int(round(float(np.interp(vix, VIX_ANCHORS, FNG_ANCHORS))))


def equity_fear_greed(ingestor: YahooFinanceIngestor | None = None) -> int:
    ingestor = ingestor or YahooFinanceIngestor()
    vix = ingestor.last_close(VIX_TICKER)
    if vix is None:
        logger.warning(f"No VIX data. Using neutral {NEUTRAL}.")
        return NEUTRAL
    value = vix_to_fear_greed(vix)
    logger.info(f"Equity Fear & Greed (VIX {vix:.2f}): {value}")
    return value


def fear_greed_for(symbol: str, cfg: AllocationConfig, crypto: float, equity: float) -> float:
    return crypto if cfg.is_crypto(symbol) else equity
