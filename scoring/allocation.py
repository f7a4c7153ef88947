"""Allocation discipline: reward buying what sits below its target weight."""
from config.settings import AllocationConfig
from scoring.base import BaseBand, BandContext, BandScore


class AllocationBand(BaseBand):
    name = "allocation"
    max_points = 20

    def evaluate(self, ctx: BandContext) -> BandScore:
        gap = (ctx.target_alloc - ctx.current_alloc) * 100
        if gap > 5:
            return BandScore(20, f"✅ Below Target >5% (Gap: {gap:.1f}%)")
        if gap > 0:
            return BandScore(10, f"⚠️ Below Target (Gap: {gap:.1f}%)")
        return BandScore(0)


def derive_target_alloc(symbol: str, cfg: AllocationConfig) -> float:
    """Default target weight when the portfolio sheet leaves it blank."""
    if cfg.is_crypto(symbol):
        return cfg.crypto_target_pct
    if cfg.stock_count <= 0:
        return 0.0
    return cfg.stock_total_target_pct / cfg.stock_count
