"""Valuation scorer: distance of price from the 200-day EMA."""
from scoring.base import BaseBand, BandContext, BandScore


class ValuationBand(BaseBand):
    name = "valuation"
    max_points = 30

    def evaluate(self, ctx: BandContext) -> BandScore:
        diff = (ctx.price - ctx.ema_long) / ctx.ema_long * 100
        if diff < -5:
            return BandScore(30, f"✅ Below EMA200 >5% ({diff:.1f}%)")
        if diff < 0:
            return BandScore(20, f"✅ Below EMA200 ({diff:.1f}%)")
        if diff < 10:
            return BandScore(10, f"⚠️ Slightly Above EMA200 (+{diff:.1f}%)")
        return BandScore(0, f"❌ Over EMA200 (+{diff:.1f}%)")
