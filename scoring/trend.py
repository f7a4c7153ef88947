"""Trend scorers: RSI oscillator + price vs EMA200 direction."""
from scoring.base import BaseBand, BandContext, BandScore


class OscillatorBand(BaseBand):
    name = "oscillator"
    max_points = 15

    def evaluate(self, ctx: BandContext) -> BandScore:
        # RSI: <30 oversold, 30-50 low, >=50 neutral/overbought -> no points
        if ctx.rsi < 30:
            return BandScore(15, f"✅ RSI Oversold ({ctx.rsi:.0f})")
        if ctx.rsi < 50:
            return BandScore(10, f"⚠️ RSI Low ({ctx.rsi:.0f})")
        return BandScore(0)


class TrendBand(BaseBand):
    name = "trend"
    max_points = 15

    def evaluate(self, ctx: BandContext) -> BandScore:
        if ctx.price > ctx.ema_long:
            return BandScore(15, "✅ Uptrend (Above EMA200)")
        return BandScore(0, "⚠️ Downtrend (Below EMA200)")
