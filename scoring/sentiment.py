"""
Sentiment scorer.

Reads a single fear/greed scalar in [0, 100]. Crypto assets use the
alternative.me index, equities a VIX-derived proxy (see ingest.fear_greed);
the band itself does not care where the number came from.

  < 25  extreme fear -> 20 pts
  < 45  fear         -> 10 pts
  else               ->  0 pts
"""
from scoring.base import BaseBand, BandContext, BandScore


class SentimentBand(BaseBand):
    name = "sentiment"
    max_points = 20

    def evaluate(self, ctx: BandContext) -> BandScore:
        fng = ctx.fear_greed
        if fng < 25:
            return BandScore(20, f"✅ Extreme Fear ({fng:.0f})")
        if fng < 45:
            return BandScore(10, f"⚠️ Market Fear ({fng:.0f})")
        return BandScore(0)
