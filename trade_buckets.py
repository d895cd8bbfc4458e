from dataclasses import dataclass, field
from typing import List

from trade import Trade
from trade_outcome import TradeOutcome

# --- Per-instrument outcome buckets ---
@dataclass
class TradeBuckets:
    """
    Closed trades of a single instrument split by outcome. Each list is
    ordered by true open time once the classifier is done with it.
    """
    winners: List[Trade] = field(default_factory=list)
    breakeven: List[Trade] = field(default_factory=list)
    losers: List[Trade] = field(default_factory=list)

    def bucket(self, outcome: TradeOutcome) -> List[Trade]:
        if outcome == TradeOutcome.WINNER:
            return self.winners
        elif outcome == TradeOutcome.BREAKEVEN:
            return self.breakeven
        else:
            return self.losers

    def total_count(self) -> int:
        return len(self.winners) + len(self.breakeven) + len(self.losers)

    def net_profit(self) -> float:
        return sum(trade.profit for trade in self.winners + self.breakeven + self.losers)
