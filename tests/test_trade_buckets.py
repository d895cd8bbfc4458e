from trade_buckets import TradeBuckets
from trade_outcome import TradeOutcome


def test_outcome_colors():
    assert TradeOutcome.WINNER.get_color() == "green"
    assert TradeOutcome.BREAKEVEN.get_color() == "blue"
    assert TradeOutcome.LOSER.get_color() == "red"


def test_bucket_lookup_and_totals(trade_factory):
    buckets = TradeBuckets(
        winners=[trade_factory(profit=10.0)],
        breakeven=[trade_factory(profit=0.0)],
        losers=[trade_factory(profit=-4.0), trade_factory(profit=-1.0)],
    )
    assert buckets.bucket(TradeOutcome.LOSER) is buckets.losers
    assert buckets.bucket(TradeOutcome.WINNER) is buckets.winners
    assert buckets.total_count() == 4
    assert buckets.net_profit() == 5.0


def test_default_buckets_are_independent():
    first, second = TradeBuckets(), TradeBuckets()
    first.winners.append("x")
    assert second.winners == []
