import logging
import math
from typing import Dict, Iterable, List, Tuple, Union

from mt4_report_parser import parse_report
from timestamp_utils import to_true_utc
from trade import Trade
from trade_buckets import TradeBuckets
from trade_outcome import TradeOutcome

LOGGER = logging.getLogger(__name__)


def clamp_tolerance(value) -> float:
    """Coerce user input into a usable breakeven tolerance (>= 0)."""
    try:
        tolerance = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(tolerance) or tolerance < 0:
        return 0.0
    return tolerance


def classify_trade(trade: Trade, be_tolerance: float) -> TradeOutcome:
    if trade.profit > be_tolerance:
        return TradeOutcome.WINNER
    elif trade.profit >= -be_tolerance:
        return TradeOutcome.BREAKEVEN
    else:
        return TradeOutcome.LOSER


def _winner_key(trade: Trade) -> Tuple[str, str, float]:
    # the report can list the same execution more than once
    return (trade.instrument, trade.open_time_raw, trade.open_price)


def _open_time_key(trade: Trade):
    return to_true_utc(trade.open_time_raw)


def classify_and_group(trades: Iterable[Trade], be_tolerance: float) -> Dict[str, TradeBuckets]:
    """
    Split trades by instrument and outcome.

    Winners sharing an entry (same open time and open price) collapse into
    the one with the highest profit; on equal profit the first one seen is
    kept. Break-even and losing trades are kept as reported.

    Args:
        trades: Closed trades in report order.
        be_tolerance: Symmetric profit band treated as break even.

    Returns:
        Dict of instrument -> TradeBuckets, every bucket sorted by true open time.
    """
    grouped: Dict[str, TradeBuckets] = {}
    winners_by_key: Dict[Tuple[str, str, float], Trade] = {}

    for trade in trades:
        if trade.instrument not in grouped:
            grouped[trade.instrument] = TradeBuckets()

        outcome = classify_trade(trade, be_tolerance)
        if outcome == TradeOutcome.WINNER:
            key = _winner_key(trade)
            existing = winners_by_key.get(key)
            if existing is None or trade.profit > existing.profit:
                if existing is not None:
                    LOGGER.debug("Winner %s replaces duplicate entry %s", trade.ticket, existing.ticket)
                winners_by_key[key] = trade
            else:
                LOGGER.debug("Dropping duplicate winner %s (kept %s)", trade.ticket, existing.ticket)
        else:
            grouped[trade.instrument].bucket(outcome).append(trade)

    for winner in winners_by_key.values():
        grouped[winner.instrument].winners.append(winner)

    # list.sort is stable, equal open times keep their pass order
    for buckets in grouped.values():
        buckets.winners.sort(key=_open_time_key)
        buckets.breakeven.sort(key=_open_time_key)
        buckets.losers.sort(key=_open_time_key)

    return grouped


def process_report(html: Union[str, bytes], be_tolerance: float = 0.0) -> Dict[str, TradeBuckets]:
    """Parse a raw MT4 report and return its trades grouped by instrument."""
    trades: List[Trade] = parse_report(html)
    grouped = classify_and_group(trades, be_tolerance)
    LOGGER.info(
        "Grouped %d trades into %d instruments (tolerance %.2f)",
        len(trades),
        len(grouped),
        be_tolerance,
    )
    return grouped
