"""
Renders grouped MT4 trades as a TradingView Pine Script v5 overlay indicator.

Every value is computed here and inlined as a literal, the generated script
only draws.
"""

import re
from typing import Dict, List

from constants import CONST
from timestamp_utils import DisplayTimestamp, raw_to_display_timestamp
from trade import Trade
from trade_buckets import TradeBuckets
from trade_outcome import TradeOutcome

LABEL_TEMPLATE = (
    "    label.new({time}, {price}, style={style}, color=color.new(color.{color}, 20), "
    "textcolor=color.{color}, size=iconSize, tooltip='{tooltip}', xloc=xloc.bar_time, yloc=yloc.price)\n"
)
LINE_TEMPLATE = (
    "    line.new({open_time}, {open_price}, {close_time}, {close_price}, "
    "color=color.new(color.white, 20), style=line.style_dotted, width=1, xloc=xloc.bar_time)\n"
)

SCRIPT_TEMPLATE = """//@version=5
indicator("MT4 Trades: {title}", overlay=true, scale = scale.right)

// --- Inputs ---
var iconSizeStr = input.string("{default_size}", title="Icon Size", options=[{size_options}])

// --- Functions ---
getIconSize(sizeStr) =>
    sizeResult = size.normal
{size_branches}    sizeResult

var iconSize = getIconSize(iconSizeStr)
var drawn = false

// --- Drawing Logic ---
if barstate.islast and not drawn
    drawn := true
    // Winners
{winners}
    // Break Even
{breakeven}
    // Losers
{losers}
"""


def _pine_timestamp(ts: DisplayTimestamp) -> str:
    return f"timestamp({ts.year}, {ts.month}, {ts.day}, {ts.hour}, {ts.minute})"


def _pine_number(value: float) -> str:
    return str(value)


def _pine_string_body(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _tooltip(*lines: str) -> str:
    # Pine reads "\n" inside the string literal as a line break
    return "\\n".join(line.replace("\\", "\\\\").replace("'", "\\'") for line in lines)


def _size_branches() -> str:
    branches = []
    for index, size in enumerate(CONST.ICON_SIZES):
        keyword = "if" if index == 0 else "else if"
        branches.append(f'    {keyword} sizeStr == "{size}"\n        sizeResult := size.{size}\n')
    return "".join(branches)


def _winner_lines(trade: Trade) -> str:
    color = TradeOutcome.WINNER.get_color()
    open_time = _pine_timestamp(raw_to_display_timestamp(trade.open_time_raw))
    close_time = _pine_timestamp(raw_to_display_timestamp(trade.close_time_raw))
    profit = f"Profit: {trade.profit:.2f}"

    script = LABEL_TEMPLATE.format(
        time=open_time,
        price=_pine_number(trade.open_price),
        style="label.style_diamond",
        color=color,
        tooltip=_tooltip(f"Ticket: {trade.ticket}", f"Open: {trade.open_time_raw} @ {trade.open_price}", profit),
    )
    script += LABEL_TEMPLATE.format(
        time=close_time,
        price=_pine_number(trade.close_price),
        style="label.style_diamond",
        color=color,
        tooltip=_tooltip(f"Ticket: {trade.ticket}", f"Close: {trade.close_time_raw} @ {trade.close_price}", profit),
    )
    script += LINE_TEMPLATE.format(
        open_time=open_time,
        open_price=_pine_number(trade.open_price),
        close_time=close_time,
        close_price=_pine_number(trade.close_price),
    )
    return script


def _open_marker_line(trade: Trade, outcome: TradeOutcome, style: str) -> str:
    open_time = _pine_timestamp(raw_to_display_timestamp(trade.open_time_raw))
    return LABEL_TEMPLATE.format(
        time=open_time,
        price=_pine_number(trade.open_price),
        style=style,
        color=outcome.get_color(),
        tooltip=_tooltip(
            f"Ticket: {trade.ticket}",
            f"Time: {trade.open_time_raw} @ {trade.open_price}",
            f"Profit: {trade.profit:.2f}",
        ),
    )


def loser_marker_style(trade: Trade) -> str:
    return "label.style_triangleup" if trade.side == "buy" else "label.style_triangledown"


def _render_bucket(trades: List[Trade], outcome: TradeOutcome) -> str:
    if outcome == TradeOutcome.WINNER:
        return "".join(_winner_lines(trade) for trade in trades)
    elif outcome == TradeOutcome.BREAKEVEN:
        return "".join(_open_marker_line(trade, outcome, "label.style_circle") for trade in trades)
    else:
        return "".join(_open_marker_line(trade, outcome, loser_marker_style(trade)) for trade in trades)


def generate_pine_script(instrument: str, buckets: TradeBuckets) -> str:
    """
    Build the complete Pine Script for one instrument.

    Args:
        instrument: Grouping key of the trades, e.g. "eurusd".
        buckets: The instrument's winners, break-even and losing trades.

    Returns:
        The script text, ready to paste into the Pine editor.
    """
    return SCRIPT_TEMPLATE.format(
        title=_pine_string_body(instrument.upper()),
        default_size=CONST.DEFAULT_ICON_SIZE,
        size_options=", ".join(f'"{size}"' for size in CONST.ICON_SIZES),
        size_branches=_size_branches(),
        winners=_render_bucket(buckets.winners, TradeOutcome.WINNER),
        breakeven=_render_bucket(buckets.breakeven, TradeOutcome.BREAKEVEN),
        losers=_render_bucket(buckets.losers, TradeOutcome.LOSER),
    )


def generate_all_scripts(grouped: Dict[str, TradeBuckets]) -> Dict[str, str]:
    return {instrument: generate_pine_script(instrument, grouped[instrument]) for instrument in sorted(grouped)}


def script_filename(instrument: str) -> str:
    safe = re.sub(r"[^A-Za-z0-9._-]", "_", instrument.strip())
    return f"{safe or 'unknown'}{CONST.SCRIPT_FILE_SUFFIX}"
