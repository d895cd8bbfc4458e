"""
Shared fixtures for the MT4 report -> Pine Script pipeline tests.
"""

import pytest

from trade import Trade
from tests.fixtures.report_data import REPORT_HEAD, REPORT_TAIL, SAMPLE_ROWS


def make_trade_row(
    ticket="1001",
    open_time="2025.06.25 16:09:01",
    side="buy",
    size="0.10",
    item="EURUSD",
    open_price="1.16500",
    close_time="2025.06.25 18:00:00",
    close_price="1.16800",
    profit="30.00",
) -> str:
    return (
        "<tr align=right>"
        f"<td title=\"#{ticket}\">{ticket}</td><td class=msdate nowrap>{open_time}</td><td>{side}</td>"
        f"<td class=mspt>{size}</td><td>{item}</td><td style=\"mso-number-format:0\\.00000;\">{open_price}</td>"
        "<td>0.00000</td><td>0.00000</td>"
        f"<td class=msdate nowrap>{close_time}</td><td>{close_price}</td>"
        f"<td class=mspt>0.00</td><td class=mspt>0.00</td><td class=mspt>0.00</td><td class=mspt>{profit}</td>"
        "</tr>\n"
    )


def build_report(rows) -> str:
    return REPORT_HEAD + "".join(make_trade_row(*row) for row in rows) + REPORT_TAIL


def make_trade(
    ticket="1",
    open_time_raw="2025.06.25 16:09:01",
    side="buy",
    size=0.1,
    instrument="eurusd",
    open_price=1.165,
    close_time_raw="2025.06.25 18:00:00",
    close_price=1.168,
    profit=30.0,
) -> Trade:
    return Trade(
        ticket,
        open_time_raw,
        side,
        size,
        instrument,
        open_price,
        close_time_raw,
        close_price,
        profit,
    )


@pytest.fixture
def sample_report_html():
    return build_report(SAMPLE_ROWS)


@pytest.fixture
def report_builder():
    return build_report


@pytest.fixture
def trade_factory():
    return make_trade
