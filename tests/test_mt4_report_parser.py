from pathlib import Path
from unittest.mock import patch

import pytest

from mt4_report_parser import parse_report, parse_report_file, row_to_trade
from report_errors import EmptyReportError, MalformedInputError, MissingSectionError
from tests.conftest import build_report, make_trade_row
from tests.fixtures.report_data import NO_CLOSED_SECTION_REPORT, REPORT_HEAD, REPORT_TAIL


def test_parse_report_extracts_closed_trades(sample_report_html):
    trades = parse_report(sample_report_html)
    assert [trade.ticket for trade in trades] == ["1001", "1002", "1003", "1004"]

    trade = trades[0]
    assert trade.open_time_raw == "2025.06.25 16:09:01"
    assert trade.close_time_raw == "2025.06.25 18:00:00"
    assert trade.side == "buy"
    assert trade.size == 0.10
    assert trade.instrument == "eurusd"
    assert trade.open_price == 1.165
    assert trade.close_price == 1.168
    assert trade.profit == 30.0


def test_parse_report_strips_thousands_separator_in_profit(sample_report_html):
    trades = parse_report(sample_report_html)
    assert trades[3].profit == 1000.0
    assert trades[3].instrument == "xauusd"


def test_parse_report_stops_at_section_terminator(sample_report_html):
    # the Open Trades row (ticket 99999) sits after "Closed P/L:"
    tickets = [trade.ticket for trade in parse_report(sample_report_html)]
    assert "99999" not in tickets


def test_parse_report_stops_at_open_trades_without_closed_pl():
    html = (
        REPORT_HEAD
        + make_trade_row(ticket="1")
        + "<tr><td colspan=13><b>Open Trades:</b></td></tr>\n"
        + make_trade_row(ticket="2")
        + "</table></body></html>"
    )
    assert [trade.ticket for trade in parse_report(html)] == ["1"]


def test_parse_report_reads_until_rows_exhausted():
    html = REPORT_HEAD + make_trade_row(ticket="7") + make_trade_row(ticket="8") + "</table></body></html>"
    assert [trade.ticket for trade in parse_report(html)] == ["7", "8"]


def test_parse_report_ignores_rows_with_wrong_shape():
    html = (
        REPORT_HEAD
        + make_trade_row(ticket="1")
        + "<tr><td>2</td><td>2025.06.25 10:00:00</td><td>buy</td></tr>\n"
        + make_trade_row(ticket="cancelled")
        + REPORT_TAIL
    )
    assert [trade.ticket for trade in parse_report(html)] == ["1"]


def test_parse_report_ignores_rows_before_header():
    html = (
        "<html><body><table>"
        + make_trade_row(ticket="555")
        + "<tr><td colspan=13>Closed Transactions:</td></tr>"
        + make_trade_row(ticket="556")
        + "</table></body></html>"
    )
    assert [trade.ticket for trade in parse_report(html)] == ["556"]


def test_parse_report_defaults_bad_numbers_to_zero():
    html = build_report(
        [("42", "2025.06.25 10:00:00", "", "n/a", "", "-", "2025.06.25 11:00:00", "", "abc")]
    )
    trade = parse_report(html)[0]
    assert trade.size == 0.0
    assert trade.open_price == 0.0
    assert trade.close_price == 0.0
    assert trade.profit == 0.0
    assert trade.side == "unknown"
    assert trade.instrument == "unknown"


def test_parse_report_missing_section_raises():
    with pytest.raises(MissingSectionError):
        parse_report(NO_CLOSED_SECTION_REPORT)


def test_parse_report_without_trade_rows_raises_empty():
    with pytest.raises(EmptyReportError) as excinfo:
        parse_report(REPORT_HEAD + REPORT_TAIL)
    assert "No closed trades" in str(excinfo.value)


def test_parse_report_rejects_non_markup_input():
    with pytest.raises(MalformedInputError) as excinfo:
        parse_report(None)
    assert "corrupted or in an unexpected format" in str(excinfo.value)


def test_row_to_trade_uses_fixed_columns():
    from bs4 import BeautifulSoup

    row_html = make_trade_row(ticket="9", item="GBPJPY", side="sell", profit="-1 234.56")
    cells = BeautifulSoup(f"<table>{row_html}</table>", "html.parser").find_all("td")
    trade = row_to_trade(cells)
    assert trade.ticket == "9"
    assert trade.instrument == "gbpjpy"
    assert trade.side == "sell"
    assert trade.profit == -1234.56


def test_parse_report_file_reads_bytes(tmp_path: Path, sample_report_html):
    report_path = tmp_path / "Statement.htm"
    report_path.write_bytes(sample_report_html.encode("cp1252"))

    trades = parse_report_file(report_path)
    assert len(trades) == 4


def test_parse_report_wraps_markup_failures(sample_report_html):
    with patch("mt4_report_parser._extract_trades", side_effect=RuntimeError("tree walk blew up")):
        with pytest.raises(MalformedInputError) as excinfo:
            parse_report(sample_report_html)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert "tree walk blew up" not in str(excinfo.value)
    assert "corrupted or in an unexpected format" in str(excinfo.value)
