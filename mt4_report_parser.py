"""
Helpers for parsing MT4 "Detailed Statement" HTML reports into Trade records.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from bs4 import BeautifulSoup

from constants import CONST
from file_utils import read_report_text
from report_errors import (
    EmptyReportError,
    MalformedInputError,
    MissingSectionError,
    ReportError,
)
from trade import Trade

LOGGER = logging.getLogger(__name__)

# Leading numeric prefix, the same text a browser's parseFloat() would accept.
NUMBER_PATTERN = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _parse_number(text: str) -> Optional[float]:
    match = NUMBER_PATTERN.match(text or "")
    if not match:
        return None
    return float(match.group(1))


def _parse_float(text: str) -> float:
    value = _parse_number(text)
    return value if value is not None else 0.0


def _cell_text(cell) -> str:
    return cell.get_text().strip()


def _check_time(text: str) -> str:
    # raises ValueError, surfaced by parse_report as MalformedInputError
    datetime.strptime(text, CONST.MT4_DATE_TIME_FORMAT)
    return text


def row_to_trade(cells) -> Trade:
    """
    Map the 14 cells of a closed-transaction row onto a Trade.

    Columns 6, 7, 10, 11 and 12 (S/L, T/P, commission, taxes, swap) are
    not carried over.
    """
    texts = [_cell_text(cell) for cell in cells]
    # profit may carry space thousands separators, e.g. "1 234.50"
    profit_text = texts[13].replace(" ", "").replace("\xa0", "")

    return Trade(
        ticket=texts[0],
        open_time_raw=_check_time(texts[1]),
        side=texts[2] or "unknown",
        size=_parse_float(texts[3]),
        instrument=(texts[4] or "unknown").lower(),
        open_price=_parse_float(texts[5]),
        close_time_raw=_check_time(texts[8]),
        close_price=_parse_float(texts[9]),
        profit=_parse_float(profit_text),
    )


def _is_trade_row(cells) -> bool:
    return (
        len(cells) == CONST.TRADE_ROW_CELL_COUNT
        and _parse_number(cells[0].get_text()) is not None
    )


def _find_closed_transactions_table(soup: BeautifulSoup):
    for table in soup.find_all("table"):
        if CONST.CLOSED_TRANSACTIONS_MARKER in table.get_text():
            return table
    return None


def _extract_trades(soup: BeautifulSoup) -> List[Trade]:
    table = _find_closed_transactions_table(soup)
    if table is None:
        raise MissingSectionError()

    trades: List[Trade] = []
    is_processing = False
    for row in table.find_all("tr"):
        cells = row.find_all("td")

        if cells and _cell_text(cells[0]) == CONST.CLOSED_TRANSACTIONS_MARKER:
            is_processing = True
            continue

        if not is_processing:
            continue

        if cells and any(marker in cells[0].get_text() for marker in CONST.SECTION_TERMINATORS):
            break

        if _is_trade_row(cells):
            trades.append(row_to_trade(cells))
        else:
            LOGGER.debug("Skipping non-trade row with %d cells", len(cells))

    return trades


def parse_report(html: Union[str, bytes]) -> List[Trade]:
    """
    Extract the closed trades from the raw markup of an MT4 report.

    Raises:
        MissingSectionError: no table mentions "Closed Transactions:".
        EmptyReportError: the table holds no 14-column trade rows.
        MalformedInputError: the markup could not be handled at all.
    """
    if not isinstance(html, (str, bytes)):
        raise MalformedInputError()

    try:
        soup = BeautifulSoup(html, "html.parser")
        trades = _extract_trades(soup)
    except ReportError:
        raise
    except Exception as exc:
        LOGGER.debug("Report markup could not be parsed: %s", exc)
        raise MalformedInputError() from exc

    if not trades:
        raise EmptyReportError()

    LOGGER.info("Parsed %d closed trades from report", len(trades))
    return trades


def parse_report_file(file_path: Union[str, Path]) -> List[Trade]:
    """
    Parse a report straight from disk. The bytes are handed to the HTML
    parser as-is so the charset declared by the report is honoured.
    """
    return parse_report(read_report_text(file_path))
