from trade_buckets import TradeBuckets
from trade_outcome import TradeOutcome

from PyQt6.QtWidgets import (
    QDialog,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QHeaderView,
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont, QColor, QBrush

HEADERS = ["Outcome", "Ticket", "Open Time", "Open Price", "Close Time", "Close Price", "Side", "Size", "Profit"]
OUTCOME_BACKGROUNDS = {
    TradeOutcome.WINNER: QColor(200, 255, 200),
    TradeOutcome.BREAKEVEN: QColor(200, 220, 255),
    TradeOutcome.LOSER: QColor(255, 200, 200),
}

class TradeBucketDisplay(QDialog):
    def __init__(self, instrument: str, buckets: TradeBuckets, parent=None):
        super().__init__(parent)
        self.initUI(instrument, buckets)

    def initUI(self, instrument, buckets):
        self.setWindowTitle(f"{instrument.upper()} Trades")

        rows = []
        for outcome in TradeOutcome:
            rows.extend((outcome, trade) for trade in buckets.bucket(outcome))

        table = QTableWidget()
        table.setRowCount(len(rows))
        table.setColumnCount(len(HEADERS))
        table.setHorizontalHeaderLabels(HEADERS)

        for row_idx, (outcome, trade) in enumerate(rows):
            outcome_item = QTableWidgetItem(outcome.get_label())
            outcome_item.setForeground(QBrush(QColor(outcome.get_color())))
            table.setItem(row_idx, 0, outcome_item)
            table.setItem(row_idx, 1, NumericTableWidgetItem(trade.ticket, safe_float(trade.ticket)))
            table.setItem(row_idx, 2, QTableWidgetItem(trade.open_time_raw))
            table.setItem(row_idx, 3, NumericTableWidgetItem(str(trade.open_price), trade.open_price))
            close_time = trade.close_time_raw if outcome == TradeOutcome.WINNER else ""
            table.setItem(row_idx, 4, QTableWidgetItem(close_time))
            close_price = str(trade.close_price) if outcome == TradeOutcome.WINNER else ""
            table.setItem(row_idx, 5, NumericTableWidgetItem(close_price, trade.close_price))
            table.setItem(row_idx, 6, QTableWidgetItem(trade.side))
            table.setItem(row_idx, 7, NumericTableWidgetItem(format_float_size(trade.size), trade.size))

            profit_item = NumericTableWidgetItem(format_float_amount(trade.profit), trade.profit)
            profit_item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            profit_item.setForeground(QBrush(QColor(0, 0, 0)))
            profit_item.setBackground(QBrush(OUTCOME_BACKGROUNDS[outcome]))
            table.setItem(row_idx, 8, profit_item)

            for col_idx in range(len(HEADERS)):
                item = table.item(row_idx, col_idx); item.setFlags(item.flags() & ~Qt.ItemFlag.ItemIsEditable) if item else None
        table.setSortingEnabled(True)

        header = table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        table.setFont(QFont("Courier New", 14))

        layout = QVBoxLayout(self)
        layout.addWidget(table)

        table.resizeColumnsToContents()
        table.resizeRowsToContents()

        width = table.verticalHeader().width()
        for i in range(table.columnCount()):
            width += table.columnWidth(i)
        width += table.frameWidth() * 2 + layout.contentsMargins().left() + layout.contentsMargins().right() + 20 # add for vertical scrollbar
        self.resize(width, min(800, 60 + 30 * len(rows)))

# --- Formatting functions ---
def safe_float(text):
    try:
        return float(text)
    except ValueError:
        return 0.0
def format_float_size(val): return f"{val:.2f}"
def format_float_amount(val): return f"{val:+,.2f}"

class NumericTableWidgetItem(QTableWidgetItem):
    def __init__(self, text, num_value): super().__init__(text); self.num_value = num_value
    def __lt__(self, other): return self.num_value < other.num_value if isinstance(other, NumericTableWidgetItem) else super().__lt__(other)
