import os
import sys
import logging

from config import Config
from file_utils import read_report_text
from pine_script_generator import generate_pine_script
from report_errors import ReportError
from report_file_selector import ReportFileSelector
from trade_bucket_display import TradeBucketDisplay
from trade_classifier import process_report, clamp_tolerance
from trade_outcome import TradeOutcome

from PyQt6.QtWidgets import (
    QApplication, QWidget, QLabel, QGridLayout, QPushButton, QDoubleSpinBox, QDialog, QMessageBox
)
from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont

LOGGER = logging.getLogger(__name__)

class ConverterApp(QApplication):
    def __init__(self, config: Config):
        super().__init__(sys.argv)

        self.config = config
        self.window = QWidget()
        self.layout = QGridLayout(self.window)
        self.raw_report = None
        self.grouped_trades = None
        self.be_tolerance = clamp_tolerance(config.be_tolerance)
        self.instrument_widgets = []
        self.open_dialogs = []

        self.dialog = ReportFileSelector(config.directory_path, config.report_filename_pattern, self.window)
        self.create_main_window()

        print('MT4 to Pine Script Converter Initialized.')

    def create_main_window(self):
        self.window.setWindowTitle("MT4 Report to Pine Script")
        font_name = "Courier New"

        self.load_button = QPushButton("Load Report")
        self.load_button.clicked.connect(self.select_report)
        self.file_label = QLabel("No file selected")
        self.file_label.setFont(QFont(font_name, 14))

        tolerance_label = QLabel("BE Tolerance:")
        tolerance_label.setFont(QFont(font_name, 14))
        self.tolerance_input = QDoubleSpinBox()
        self.tolerance_input.setRange(0.0, 1_000_000.0)
        self.tolerance_input.setDecimals(2)
        self.tolerance_input.setSingleStep(0.5)
        self.tolerance_input.setValue(self.be_tolerance)
        self.tolerance_input.valueChanged.connect(self.tolerance_changed)

        self.layout.addWidget(self.load_button, 0, 0)
        self.layout.addWidget(self.file_label, 0, 1, 1, 3)
        self.layout.addWidget(tolerance_label, 1, 0, alignment=Qt.AlignmentFlag.AlignRight)
        self.layout.addWidget(self.tolerance_input, 1, 1)

        self.window.adjustSize()
        self.window.show()

    def select_report(self):
        self.dialog.populate_list()
        result = self.dialog.exec()
        if result == QDialog.DialogCode.Accepted and self.dialog.get_selected_file():
            file_path = self.dialog.get_selected_file()
            self.file_label.setText(os.path.basename(file_path))
            try:
                content = read_report_text(file_path)
            except OSError as exc:
                self.show_error(f"Could not read {file_path}: {exc}")
                return
            self.handle_process_report(content, self.be_tolerance)

    def tolerance_changed(self, value):
        self.be_tolerance = clamp_tolerance(value)
        if self.raw_report is not None:
            self.handle_process_report(self.raw_report, self.be_tolerance)

    def handle_process_report(self, content, tolerance):
        self.grouped_trades = None
        try:
            self.grouped_trades = process_report(content, tolerance)
            self.raw_report = content
        except ReportError as exc:
            LOGGER.warning("Report rejected: %s", exc)
            self.show_error(str(exc))
        self.render_instruments()

    def render_instruments(self):
        for widget in self.instrument_widgets:
            self.layout.removeWidget(widget)
            widget.deleteLater()
        self.instrument_widgets = []

        if not self.grouped_trades:
            self.window.adjustSize()
            return

        row_index = 3
        for instrument in sorted(self.grouped_trades):
            buckets = self.grouped_trades[instrument]
            name_label = QLabel(instrument.upper())
            name_label.setFont(QFont("Courier New", 16))
            counts = []
            for outcome in TradeOutcome:
                count = len(buckets.bucket(outcome))
                counts.append(f"<span style='color: {outcome.get_color()}'>{outcome.get_label()}: {count}</span>")
            counts_label = QLabel(" &nbsp; ".join(counts))
            counts_label.setTextFormat(Qt.TextFormat.RichText)

            show_button = QPushButton("Show Trades")
            show_button.clicked.connect(lambda _, name=instrument: self.open_trades_window(name))
            copy_button = QPushButton("Copy Pine Script")
            copy_button.clicked.connect(lambda _, name=instrument, button=copy_button: self.copy_pine_script(name, button))

            self.layout.addWidget(name_label, row_index, 0)
            self.layout.addWidget(counts_label, row_index, 1)
            self.layout.addWidget(show_button, row_index, 2)
            self.layout.addWidget(copy_button, row_index, 3)
            self.instrument_widgets.extend([name_label, counts_label, show_button, copy_button])
            row_index += 1

        self.window.adjustSize()

    def open_trades_window(self, instrument):
        if self.grouped_trades and instrument in self.grouped_trades:
            trades_dialog = TradeBucketDisplay(instrument, self.grouped_trades[instrument], self.window)
            self.open_dialogs.append(trades_dialog)
            trades_dialog.finished.connect(lambda _, d=trades_dialog: self.open_dialogs.remove(d))
            trades_dialog.show()

    def copy_pine_script(self, instrument, button):
        if self.grouped_trades and instrument in self.grouped_trades:
            script = generate_pine_script(instrument, self.grouped_trades[instrument])
            self.clipboard().setText(script)
            button.setText("Copied!")
            QTimer.singleShot(2000, button, lambda: button.setText("Copy Pine Script"))

    def show_error(self, message):
        QMessageBox.warning(self.window, "Report Error", message)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    config = Config()
    app = ConverterApp(config)
    sys.exit(app.exec())
