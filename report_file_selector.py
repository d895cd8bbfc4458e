import os
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QPushButton,
    QListWidget, QListWidgetItem, QLabel, QFileDialog
)
from PyQt6.QtGui import QFont

from file_utils import get_all_matching_files

class ReportFileSelector(QDialog):
    def __init__(self, directory, pattern, parent=None):
        super().__init__(parent)
        self.directory = directory
        self.pattern = pattern
        self.selected_file = None
        self.initUI()

    def initUI(self):
        layout = QVBoxLayout()

        self.directory_label = QLabel(f"Reports in: {self.directory}")
        self.directory_label.setFont(QFont("Arial", 14))
        layout.addWidget(self.directory_label)

        self.list_widget = QListWidget()
        self.list_widget.setFont(QFont("Arial", 14))
        self.list_widget.setSelectionMode(QListWidget.SelectionMode.SingleSelection)
        self.list_widget.itemDoubleClicked.connect(lambda _: self.select_file())
        layout.addWidget(self.list_widget)

        self.populate_list()

        button_style = """
            QPushButton {
                background-color: gray;
                color: black;
                border-radius: 5px;
                font-size: 14pt;
                padding: 5px 10px;
            }
            QPushButton:hover {
                background-color: lightgray;
            }
        """

        buttons = QHBoxLayout()
        self.browse_button = QPushButton("Browse...")
        self.browse_button.setStyleSheet(button_style)
        self.browse_button.clicked.connect(self.browse_file)
        buttons.addWidget(self.browse_button)

        self.select_button = QPushButton("Load Report")
        self.select_button.setStyleSheet(button_style)
        self.select_button.clicked.connect(self.select_file)
        buttons.addWidget(self.select_button)
        layout.addLayout(buttons)

        self.setLayout(layout)
        self.setWindowTitle("Select MT4 Report")

    def populate_list(self):
        self.list_widget.clear()
        if not os.path.isdir(self.directory):
            return
        for file in get_all_matching_files(self.directory, self.pattern):
            self.list_widget.addItem(QListWidgetItem(file))
        if self.list_widget.count() > 0:
            self.list_widget.setCurrentRow(0)

    def browse_file(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open MT4 Report", self.directory, "MT4 Reports (*.htm *.html)"
        )
        if file_path:
            self.selected_file = file_path
            self.accept()

    def select_file(self):
        items = self.list_widget.selectedItems()
        if items:
            self.selected_file = items[0].text()
            self.accept()

    def get_selected_file(self):
        return self.selected_file
