"""
Settings Dialog Module

PyQt6 dialog for application settings including:
- Sewa spot suggestions (add / remove counters)
- Mark-out rounding step
- Report output (folder, filename patterns, Excel export, PDF font)
"""

from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QGridLayout,
    QGroupBox, QLabel, QLineEdit, QCheckBox, QSpinBox,
    QPushButton, QFileDialog, QDialogButtonBox, QListWidget, QListWidgetItem
)

from config.config_manager import AppConfig
from ui.styles import ThemeManager


class SettingsDialog(QDialog):
    """Settings dialog with counter list and report options."""

    def __init__(self, config: AppConfig, parent=None):
        super().__init__(parent)
        self.config = config
        self._init_ui()
        self._load_config_to_ui()
        self._connect_signals()

    def _init_ui(self):
        """Initialize the dialog UI."""
        self.setWindowTitle("Settings")
        self.resize(560, 620)
        self.setMinimumWidth(480)
        self.setModal(True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(15)

        layout.addWidget(self._create_counters_group())
        layout.addWidget(self._create_time_group())
        layout.addWidget(self._create_output_group())

        # Dialog buttons
        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok |
            QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self._on_accept)
        button_box.rejected.connect(self.reject)

        btn_layout = QHBoxLayout()
        btn_layout.addStretch()
        btn_layout.addWidget(button_box)
        layout.addLayout(btn_layout)

        self._apply_styles()

    def _create_counters_group(self) -> QGroupBox:
        """Create the sewa spot suggestion list."""
        group = QGroupBox("Sewa Spots")
        layout = QVBoxLayout(group)
        layout.setContentsMargins(15, 25, 15, 15)
        layout.setSpacing(10)

        self.list_counters = QListWidget()
        self.list_counters.setMaximumHeight(160)
        layout.addWidget(self.list_counters)

        add_layout = QHBoxLayout()
        self.txt_new_counter = QLineEdit()
        self.txt_new_counter.setPlaceholderText("New counter name")
        add_layout.addWidget(self.txt_new_counter, stretch=1)
        self.btn_add_counter = QPushButton("Add")
        add_layout.addWidget(self.btn_add_counter)
        self.btn_remove_counter = QPushButton("Remove")
        add_layout.addWidget(self.btn_remove_counter)
        layout.addLayout(add_layout)

        return group

    def _create_time_group(self) -> QGroupBox:
        group = QGroupBox("Mark Out")
        layout = QHBoxLayout(group)
        layout.setContentsMargins(15, 25, 15, 15)

        layout.addWidget(QLabel("Round current time to (minutes):"))
        self.spin_step = QSpinBox()
        self.spin_step.setRange(1, 30)
        layout.addWidget(self.spin_step)
        layout.addStretch()

        return group

    def _create_output_group(self) -> QGroupBox:
        """Create the report output settings group."""
        group = QGroupBox("Reports")
        layout = QGridLayout(group)
        layout.setContentsMargins(15, 25, 15, 15)
        layout.setSpacing(10)

        row = 0
        layout.addWidget(QLabel("Output folder:"), row, 0)
        self.txt_output_dir = QLineEdit()
        self.txt_output_dir.setPlaceholderText("Leave empty to ask each time")
        layout.addWidget(self.txt_output_dir, row, 1)
        self.btn_browse_output = QPushButton("Browse")
        layout.addWidget(self.btn_browse_output, row, 2)
        row += 1

        layout.addWidget(QLabel("PDF filename:"), row, 0)
        self.txt_pdf_pattern = QLineEdit()
        layout.addWidget(self.txt_pdf_pattern, row, 1, 1, 2)
        row += 1

        layout.addWidget(QLabel("Excel filename:"), row, 0)
        self.txt_excel_pattern = QLineEdit()
        layout.addWidget(self.txt_excel_pattern, row, 1, 1, 2)
        row += 1

        self.chk_generate_excel = QCheckBox("Offer Excel export in History")
        layout.addWidget(self.chk_generate_excel, row, 0, 1, 3)
        row += 1

        layout.addWidget(QLabel("PDF font (TTF):"), row, 0)
        self.txt_font_path = QLineEdit()
        self.txt_font_path.setPlaceholderText("Leave empty to auto-detect")
        layout.addWidget(self.txt_font_path, row, 1)
        self.btn_browse_font = QPushButton("Browse")
        layout.addWidget(self.btn_browse_font, row, 2)

        return group

    def _load_config_to_ui(self):
        """Load configuration values into UI controls."""
        output = self.config.output_settings

        self.list_counters.clear()
        for counter in self.config.counters.predefined:
            self.list_counters.addItem(QListWidgetItem(counter))

        self.spin_step.setValue(self.config.time_defaults.mark_out_step_minutes)

        self.txt_output_dir.setText(output.output_dir)
        self.txt_pdf_pattern.setText(output.pdf_filename_pattern)
        self.txt_excel_pattern.setText(output.excel_filename_pattern)
        self.chk_generate_excel.setChecked(output.generate_excel)
        self.txt_font_path.setText(self.config.paths.custom_font_path)

    def _save_ui_to_config(self):
        """Save UI values to configuration."""
        output = self.config.output_settings

        self.config.counters.predefined = [
            self.list_counters.item(i).text() for i in range(self.list_counters.count())
        ]

        self.config.time_defaults.mark_out_step_minutes = self.spin_step.value()

        output.output_dir = self.txt_output_dir.text().strip()
        output.pdf_filename_pattern = self.txt_pdf_pattern.text().strip() or "Sewa_Report_{date}.pdf"
        output.excel_filename_pattern = self.txt_excel_pattern.text().strip() or "Sewa_Report_{date}.xlsx"
        output.generate_excel = self.chk_generate_excel.isChecked()
        self.config.paths.custom_font_path = self.txt_font_path.text().strip()

    def _connect_signals(self):
        """Connect UI signals."""
        self.btn_add_counter.clicked.connect(self._on_add_counter)
        self.txt_new_counter.returnPressed.connect(self._on_add_counter)
        self.btn_remove_counter.clicked.connect(self._on_remove_counter)
        self.btn_browse_output.clicked.connect(self._on_browse_output)
        self.btn_browse_font.clicked.connect(self._on_browse_font)

    def _on_add_counter(self):
        name = self.txt_new_counter.text().strip()
        if not name:
            return
        existing = self.list_counters.findItems(name, Qt.MatchFlag.MatchFixedString)
        if not existing:
            self.list_counters.addItem(QListWidgetItem(name))
        self.txt_new_counter.clear()

    def _on_remove_counter(self):
        for item in self.list_counters.selectedItems():
            self.list_counters.takeItem(self.list_counters.row(item))

    def _on_browse_output(self):
        """Handle browse output folder."""
        current_path = self.txt_output_dir.text()
        start_dir = current_path if current_path else str(Path.cwd())

        dir_path = QFileDialog.getExistingDirectory(
            self,
            "Select report folder",
            start_dir
        )
        if dir_path:
            self.txt_output_dir.setText(dir_path)

    def _on_browse_font(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select font",
            "",
            "TrueType Fonts (*.ttf *.ttc);;All Files (*)"
        )
        if file_path:
            self.txt_font_path.setText(file_path)

    def _on_accept(self):
        """Handle OK button click."""
        self._save_ui_to_config()
        self.accept()

    def _apply_styles(self):
        """Apply dialog styling from global theme."""
        theme = ThemeManager.get_theme(self.config.ui_prefs.theme_name)
        self.setStyleSheet(theme.stylesheet)
