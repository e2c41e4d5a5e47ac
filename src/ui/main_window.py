"""
Main Window Module

PyQt6 implementation of the two-tab sewa attendance UI:
- Home: daily log for the selected date (add entry, mark out)
- History: browse any past date, share or export its report
"""

import sys
from pathlib import Path

from PyQt6.QtCore import QDate, Qt
from PyQt6.QtGui import QAction, QActionGroup
from PyQt6.QtWidgets import (
    QAbstractItemView, QApplication, QDateEdit, QFileDialog, QHBoxLayout,
    QHeaderView, QLabel, QListWidget, QListWidgetItem, QMainWindow,
    QMessageBox, QPushButton, QTableWidget, QTableWidgetItem, QTabWidget,
    QVBoxLayout, QWidget
)

from application.attendance_service import AttendanceSession
from config.config_manager import ConfigManager
from domain.entities import AttendanceRecord
from domain.errors import AttendanceError
from domain.roster import Roster
from domain.time_codec import format_date_display, format_for_display
from infrastructure.logger import get_logger
from ui.styles import ThemeManager

logger = get_logger("MainWindow")

ISO_FORMAT = "yyyy-MM-dd"


class MainWindow(QMainWindow):
    """
    Main application window.

    Layout:
    - Home tab: date header, on-duty badge, record list, Add Entry button
    - History tab: date picker, report table, Share / PDF / Excel buttons
    """

    def __init__(self):
        super().__init__()
        self.config_manager = ConfigManager()
        self.config = self.config_manager.load()
        self.session = AttendanceSession.from_config(self.config_manager)
        self.entry_draft = self.session.new_entry_draft()

        self._init_ui()
        self._connect_signals()
        self._refresh_home()
        self._refresh_history()

    def _init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle("Jalpan Sewa Attendance")
        self.setMinimumSize(560, 680)
        self.resize(600, 760)

        self._create_menu_bar()

        self.tabs = QTabWidget()
        self.tabs.addTab(self._create_home_tab(), "Home")
        self.tabs.addTab(self._create_history_tab(), "History")
        self.setCentralWidget(self.tabs)

        self._apply_styles()

    def _create_menu_bar(self):
        """Create the menu bar."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu("File")

        import_roster_action = QAction("Import Roster...", self)
        import_roster_action.triggered.connect(self._on_import_roster)
        file_menu.addAction(import_roster_action)

        file_menu.addSeparator()

        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Theme menu
        theme_menu = menubar.addMenu("Theme")
        theme_group = QActionGroup(self)
        theme_group.setExclusive(True)

        current_theme = self.config.ui_prefs.theme_name
        for theme_name in ThemeManager.get_available_themes():
            action = QAction(theme_name, self, checkable=True)
            if theme_name == current_theme:
                action.setChecked(True)
            action.triggered.connect(lambda checked, name=theme_name: self._on_switch_theme(name))
            theme_menu.addAction(action)
            theme_group.addAction(action)

        settings_action = QAction("Settings", self)
        settings_action.triggered.connect(self._on_open_settings)
        menubar.addAction(settings_action)

    # ------------------------------------------------------------------
    # Home tab
    # ------------------------------------------------------------------
    def _create_home_tab(self) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        # Header date
        header = QHBoxLayout()
        heading_col = QVBoxLayout()
        self.lbl_home_date = QLabel()
        self.lbl_home_date.setObjectName("DateHeading")
        heading_col.addWidget(self.lbl_home_date)
        self.lbl_home_weekday = QLabel()
        heading_col.addWidget(self.lbl_home_weekday)
        header.addLayout(heading_col)
        header.addStretch()

        self.date_home = QDateEdit()
        self.date_home.setCalendarPopup(True)
        self.date_home.setDisplayFormat(ISO_FORMAT)
        self.date_home.setDate(QDate.fromString(self.session.current_date, ISO_FORMAT))
        header.addWidget(self.date_home)
        layout.addLayout(header)

        # Active count
        self.lbl_active = QLabel()
        self.lbl_active.setObjectName("ActiveBadge")
        layout.addWidget(self.lbl_active, alignment=Qt.AlignmentFlag.AlignLeft)

        # Records
        self.list_home = QListWidget()
        self.list_home.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        layout.addWidget(self.list_home, stretch=1)

        self.lbl_home_empty = QLabel()
        self.lbl_home_empty.setObjectName("EmptyState")
        self.lbl_home_empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.lbl_home_empty)

        self.btn_add_entry = QPushButton("+ Add Entry")
        self.btn_add_entry.setObjectName("PrimaryButton")
        self.btn_add_entry.setMinimumHeight(40)
        layout.addWidget(self.btn_add_entry)

        return panel

    def _create_record_row(self, record: AttendanceRecord) -> QWidget:
        """One daily-log row: initial, name, spot, times, Mark Out for active shifts."""
        row = QWidget()
        layout = QHBoxLayout(row)
        layout.setContentsMargins(8, 6, 8, 6)

        initial = QLabel(record.sewadar_name[:1].upper())
        initial.setFixedSize(36, 36)
        initial.setAlignment(Qt.AlignmentFlag.AlignCenter)
        initial.setStyleSheet(
            "background-color: #eff6ff; color: #2563eb; border-radius: 10px; font-weight: bold;"
        )
        layout.addWidget(initial)

        text_col = QVBoxLayout()
        lbl_name = QLabel(record.sewadar_name)
        lbl_name.setStyleSheet("font-weight: bold;")
        text_col.addWidget(lbl_name)
        lbl_counter = QLabel(record.counter)
        lbl_counter.setStyleSheet("color: #6b7280; font-size: 11px;")
        text_col.addWidget(lbl_counter)
        layout.addLayout(text_col)
        layout.addStretch()

        time_col = QVBoxLayout()
        time_col.addWidget(QLabel(format_for_display(record.start_time)),
                           alignment=Qt.AlignmentFlag.AlignRight)
        if record.end_time is None:
            btn_mark_out = QPushButton("Mark Out")
            btn_mark_out.setObjectName("PrimaryButton")
            btn_mark_out.clicked.connect(lambda _, rid=record.id: self._on_mark_out(rid))
            time_col.addWidget(btn_mark_out, alignment=Qt.AlignmentFlag.AlignRight)
        else:
            lbl_out = QLabel(f"Out: {format_for_display(record.end_time)}")
            lbl_out.setStyleSheet("color: #9ca3af; font-size: 11px;")
            time_col.addWidget(lbl_out, alignment=Qt.AlignmentFlag.AlignRight)
        layout.addLayout(time_col)

        return row

    def _refresh_home(self):
        """Rebuild the daily log from the session."""
        current = self.session.current_date
        self.lbl_home_date.setText(format_date_display(current, "short"))
        self.lbl_home_weekday.setText(format_date_display(current, "weekday"))
        self.lbl_active.setText(
            f"{self.session.active_count()} on duty / {self.session.roster_size()} total team"
        )

        self.list_home.clear()
        records = self.session.day_records_for_display()
        for record in records:
            item = QListWidgetItem()
            widget = self._create_record_row(record)
            item.setSizeHint(widget.sizeHint())
            self.list_home.addItem(item)
            self.list_home.setItemWidget(item, widget)

        self.list_home.setVisible(bool(records))
        self.lbl_home_empty.setText(f"No entries for {format_date_display(current, 'short')} yet.")
        self.lbl_home_empty.setVisible(not records)

    # ------------------------------------------------------------------
    # History tab
    # ------------------------------------------------------------------
    def _create_history_tab(self) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        controls = QHBoxLayout()
        self.date_history = QDateEdit()
        self.date_history.setCalendarPopup(True)
        self.date_history.setDisplayFormat(ISO_FORMAT)
        self.date_history.setDate(QDate.currentDate())
        controls.addWidget(self.date_history)
        controls.addStretch()

        self.btn_share = QPushButton("Share")
        controls.addWidget(self.btn_share)
        self.btn_export_excel = QPushButton("Excel")
        self.btn_export_excel.setVisible(self.config.output_settings.generate_excel)
        controls.addWidget(self.btn_export_excel)
        self.btn_export_pdf = QPushButton("Download PDF")
        self.btn_export_pdf.setObjectName("PrimaryButton")
        controls.addWidget(self.btn_export_pdf)
        layout.addLayout(controls)

        lbl_title = QLabel("JALPAN SEWA RECORD")
        lbl_title.setStyleSheet("color: #6b7280; font-weight: bold; font-size: 11px;")
        layout.addWidget(lbl_title)
        self.lbl_history_date = QLabel()
        self.lbl_history_date.setObjectName("DateHeading")
        layout.addWidget(self.lbl_history_date)

        self.table_history = QTableWidget(0, 4)
        self.table_history.setHorizontalHeaderLabels(["Sewadar Name", "Sewa Spot", "Time In", "Time Out"])
        self.table_history.verticalHeader().setVisible(False)
        self.table_history.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table_history.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        layout.addWidget(self.table_history, stretch=1)

        self.lbl_history_empty = QLabel("No sewa records found for this date.")
        self.lbl_history_empty.setObjectName("EmptyState")
        self.lbl_history_empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.lbl_history_empty)

        return panel

    def _history_date(self) -> str:
        return self.date_history.date().toString(ISO_FORMAT)

    def _refresh_history(self):
        """Rebuild the history table for the selected date."""
        selected = self._history_date()
        self.lbl_history_date.setText(format_date_display(selected, "long"))

        records = self.session.history(selected)
        self.table_history.setRowCount(len(records))
        for row, record in enumerate(records):
            self.table_history.setItem(row, 0, QTableWidgetItem(record.sewadar_name))
            self.table_history.setItem(row, 1, QTableWidgetItem(record.counter))
            self.table_history.setItem(row, 2, QTableWidgetItem(format_for_display(record.start_time)))
            if record.end_time:
                out_item = QTableWidgetItem(format_for_display(record.end_time))
            else:
                out_item = QTableWidgetItem("ACTIVE")
                out_item.setForeground(Qt.GlobalColor.darkGreen)
            out_item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            self.table_history.setItem(row, 3, out_item)

        self.table_history.setVisible(bool(records))
        self.lbl_history_empty.setVisible(not records)
        self.btn_share.setEnabled(bool(records))
        self.btn_export_pdf.setEnabled(bool(records))
        self.btn_export_excel.setEnabled(bool(records))

    # ------------------------------------------------------------------
    # Signals and handlers
    # ------------------------------------------------------------------
    def _connect_signals(self):
        """Connect UI signals to handlers."""
        self.date_home.dateChanged.connect(self._on_home_date_changed)
        self.btn_add_entry.clicked.connect(self._on_add_entry)
        self.date_history.dateChanged.connect(lambda _: self._refresh_history())
        self.btn_share.clicked.connect(self._on_share)
        self.btn_export_pdf.clicked.connect(self._on_export_pdf)
        self.btn_export_excel.clicked.connect(self._on_export_excel)
        self.tabs.currentChanged.connect(lambda _: self._refresh_history())

    def _on_home_date_changed(self, qdate: QDate):
        try:
            self.session.set_current_date(qdate.toString(ISO_FORMAT))
        except AttendanceError as e:
            self._show_message_box("warning", "Invalid date", str(e))
            return
        self._refresh_home()

    def _on_add_entry(self):
        from ui.entry_dialog import AddEntryDialog
        dialog = AddEntryDialog(self.session, self.entry_draft, self)
        if dialog.exec():
            self._refresh_home()
            self._refresh_history()

    def _on_mark_out(self, record_id: str):
        from ui.entry_dialog import MarkOutDialog
        try:
            draft = self.session.begin_mark_out(record_id)
        except AttendanceError as e:
            self._show_message_box("warning", "Cannot mark out", str(e))
            self._refresh_home()
            return

        record = next(r for r in self.session.records if r.id == record_id)
        dialog = MarkOutDialog(self.session, draft, record, self)
        if dialog.exec():
            self._refresh_home()
            self._refresh_history()

    def _on_share(self):
        """Copy the text report to the clipboard."""
        text = self.session.share_text(self._history_date())
        QApplication.clipboard().setText(text)
        self._show_message_box("information", "Share", "Report copied to clipboard.")

    def _on_export_pdf(self):
        self._export(self.session.export_pdf, "PDF")

    def _on_export_excel(self):
        self._export(self.session.export_excel, "Excel")

    def _export(self, export_fn, label: str):
        """Ask for a folder and run one of the session's export functions."""
        start_dir = self.config.output_settings.output_dir or str(Path.cwd())
        directory = QFileDialog.getExistingDirectory(self, f"Save {label} report to", start_dir)
        if not directory:
            return

        try:
            output_path = export_fn(self._history_date(), Path(directory))
        except PermissionError:
            self._show_message_box(
                "critical", "Error",
                "Cannot write the file; it may be open in another program."
            )
            return
        except OSError as e:
            self._show_message_box("critical", "Error", f"Export failed: {e}")
            return
        except AttendanceError as e:
            self._show_message_box("warning", label, str(e))
            return
        except Exception as e:
            logger.exception(f"{label} export failed")
            self._show_message_box("critical", "Error", f"Export failed:\n{str(e)}")
            return

        if output_path is None:
            self._show_message_box("information", label, "No sewa records found for this date.")
        else:
            self._show_message_box("information", label, f"Report saved to:\n{output_path}")

    def _on_import_roster(self):
        """Handle import roster action."""
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select roster",
            "",
            "CSV Files (*.csv);;All Files (*)"
        )
        if not file_path:
            return

        roster = Roster()
        sewadars = roster.load_from_csv(Path(file_path))
        if not sewadars:
            self._show_message_box("warning", "Roster", "No sewadars found in the selected file.")
            return

        self.config.paths.roster_csv = file_path
        self.config_manager.save()
        self.session.replace_roster(sewadars)
        self._refresh_home()
        self._show_message_box("information", "Roster", f"Loaded {len(sewadars)} sewadars.")

    def _apply_styles(self):
        """Apply visual styles to the window using ThemeManager."""
        theme = ThemeManager.get_theme(self.config.ui_prefs.theme_name)
        self.setStyleSheet(theme.stylesheet)

    def _on_switch_theme(self, theme_name: str):
        """Handle theme switching."""
        self.config.ui_prefs.theme_name = theme_name
        self.config_manager.save()
        self._apply_styles()

    def _on_open_settings(self):
        """Open the settings dialog and apply saved changes to the session."""
        from ui.settings_dialog import SettingsDialog
        dialog = SettingsDialog(self.config, self)
        if dialog.exec():
            self.config_manager.save()
            self.session.counters = list(self.config.counters.predefined)
            self.session.output_settings = self.config.output_settings
            self.session.custom_font_path = self.config.paths.custom_font_path or None
            self.btn_export_excel.setVisible(self.config.output_settings.generate_excel)

    def _show_message_box(self, msg_type: str, title: str, message: str):
        """Show a message box.

        Args:
            msg_type: Type of message box - 'information', 'warning', 'critical'
            title: Dialog title
            message: Message content
        """
        msg_box = QMessageBox(self)
        msg_box.setWindowTitle(title)
        msg_box.setText(message)

        if msg_type == "information":
            msg_box.setIcon(QMessageBox.Icon.Information)
        elif msg_type == "warning":
            msg_box.setIcon(QMessageBox.Icon.Warning)
        elif msg_type == "critical":
            msg_box.setIcon(QMessageBox.Icon.Critical)

        msg_box.exec()

    def closeEvent(self, event):
        """Handle window close - save config."""
        self.config_manager.save()
        event.accept()


def run_app():
    """Run the application."""
    app = QApplication(sys.argv)
    app.setStyle('Fusion')

    window = MainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run_app()
