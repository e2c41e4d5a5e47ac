"""
Entry Dialog Module

PyQt6 dialogs for the daily log:
- AddEntryDialog: pick a sewadar and sewa spot, set check-in (and
  optionally check-out) time
- MarkOutDialog: record the check-out time of an active shift
"""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QCheckBox, QDialog, QHBoxLayout, QLabel, QLineEdit, QListWidget,
    QListWidgetItem, QMessageBox, QPushButton, QVBoxLayout
)

from application.attendance_service import AttendanceSession, EntryDraft, MarkOutDraft
from domain.entities import AttendanceRecord
from domain.errors import AttendanceError
from domain.record_store import is_known_counter
from domain.time_codec import format_for_display
from ui.time_picker import TimePicker


class AddEntryDialog(QDialog):
    """Mark Attendance dialog. Confirm stays disabled until sewadar and spot are set."""

    def __init__(self, session: AttendanceSession, draft: EntryDraft, parent=None):
        super().__init__(parent)
        self.session = session
        self.draft = draft
        self.created_record = None
        self._init_ui()
        self._connect_signals()
        self._refresh_confirm_state()

    def _init_ui(self):
        self.setWindowTitle("Mark Attendance")
        self.setMinimumWidth(420)
        self.setModal(True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(10)

        # Sewadar search
        layout.addWidget(QLabel("SEWADAR NAME"))
        self.txt_sewadar = QLineEdit(self.draft.sewadar_search)
        self.txt_sewadar.setPlaceholderText("Search sewadar...")
        layout.addWidget(self.txt_sewadar)

        self.list_sewadars = QListWidget()
        self.list_sewadars.setMaximumHeight(140)
        self.list_sewadars.hide()
        layout.addWidget(self.list_sewadars)

        # Sewa spot
        layout.addWidget(QLabel("SEWA SPOT"))
        self.txt_counter = QLineEdit(self.draft.counter)
        self.txt_counter.setPlaceholderText("Type or pick a counter")
        layout.addWidget(self.txt_counter)

        self.lbl_custom_counter = QLabel("Custom spot")
        self.lbl_custom_counter.setStyleSheet("color: #6b7280; font-size: 11px;")
        self.lbl_custom_counter.hide()
        layout.addWidget(self.lbl_custom_counter)

        self.list_counters = QListWidget()
        self.list_counters.setMaximumHeight(140)
        self.list_counters.hide()
        layout.addWidget(self.list_counters)

        # Times
        self.picker_in = TimePicker("TIME IN", self.draft.in_time)
        layout.addWidget(self.picker_in)

        self.chk_out_time = QCheckBox("Add time out now")
        self.chk_out_time.setChecked(self.draft.has_out_time)
        layout.addWidget(self.chk_out_time)

        self.picker_out = TimePicker("TIME OUT", self.draft.out_time)
        self.picker_out.setVisible(self.draft.has_out_time)
        layout.addWidget(self.picker_out)

        layout.addStretch()

        # Buttons
        btn_layout = QHBoxLayout()
        btn_layout.addStretch()
        self.btn_cancel = QPushButton("Cancel")
        btn_layout.addWidget(self.btn_cancel)
        self.btn_confirm = QPushButton("Confirm Entry")
        self.btn_confirm.setObjectName("PrimaryButton")
        btn_layout.addWidget(self.btn_confirm)
        layout.addLayout(btn_layout)

    def _connect_signals(self):
        self.txt_sewadar.textEdited.connect(self._on_sewadar_search)
        self.list_sewadars.itemClicked.connect(self._on_sewadar_picked)
        self.txt_counter.textEdited.connect(self._on_counter_edited)
        self.list_counters.itemClicked.connect(self._on_counter_picked)
        self.chk_out_time.toggled.connect(self._on_out_time_toggled)
        self.btn_cancel.clicked.connect(self.reject)
        self.btn_confirm.clicked.connect(self._on_confirm)

    def _on_sewadar_search(self, text: str):
        """Editing the search drops any earlier selection."""
        self.draft.sewadar_search = text
        self.draft.sewadar_id = ""

        self.list_sewadars.clear()
        matches = self.session.search_sewadars(text)
        for sewadar in matches:
            item = QListWidgetItem(sewadar.name)
            item.setData(Qt.ItemDataRole.UserRole, sewadar.id)
            self.list_sewadars.addItem(item)
        if text.strip() and not matches:
            empty = QListWidgetItem("No sewadar found")
            empty.setFlags(Qt.ItemFlag.NoItemFlags)
            self.list_sewadars.addItem(empty)
        self.list_sewadars.setVisible(bool(text.strip()))
        self._refresh_confirm_state()

    def _on_sewadar_picked(self, item: QListWidgetItem):
        sewadar_id = item.data(Qt.ItemDataRole.UserRole)
        if not sewadar_id:
            return
        self.draft.sewadar_id = sewadar_id
        self.draft.sewadar_search = item.text()
        self.txt_sewadar.setText(item.text())
        self.list_sewadars.hide()
        self._refresh_confirm_state()

    def _on_counter_edited(self, text: str):
        self.draft.counter = text
        self.list_counters.clear()
        self.list_counters.addItems(self.session.suggest_counters(text))
        self.list_counters.setVisible(self.list_counters.count() > 0)
        self._refresh_counter_tag()
        self._refresh_confirm_state()

    def _on_counter_picked(self, item: QListWidgetItem):
        self.draft.counter = item.text()
        self.txt_counter.setText(item.text())
        self.list_counters.hide()
        self._refresh_counter_tag()
        self._refresh_confirm_state()

    def _refresh_counter_tag(self):
        text = self.draft.counter.strip()
        self.lbl_custom_counter.setVisible(
            bool(text) and not is_known_counter(self.session.counters, text)
        )

    def _on_out_time_toggled(self, checked: bool):
        self.draft.has_out_time = checked
        self.picker_out.setVisible(checked)

    def _refresh_confirm_state(self):
        self.btn_confirm.setEnabled(self.draft.can_confirm)

    def _on_confirm(self):
        """Sync pickers into the draft and hand it to the session."""
        self.draft.in_time = self.picker_in.value()
        self.draft.out_time = self.picker_out.value()
        try:
            self.created_record = self.session.confirm_entry(self.draft)
        except AttendanceError as e:
            QMessageBox.warning(self, "Cannot add entry", str(e))
            return
        self.accept()


class MarkOutDialog(QDialog):
    """Check-out time dialog for one active record."""

    def __init__(
        self,
        session: AttendanceSession,
        draft: MarkOutDraft,
        record: AttendanceRecord,
        parent=None
    ):
        super().__init__(parent)
        self.session = session
        self.draft = draft
        self.record = record
        self._init_ui()

    def _init_ui(self):
        self.setWindowTitle("Mark Out")
        self.setMinimumWidth(360)
        self.setModal(True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(10)

        lbl_name = QLabel(self.record.sewadar_name)
        lbl_name.setStyleSheet("font-size: 16px; font-weight: bold;")
        layout.addWidget(lbl_name)
        layout.addWidget(QLabel(
            f"{self.record.counter} - in at {format_for_display(self.record.start_time)}"
        ))

        self.picker_out = TimePicker("TIME OUT", self.draft.out_time)
        layout.addWidget(self.picker_out)

        btn_layout = QHBoxLayout()
        btn_layout.addStretch()
        btn_cancel = QPushButton("Cancel")
        btn_cancel.clicked.connect(self.reject)
        btn_layout.addWidget(btn_cancel)
        btn_confirm = QPushButton("Confirm Out")
        btn_confirm.setObjectName("PrimaryButton")
        btn_confirm.clicked.connect(self._on_confirm)
        btn_layout.addWidget(btn_confirm)
        layout.addLayout(btn_layout)

    def _on_confirm(self):
        self.draft.out_time = self.picker_out.value()
        try:
            self.session.confirm_mark_out(self.draft)
        except AttendanceError as e:
            QMessageBox.warning(self, "Cannot mark out", str(e))
            return
        self.accept()
