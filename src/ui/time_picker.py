"""
Time Picker Module

12-hour time input: editable hour and minute combos with scroll lists,
plus an AM/PM selector. Typing is free (digits only, two characters);
each field is clamped into range when editing finishes.
"""

from PyQt6.QtWidgets import QComboBox, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from domain.entities import Period, TimeParts
from domain.time_codec import HOUR_OPTIONS, MINUTE_OPTIONS, clamp_field, sanitize_field_input


class TimePicker(QWidget):
    """Labelled hour : minute AM/PM picker holding a TimeParts value."""

    def __init__(self, label: str, value: TimeParts = None, parent=None):
        super().__init__(parent)
        self._init_ui(label)
        self.set_value(value or TimeParts())
        self._connect_signals()

    def _init_ui(self, label: str):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self.lbl_title = QLabel(label)
        layout.addWidget(self.lbl_title)

        row = QHBoxLayout()
        row.setSpacing(6)

        self.cmb_hour = self._create_field_combo(HOUR_OPTIONS)
        row.addWidget(self.cmb_hour)
        row.addWidget(QLabel(":"))
        self.cmb_minute = self._create_field_combo(MINUTE_OPTIONS)
        row.addWidget(self.cmb_minute)

        self.cmb_period = QComboBox()
        for period in Period:
            self.cmb_period.addItem(period.value, period)
        row.addWidget(self.cmb_period)
        row.addStretch()

        layout.addLayout(row)

    def _create_field_combo(self, options) -> QComboBox:
        combo = QComboBox()
        combo.setEditable(True)
        combo.setInsertPolicy(QComboBox.InsertPolicy.NoInsert)
        combo.setMaxVisibleItems(6)
        combo.setMinimumWidth(64)
        combo.addItems(options)
        return combo

    def _connect_signals(self):
        self.cmb_hour.lineEdit().textEdited.connect(
            lambda text: self._on_text_edited(self.cmb_hour, text)
        )
        self.cmb_minute.lineEdit().textEdited.connect(
            lambda text: self._on_text_edited(self.cmb_minute, text)
        )
        self.cmb_hour.lineEdit().editingFinished.connect(
            lambda: self._on_field_committed(self.cmb_hour, "hour")
        )
        self.cmb_minute.lineEdit().editingFinished.connect(
            lambda: self._on_field_committed(self.cmb_minute, "minute")
        )

    def _on_text_edited(self, combo: QComboBox, text: str):
        """Strip non-digits while typing."""
        cleaned = sanitize_field_input(text)
        if cleaned != text:
            combo.lineEdit().setText(cleaned)

    def _on_field_committed(self, combo: QComboBox, field: str):
        """Clamp the field on focus loss / Enter."""
        text = combo.currentText()
        clamped = clamp_field(field, text)
        if clamped != text:
            combo.setEditText(clamped)

    def value(self) -> TimeParts:
        """Current picker fields."""
        return TimeParts(
            hour=self.cmb_hour.currentText(),
            minute=self.cmb_minute.currentText(),
            period=self.cmb_period.currentData() or Period.AM
        )

    def set_value(self, value: TimeParts):
        self.cmb_hour.setEditText(value.hour)
        self.cmb_minute.setEditText(value.minute)
        index = self.cmb_period.findData(value.period)
        self.cmb_period.setCurrentIndex(index if index >= 0 else 0)
