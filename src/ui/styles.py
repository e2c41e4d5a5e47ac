"""
Style Management Module

Handles application theming and style definitions.
New themes are added by registering a Theme subclass with ThemeManager.
"""

from abc import ABC, abstractmethod
from typing import Dict, Type


class Theme(ABC):
    """Abstract base class for Themes."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def stylesheet(self) -> str:
        """Returns the fully compiled stylesheet string."""
        pass


class LightTheme(Theme):
    """The default light theme with the brand blue accent."""

    @property
    def name(self) -> str:
        return "Light"

    @property
    def stylesheet(self) -> str:
        return """
            QMainWindow, QDialog {
                background-color: #f8fafc;
            }
            QWidget {
                font-family: 'Segoe UI', system-ui, sans-serif;
                font-size: 13px;
                color: #111827;
            }
            QLabel#DateHeading {
                font-size: 26px;
                font-weight: bold;
            }
            QLabel#ActiveBadge {
                background-color: #2563eb;
                color: white;
                border-radius: 10px;
                padding: 4px 10px;
                font-weight: bold;
            }
            QLabel#EmptyState {
                color: #9ca3af;
                padding: 24px;
            }
            QGroupBox {
                font-weight: bold;
                border: 1px solid #e5e7eb;
                border-radius: 8px;
                margin-top: 12px;
                padding-top: 16px;
                background-color: #ffffff;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 12px;
                padding: 0 5px;
                color: #2563eb;
            }
            QLineEdit, QComboBox, QDateEdit {
                background-color: #ffffff;
                border: 1px solid #d1d5db;
                border-radius: 6px;
                padding: 5px 8px;
            }
            QLineEdit:focus, QComboBox:focus, QDateEdit:focus {
                border: 1px solid #2563eb;
            }
            QPushButton {
                background-color: #ffffff;
                border: 1px solid #d1d5db;
                border-radius: 6px;
                padding: 6px 14px;
            }
            QPushButton:hover {
                background-color: #eff6ff;
            }
            QPushButton#PrimaryButton {
                background-color: #2563eb;
                color: white;
                border: none;
                font-weight: bold;
            }
            QPushButton#PrimaryButton:disabled {
                background-color: #93c5fd;
            }
            QListWidget, QTableWidget {
                background-color: #ffffff;
                border: 1px solid #e5e7eb;
                border-radius: 8px;
            }
            QHeaderView::section {
                background-color: #f9fafb;
                color: #6b7280;
                font-weight: bold;
                border: none;
                padding: 6px;
            }
        """


class DarkTheme(Theme):
    """Dark variant for low-light counters."""

    @property
    def name(self) -> str:
        return "Dark"

    @property
    def stylesheet(self) -> str:
        return """
            QMainWindow, QDialog {
                background-color: #1e1e1e;
            }
            QWidget {
                font-family: 'Segoe UI', system-ui, sans-serif;
                font-size: 13px;
                color: #e0e0e0;
            }
            QLabel#DateHeading {
                font-size: 26px;
                font-weight: bold;
            }
            QLabel#ActiveBadge {
                background-color: #0e639c;
                color: white;
                border-radius: 10px;
                padding: 4px 10px;
                font-weight: bold;
            }
            QLabel#EmptyState {
                color: #808080;
                padding: 24px;
            }
            QGroupBox {
                font-weight: bold;
                border: 1px solid #3e3e42;
                border-radius: 6px;
                margin-top: 12px;
                padding-top: 16px;
                background-color: #252526;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 12px;
                padding: 0 5px;
                color: #4ec9b0;
            }
            QLineEdit, QComboBox, QDateEdit {
                background-color: #3c3c3c;
                border: 1px solid #3e3e42;
                border-radius: 4px;
                padding: 5px 8px;
                color: #e0e0e0;
            }
            QPushButton {
                background-color: #3c3c3c;
                border: 1px solid #3e3e42;
                border-radius: 4px;
                padding: 6px 14px;
            }
            QPushButton:hover {
                background-color: #505050;
            }
            QPushButton#PrimaryButton {
                background-color: #0e639c;
                color: white;
                border: none;
                font-weight: bold;
            }
            QPushButton#PrimaryButton:disabled {
                background-color: #3a4a5a;
                color: #9a9a9a;
            }
            QListWidget, QTableWidget {
                background-color: #252526;
                border: 1px solid #3e3e42;
            }
            QHeaderView::section {
                background-color: #2d2d30;
                color: #cccccc;
                border: none;
                padding: 6px;
            }
        """


class ThemeManager:
    """
    Factory and manager for application themes.
    Stateless; themes are looked up by display name.
    """

    _themes: Dict[str, Type[Theme]] = {
        "Light": LightTheme,
        "Dark": DarkTheme
    }

    @classmethod
    def get_theme(cls, theme_name: str) -> Theme:
        """Factory method to get a theme instance by name."""
        theme_cls = cls._themes.get(theme_name)
        if not theme_cls:
            # Fallback to default if theme name not found
            return LightTheme()
        return theme_cls()

    @classmethod
    def get_available_themes(cls) -> list[str]:
        """Returns a list of available theme names."""
        return list(cls._themes.keys())
