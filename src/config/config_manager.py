"""
Configuration Manager Module

Handles loading, saving, and managing application configuration.
Provides bi-directional mapping between UI state and JSON persistence.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from domain.record_store import DEFAULT_COUNTERS
from infrastructure.logger import get_logger

logger = get_logger("ConfigManager")


@dataclass
class Paths:
    """File paths configuration."""
    records_file: str = ""      # Empty = records.json next to config
    roster_csv: str = ""
    custom_font_path: str = ""  # Custom TTF for PDF generation


@dataclass
class Counters:
    """Work locations offered as suggestions in the entry dialog."""
    predefined: List[str] = field(default_factory=lambda: list(DEFAULT_COUNTERS))


@dataclass
class TimeDefault:
    """Initial picker value, in 12-hour fields."""
    hour: str = "09"
    minute: str = "00"
    period: str = "AM"


@dataclass
class TimeDefaults:
    """Default picker values for the entry and mark-out dialogs."""
    entry_in: TimeDefault = field(default_factory=TimeDefault)
    entry_out: TimeDefault = field(default_factory=lambda: TimeDefault(
        hour="05",
        minute="00",
        period="PM"
    ))
    mark_out_step_minutes: int = 5


@dataclass
class UIPrefs:
    """UI preferences."""
    theme_name: str = "Light"


@dataclass
class OutputSettings:
    """Output settings for exported daily reports."""
    output_dir: str = ""  # Default empty = current directory
    pdf_filename_pattern: str = "Sewa_Report_{date}.pdf"
    excel_filename_pattern: str = "Sewa_Report_{date}.xlsx"
    generate_excel: bool = False


@dataclass
class AppConfig:
    """Main application configuration container."""
    paths: Paths = field(default_factory=Paths)
    counters: Counters = field(default_factory=Counters)
    time_defaults: TimeDefaults = field(default_factory=TimeDefaults)
    ui_prefs: UIPrefs = field(default_factory=UIPrefs)
    output_settings: OutputSettings = field(default_factory=OutputSettings)


class ConfigManager:
    """
    Manages application configuration with JSON persistence.

    Responsibilities:
    - Load configuration from JSON file
    - Save configuration to JSON file
    - Provide default configuration
    - Convert between dataclass and dict representations
    """

    DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.json"

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self._config: AppConfig = AppConfig()

    @property
    def config(self) -> AppConfig:
        """Get current configuration."""
        return self._config

    def load(self) -> AppConfig:
        """Load configuration from JSON file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._config = self._dict_to_config(data)
            except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Failed to load config, using defaults. Error: {e}")
                self._config = AppConfig()
        else:
            self._config = AppConfig()
        return self._config

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = self._config_to_dict(self._config)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def records_path(self) -> Path:
        """Resolve the record file, defaulting to records.json beside the config."""
        if self._config.paths.records_file:
            return Path(self._config.paths.records_file)
        return self.config_path.parent / "records.json"

    def _config_to_dict(self, config: AppConfig) -> dict:
        """Convert AppConfig dataclass to dictionary."""
        return {
            "paths": {
                "records_file": config.paths.records_file,
                "roster_csv": config.paths.roster_csv,
                "custom_font_path": config.paths.custom_font_path
            },
            "counters": {
                "predefined": list(config.counters.predefined)
            },
            "time_defaults": {
                "entry_in": self._time_default_to_dict(config.time_defaults.entry_in),
                "entry_out": self._time_default_to_dict(config.time_defaults.entry_out),
                "mark_out_step_minutes": config.time_defaults.mark_out_step_minutes
            },
            "ui_prefs": {
                "theme_name": config.ui_prefs.theme_name
            },
            "output_settings": {
                "output_dir": config.output_settings.output_dir,
                "pdf_filename_pattern": config.output_settings.pdf_filename_pattern,
                "excel_filename_pattern": config.output_settings.excel_filename_pattern,
                "generate_excel": config.output_settings.generate_excel
            }
        }

    @staticmethod
    def _time_default_to_dict(value: TimeDefault) -> dict:
        return {"hour": value.hour, "minute": value.minute, "period": value.period}

    def _dict_to_config(self, data: dict) -> AppConfig:
        """Convert dictionary to AppConfig dataclass."""
        paths_data = data.get("paths", {})
        counters_data = data.get("counters", {})
        time_defaults_data = data.get("time_defaults", {})
        ui_prefs_data = data.get("ui_prefs", {})
        output_settings_data = data.get("output_settings", {})

        # Build Paths
        paths = Paths(
            records_file=paths_data.get("records_file", ""),
            roster_csv=paths_data.get("roster_csv", ""),
            custom_font_path=paths_data.get("custom_font_path", "")
        )

        # Build Counters
        counters = Counters(
            predefined=list(counters_data.get("predefined", DEFAULT_COUNTERS))
        )

        # Build TimeDefaults
        in_data = time_defaults_data.get("entry_in", {})
        out_data = time_defaults_data.get("entry_out", {})
        time_defaults = TimeDefaults(
            entry_in=TimeDefault(
                hour=in_data.get("hour", "09"),
                minute=in_data.get("minute", "00"),
                period=in_data.get("period", "AM")
            ),
            entry_out=TimeDefault(
                hour=out_data.get("hour", "05"),
                minute=out_data.get("minute", "00"),
                period=out_data.get("period", "PM")
            ),
            mark_out_step_minutes=time_defaults_data.get("mark_out_step_minutes", 5)
        )

        # Build UIPrefs
        ui_prefs = UIPrefs(
            theme_name=ui_prefs_data.get("theme_name", "Light")
        )

        # Build OutputSettings
        output_settings = OutputSettings(
            output_dir=output_settings_data.get("output_dir", ""),
            pdf_filename_pattern=output_settings_data.get("pdf_filename_pattern", "Sewa_Report_{date}.pdf"),
            excel_filename_pattern=output_settings_data.get("excel_filename_pattern", "Sewa_Report_{date}.xlsx"),
            generate_excel=output_settings_data.get("generate_excel", False)
        )

        return AppConfig(
            paths=paths,
            counters=counters,
            time_defaults=time_defaults,
            ui_prefs=ui_prefs,
            output_settings=output_settings
        )
