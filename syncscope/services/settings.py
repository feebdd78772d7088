"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional

from syncscope.core.folder.comparator import CompareOptions
from syncscope.core.folder.scanner import ScanOptions


class SettingsError(ValueError):
    """Raised when a settings file cannot be parsed."""


@dataclass
class ComparisonSettings:
    """Settings for folder comparison."""
    check_length: bool = False
    progress_interval: int = 1000

    # Scanning
    follow_symlinks: bool = False
    include_hidden: bool = True

    # File filters
    include_patterns: list[str] = field(default_factory=list)
    exclude_patterns: list[str] = field(default_factory=list)

    def to_compare_options(self) -> CompareOptions:
        return CompareOptions(
            check_length=self.check_length,
            progress_interval=self.progress_interval,
        )

    def to_scan_options(self) -> ScanOptions:
        return ScanOptions(
            follow_symlinks=self.follow_symlinks,
            include_hidden=self.include_hidden,
            include_patterns=list(self.include_patterns),
            exclude_patterns=list(self.exclude_patterns),
        )


@dataclass
class LoggingSettings:
    """Logging settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    comparison: ComparisonSettings = field(default_factory=ComparisonSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    recent_comparisons: list[tuple[str, str]] = field(default_factory=list)
    recent_limit: int = 10


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path | str] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'SyncScope' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'syncscope' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """
        Load settings from disk.

        A missing file yields the defaults.

        Raises:
            SettingsError: If the file is not a valid settings document
        """
        if not self.settings_path.exists():
            logging.debug(f"SettingsManager - No settings at {self.settings_path}, using defaults")
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.error(f"SettingsManager - Could not read {self.settings_path}: {e}")
            raise SettingsError(f"Invalid settings file {self.settings_path}: {e}") from e

        if not isinstance(data, dict):
            raise self._invalid("expected an object")

        self._settings = self._from_dict(data)
        return self._settings

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(asdict(settings), f, indent=2)

        except OSError as e:
            logging.warning(f"SettingsManager - Could not save {self.settings_path}: {e}")
            return False

        self._settings = settings
        return True

    def add_recent_comparison(self, source: str, target: str) -> None:
        """Add a source/target pair to the recent comparisons list."""
        settings = self.settings
        pair = (source, target)

        recent = [p for p in settings.recent_comparisons if tuple(p) != pair]
        recent.insert(0, pair)
        settings.recent_comparisons = recent[:settings.recent_limit]

        self.save()

    def _invalid(self, message: str) -> SettingsError:
        logging.error(f"SettingsManager - {self.settings_path}: {message}")
        return SettingsError(f"Invalid settings file {self.settings_path}: {message}")

    def _section(self, data: dict[str, Any], key: str) -> dict[str, Any]:
        value = data.get(key, {})
        if not isinstance(value, dict):
            raise self._invalid(f"'{key}' must be an object")
        return value

    def _field(self, section: dict[str, Any], key: str, default: Any, kind: Any) -> Any:
        value = section.get(key, default)
        # bool is an int subclass
        if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
            raise self._invalid(f"'{key}' has the wrong type")
        return value

    def _string_list(self, section: dict[str, Any], key: str) -> list[str]:
        value = self._field(section, key, [], list)
        if not all(isinstance(item, str) for item in value):
            raise self._invalid(f"'{key}' must be a list of strings")
        return value

    def _from_dict(self, data: dict[str, Any]) -> ApplicationSettings:
        """
        Convert dictionary back to settings objects.

        Missing keys take their defaults and unknown keys are ignored.

        Raises:
            SettingsError: If a section or field has the wrong type
        """
        defaults = ComparisonSettings()
        comparison_data = self._section(data, 'comparison')
        comparison = ComparisonSettings(
            check_length=self._field(comparison_data, 'check_length', defaults.check_length, bool),
            progress_interval=self._field(comparison_data, 'progress_interval', defaults.progress_interval, int),
            follow_symlinks=self._field(comparison_data, 'follow_symlinks', defaults.follow_symlinks, bool),
            include_hidden=self._field(comparison_data, 'include_hidden', defaults.include_hidden, bool),
            include_patterns=self._string_list(comparison_data, 'include_patterns'),
            exclude_patterns=self._string_list(comparison_data, 'exclude_patterns'),
        )

        logging_data = self._section(data, 'logging')
        logging_settings = LoggingSettings(
            level=self._field(logging_data, 'level', 'WARNING', str),
            log_file=self._field(logging_data, 'log_file', None, (str, type(None))),
        )

        recent = self._field(data, 'recent_comparisons', [], list)
        for pair in recent:
            if not (isinstance(pair, list) and len(pair) == 2 and all(isinstance(p, str) for p in pair)):
                raise self._invalid("'recent_comparisons' must hold [source, target] pairs")

        return ApplicationSettings(
            comparison=comparison,
            logging=logging_settings,
            recent_comparisons=[(source, target) for source, target in recent],
            recent_limit=self._field(data, 'recent_limit', 10, int),
        )
