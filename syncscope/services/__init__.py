"""
Application services: settings persistence and result export.
"""

from syncscope.services.export import (
    format_listing,
    result_to_dict,
    write_json,
)
from syncscope.services.settings import (
    ApplicationSettings,
    ComparisonSettings,
    LoggingSettings,
    SettingsError,
    SettingsManager,
)

__all__ = [
    # Export
    'format_listing',
    'result_to_dict',
    'write_json',
    # Settings
    'ApplicationSettings',
    'ComparisonSettings',
    'LoggingSettings',
    'SettingsError',
    'SettingsManager',
]
