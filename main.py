"""
Main entry point for the SyncScope command line tool.

This module handles:
- Command line argument parsing
- Settings loading
- Logging configuration
- Running a comparison and printing its report
- Exit codes
"""

from __future__ import annotations

import argparse
import copy
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List

from syncscope import __version__
from syncscope.core.folder import Comparator, DuplicateKeyError, FolderScanner
from syncscope.core.report import ConsoleReporter, NullReporter
from syncscope.services.export import format_listing, write_json
from syncscope.services.settings import ApplicationSettings, SettingsError, SettingsManager


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "syncscope"

EXIT_IDENTICAL = 0
EXIT_DIFFERENCES = 1
EXIT_ERROR = 2


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    source_path: str = ""
    target_path: str = ""
    check_length: Optional[bool] = None
    exclude_patterns: list[str] = field(default_factory=list)
    include_hidden: Optional[bool] = None
    follow_symlinks: Optional[bool] = None
    list_files: bool = False
    json_path: Optional[str] = None
    config_file: Optional[str] = None
    log_level: Optional[str] = None
    log_file: Optional[str] = None
    quiet: bool = False


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Console logs go to stderr; the report is written to stdout.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    # Get numeric level
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_file,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    return root_logger


# =============================================================================
# Argument Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Compare a source folder tree against a target folder tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s photos backup/photos              Compare by relative path
  %(prog)s -l photos backup/photos           Also treat size changes as differences
  %(prog)s --list --json out.json src dst    Print every file and save a JSON report

Exit status is 0 when the trees match, 1 when they differ and 2 on error.
        """
    )

    # Positional arguments
    parser.add_argument('source', help='Source folder')
    parser.add_argument('target', help='Target folder')

    # Comparison options
    parser.add_argument(
        '-l', '--check-length',
        action='store_true',
        default=None,
        help='Files with the same path but a different size are different'
    )
    parser.add_argument(
        '-x', '--exclude',
        action='append',
        default=[],
        metavar='PATTERN',
        help='Skip files and folders matching PATTERN (repeatable)'
    )
    parser.add_argument(
        '--no-hidden',
        action='store_true',
        help='Skip hidden files and folders'
    )
    parser.add_argument(
        '--follow-symlinks',
        action='store_true',
        default=None,
        help='Follow symbolic links'
    )

    # Output
    parser.add_argument(
        '--list',
        action='store_true',
        help='List every file that is not identical'
    )
    parser.add_argument(
        '-j', '--json',
        metavar='FILE',
        help='Write the result as JSON to FILE'
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Do not print progress and summary'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Settings file path'
    )

    # Logging
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default=None,
        help='Log level'
    )
    parser.add_argument(
        '--log-file',
        help='Also write logs to this file'
    )

    # Version
    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {__version__}'
    )

    parsed = parser.parse_args(args)

    # Build result
    result = CommandLineArgs()
    result.source_path = parsed.source
    result.target_path = parsed.target
    result.check_length = parsed.check_length
    result.exclude_patterns = parsed.exclude
    result.include_hidden = False if parsed.no_hidden else None
    result.follow_symlinks = parsed.follow_symlinks
    result.list_files = parsed.list
    result.json_path = parsed.json
    result.config_file = parsed.config
    result.log_level = parsed.log_level
    result.log_file = parsed.log_file
    result.quiet = parsed.quiet

    return result


# =============================================================================
# Application Setup
# =============================================================================

def apply_overrides(settings: ApplicationSettings, args: CommandLineArgs) -> ApplicationSettings:
    """Return a copy of the loaded settings with command line options applied."""
    settings = copy.deepcopy(settings)
    comparison = settings.comparison

    if args.check_length is not None:
        comparison.check_length = args.check_length
    if args.include_hidden is not None:
        comparison.include_hidden = args.include_hidden
    if args.follow_symlinks is not None:
        comparison.follow_symlinks = args.follow_symlinks
    comparison.exclude_patterns = comparison.exclude_patterns + args.exclude_patterns

    if args.log_level:
        settings.logging.level = args.log_level
    if args.log_file:
        settings.logging.log_file = args.log_file

    return settings


def build_comparator(settings: ApplicationSettings, args: CommandLineArgs) -> Comparator:
    """Create a comparator for the requested roots."""
    reporter = NullReporter() if args.quiet else ConsoleReporter(sys.stdout)
    return Comparator(
        args.source_path,
        args.target_path,
        options=settings.comparison.to_compare_options(),
        reporter=reporter,
        scanner=FolderScanner(settings.comparison.to_scan_options()),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Application main entry point.

    Settings come from `-c FILE` or the per-user settings file. A
    successful run is recorded in that file's recent comparisons.

    Returns:
        Exit code (0 when the trees match)
    """
    args = parse_arguments(argv)
    settings_manager = SettingsManager(args.config_file)

    try:
        settings = settings_manager.load()
    except SettingsError as e:
        print(f"{APP_NAME}: {e}", file=sys.stderr)
        return EXIT_ERROR

    settings = apply_overrides(settings, args)

    log_file = Path(settings.logging.log_file) if settings.logging.log_file else None
    logger = setup_logging(settings.logging.level, log_file)
    logger.info(f"Starting {APP_NAME} v{__version__}")

    comparator = build_comparator(settings, args)

    try:
        result = comparator.run()
    except DuplicateKeyError as e:
        logger.error(f"Comparison failed: {e}")
        return EXIT_ERROR
    except OSError as e:
        logger.error(f"Could not enumerate files: {e}")
        return EXIT_ERROR

    if args.list_files:
        print(format_listing(result))

    if args.json_path:
        try:
            write_json(result, args.json_path)
        except OSError as e:
            logger.error(f"Could not write {args.json_path}: {e}")
            return EXIT_ERROR

    settings_manager.add_recent_comparison(args.source_path, args.target_path)

    return EXIT_IDENTICAL if result.is_identical else EXIT_DIFFERENCES


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())
