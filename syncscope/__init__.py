"""
SyncScope - compare a source directory tree against a target tree.
"""

__version__ = "1.0.0"
