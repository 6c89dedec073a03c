"""
Version control system (VCS) integration.

This package contains the Git client used to validate a working tree,
summarise its uncommitted changes and read per-file diffs.
"""

from .git_client import DiffStat, GitClient, VersionControlError  # noqa: F401
