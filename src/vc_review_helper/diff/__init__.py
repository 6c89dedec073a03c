"""
Utilities for collecting diffs from version control.

The :mod:`vc_review_helper.diff.diff_collector` module gathers the
uncommitted changes of a working tree as :class:`FileChange` records.
"""

from .diff_collector import DEFAULT_EXCLUDE_FILES, FileChange, collect_file_changes  # noqa: F401
