"""
Commit classification for change sets.

This package infers a Conventional Commit type for a set of file changes
and composes a commit message from it. See
:mod:`vc_review_helper.grouping.change_classifier` and
:mod:`vc_review_helper.grouping.commit_composer` for details.
"""

from .change_classifier import COMMIT_TYPES, classify_changes  # noqa: F401
from .commit_composer import compose_commit_message  # noqa: F401
from .commit_model import CommitClassification  # noqa: F401
