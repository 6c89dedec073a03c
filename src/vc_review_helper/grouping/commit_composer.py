"""
Conventional commit message composition.

:func:`compose_commit_message` classifies a change set (unless the caller
already knows the commit type) and builds a message of the form::

    <type>: update <file>            (one file)
    <type>: update <N> files         (several files)

    Files modified:
    - file1
    - file2
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from vc_review_helper.grouping.change_classifier import COMMIT_TYPES, classify_changes
from vc_review_helper.grouping.commit_model import CommitClassification


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def _summarize(file_names: List[str]) -> str:
    if len(file_names) == 1:
        return f"update {file_names[0]}"
    return f"update {len(file_names)} files"


def compose_commit_message(
    changes: Sequence,
    commit_type: Optional[str] = None,
) -> CommitClassification:
    """Compose a Conventional Commit message for a change set.

    Parameters
    ----------
    changes : Sequence
        Non-empty sequence of file changes with ``file`` and ``diff``
        attributes.
    commit_type : str, optional
        Commit type to use instead of the heuristic classification. Must
        be one of :data:`COMMIT_TYPES`.

    Returns
    -------
    CommitClassification
        The chosen type, the one-line message and the full message.

    Raises
    ------
    ValueError
        If ``changes`` is empty or ``commit_type`` is not a known type.
    """
    if not changes:
        raise ValueError("Cannot compose a commit message for an empty change set")
    if commit_type is None:
        commit_type = classify_changes(changes)
    elif commit_type not in COMMIT_TYPES:
        raise ValueError(f"Unknown commit type '{commit_type}'")

    file_names = [change.file for change in changes]
    message = f"{commit_type}: {_summarize(file_names)}"
    full_message = message
    if len(file_names) > 1:
        full_message += "\n\nFiles modified:\n" + "\n".join(f"- {name}" for name in file_names)

    logger.debug("Composed commit message for %d file(s): %s", len(file_names), message)
    return CommitClassification(
        type=commit_type,
        message=message,
        full_message=full_message,
        files_changed=len(file_names),
    )
