"""
Heuristics for classifying a change set into a Conventional Commit type.

The classifier is an ordered table of ``(type, predicate)`` rules. Each
predicate looks at the whole change set; the first rule that matches
decides the type and ``chore`` is used when none does. The checks are
plain substring tests so the result is deterministic and can be unit
tested without a language model.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

COMMIT_TYPES = ("feat", "fix", "docs", "style", "refactor", "test", "chore")

DEFAULT_COMMIT_TYPE = "chore"


def _adds_code_structures(changes: Sequence) -> bool:
    return any(
        "+" in change.diff
        and any(keyword in change.diff for keyword in ("function", "class", "export"))
        for change in changes
    )


def _mentions_fixes(changes: Sequence) -> bool:
    # Case-sensitive substring match.
    return any(
        any(keyword in change.diff for keyword in ("fix", "bug", "error"))
        for change in changes
    )


def _touches_docs(changes: Sequence) -> bool:
    return any(".md" in change.file or "README" in change.file for change in changes)


def _touches_tests(changes: Sequence) -> bool:
    return any(".test." in change.file or ".spec." in change.file for change in changes)


# Evaluated in order; first match wins.
CLASSIFICATION_RULES: List[Tuple[str, Callable[[Sequence], bool]]] = [
    ("feat", _adds_code_structures),
    ("fix", _mentions_fixes),
    ("docs", _touches_docs),
    ("test", _touches_tests),
]


def classify_changes(changes: Sequence) -> str:
    """Classify a change set into a Conventional Commit type.

    Parameters
    ----------
    changes : Sequence
        File changes; each item must have ``file`` and ``diff`` attributes.

    Returns
    -------
    str
        ``feat``, ``fix``, ``docs`` or ``test`` for the first matching
        rule of :data:`CLASSIFICATION_RULES`, otherwise ``chore``.
    """
    for commit_type, predicate in CLASSIFICATION_RULES:
        if predicate(changes):
            return commit_type
    return DEFAULT_COMMIT_TYPE
