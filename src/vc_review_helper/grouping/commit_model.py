"""
Data model for classified change sets.

The :class:`CommitClassification` holds the commit type inferred for a
change set together with the composed commit message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class CommitClassification:
    """Result of composing a commit message.

    Attributes
    ----------
    type : str
        The Conventional Commit type (feat, fix, docs, etc.).
    message : str
        One-line message, ``"<type>: <summary>"``.
    full_message : str
        The message plus, for several files, a bulleted file list.
    files_changed : int
        Number of files in the change set.
    """

    type: str
    message: str
    full_message: str
    files_changed: int

    def to_dict(self) -> Dict[str, Any]:
        """Return the result using the key names exposed to the model."""
        return {
            "message": self.message,
            "fullMessage": self.full_message,
            "type": self.type,
            "filesChanged": self.files_changed,
        }
