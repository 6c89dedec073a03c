"""
Git client implementation for vc_review_helper.

This module wraps the read-only Git queries needed to review local
changes: validating that a directory is a working tree, summarising the
files changed since the last commit, and fetching the diff of a single
file. All subprocess calls go through :meth:`GitClient._run` so that unit
tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass
class DiffStat:
    """One entry of the diff summary of the working tree against ``HEAD``."""

    path: str
    insertions: int
    deletions: int
    binary: bool = False


class VersionControlError(Exception):
    """Raised when a Git command fails or the directory is not a repository."""

    pass


class GitClient:
    """Client for querying a Git working tree."""

    def __init__(self, repo_root: Union[str, Path]) -> None:
        self.repo_root = Path(repo_root)

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        VersionControlError
            If Git cannot be started in ``repo_root`` or the command exits
            with a non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command in %s: %s", self.repo_root, " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except (FileNotFoundError, NotADirectoryError, PermissionError) as exc:
            # Raised for a missing cwd as well as a missing git binary.
            logger.error("Unable to run git in %s: %s", self.repo_root, exc)
            raise VersionControlError(f"Cannot run git in '{self.repo_root}': {exc}") from exc

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise VersionControlError(result.stderr.strip() or result.stdout.strip())
        return result

    def ensure_repository(self) -> None:
        """Raise :class:`VersionControlError` unless ``repo_root`` is inside a work tree."""
        result = self._run(["rev-parse", "--is-inside-work-tree"], check=False)
        if result.returncode != 0 or result.stdout.strip() != "true":
            message = result.stderr.strip() or "not a git working tree"
            raise VersionControlError(f"'{self.repo_root}' is not a valid repository: {message}")

    # ------------------------------------------------------------------
    # Change detection
    # ------------------------------------------------------------------
    def diff_summary(self) -> List[DiffStat]:
        """Summarise the files changed in the working tree since the last commit.

        Uses ``git diff HEAD --numstat --no-renames -z`` so that staged and
        unstaged edits to tracked files are both reported, in Git's order.
        With ``-z`` records are NUL-terminated and paths are not quoted, so
        names with spaces or non-ASCII characters come back verbatim.
        Binary files are reported by Git with ``-`` counts.

        Returns
        -------
        List[DiffStat]
            One entry per changed file.

        Raises
        ------
        VersionControlError
            If the diff command fails (e.g. the repository has no commits).
        """
        result = self._run(["diff", "HEAD", "--numstat", "--no-renames", "-z"], check=True)
        stats: List[DiffStat] = []
        for record in result.stdout.split("\0"):
            if not record:
                continue
            parts = record.split("\t", 2)
            if len(parts) != 3:
                logger.debug("Skipping unparseable numstat record: %r", record)
                continue
            added, deleted, path = parts
            binary = added == "-" and deleted == "-"
            stats.append(
                DiffStat(
                    path=path,
                    insertions=0 if binary else int(added),
                    deletions=0 if binary else int(deleted),
                    binary=binary,
                )
            )
        return stats

    def get_diff(self, file_path: str) -> str:
        """Return the unified diff of ``file_path`` against ``HEAD``."""
        result = self._run(["diff", "HEAD", "--", file_path], check=True)
        return result.stdout
