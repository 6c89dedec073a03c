"""
Diff collection utilities.

This module turns the uncommitted changes of a Git working tree into a
list of :class:`FileChange` records, one per changed file, in the order
Git reports them. Files whose path exactly matches an entry of the
exclusion list are skipped before their diff is requested.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Iterable, List

from vc_review_helper.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_EXCLUDE_FILES = ("dist", "bun.lock")


@dataclass
class FileChange:
    """A changed file and its unified diff."""

    file: str
    diff: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def collect_file_changes(
    root_dir: str,
    exclude_files: Iterable[str] = DEFAULT_EXCLUDE_FILES,
    client_factory: Callable[[str], GitClient] = GitClient,
) -> List[FileChange]:
    """Collect the diffs of every changed file under ``root_dir``.

    Parameters
    ----------
    root_dir : str
        Path of the Git working tree to inspect.
    exclude_files : Iterable[str]
        File paths to skip. Matching is exact; no glob or prefix matching.
    client_factory : Callable[[str], GitClient]
        Factory creating the Git client, replaceable in tests.

    Returns
    -------
    List[FileChange]
        Changes in the order of the Git diff summary.

    Raises
    ------
    ValueError
        If ``root_dir`` is empty.
    VersionControlError
        If ``root_dir`` is not a valid repository or any Git query fails.
        The collection is aborted; partial results are discarded.
    """
    if not root_dir:
        raise ValueError("root_dir must be a non-empty path")

    excluded = set(exclude_files)
    client = client_factory(root_dir)
    client.ensure_repository()

    changes: List[FileChange] = []
    for stat in client.diff_summary():
        if stat.path in excluded:
            logger.debug("Skipping excluded file: %s", stat.path)
            continue
        changes.append(FileChange(file=stat.path, diff=client.get_diff(stat.path)))

    logger.info("Collected %d changed file(s) in %s", len(changes), root_dir)
    return changes
