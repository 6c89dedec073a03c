"""
The three tools offered to the review model.

The handlers adapt the validated tool inputs to the plain functions of
:mod:`vc_review_helper.diff`, :mod:`vc_review_helper.grouping` and
:mod:`vc_review_helper.report`, and convert their results to JSON
friendly dictionaries.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from vc_review_helper.diff.diff_collector import (
    DEFAULT_EXCLUDE_FILES,
    FileChange,
    collect_file_changes,
)
from vc_review_helper.grouping.commit_composer import compose_commit_message
from vc_review_helper.report.markdown_writer import Metadata, Section, write_markdown_report
from vc_review_helper.tools.registry import Tool, ToolRegistry
from vc_review_helper.tools.schemas import (
    CommitMessageInput,
    FileChangesInput,
    MarkdownFileInput,
)

FILE_CHANGES_TOOL = "getFileChangesInDirectoryTool"
COMMIT_MESSAGE_TOOL = "generateCommitMessageTool"
MARKDOWN_FILE_TOOL = "generateMarkdownFileTool"


def _file_changes_handler(exclude_files: Iterable[str]):
    excluded = tuple(exclude_files)

    def handler(params: FileChangesInput) -> List[Dict[str, Any]]:
        changes = collect_file_changes(params.rootDir, exclude_files=excluded)
        return [change.to_dict() for change in changes]

    return handler


def _commit_message_handler(params: CommitMessageInput) -> Dict[str, Any]:
    changes = [FileChange(file=item.file, diff=item.diff) for item in params.changes]
    return compose_commit_message(changes, commit_type=params.type).to_dict()


def _markdown_file_handler(params: MarkdownFileInput) -> Dict[str, Any]:
    sections = [Section(heading=s.heading, content=s.content) for s in params.sections or []]
    metadata: Optional[Metadata] = None
    if params.metadata is not None:
        metadata = Metadata(
            author=params.metadata.author,
            date=params.metadata.date,
            tags=list(params.metadata.tags or []),
        )
    result = write_markdown_report(
        params.title,
        params.content,
        params.outputPath,
        sections=sections,
        metadata=metadata,
    )
    return result.to_dict()


def build_review_registry(config: Optional[Dict[str, Any]] = None) -> ToolRegistry:
    """Create a registry holding the review tools.

    ``config`` is the loaded configuration; only ``exclude_files`` is
    read from it.
    """
    exclude_files = (config or {}).get("exclude_files", DEFAULT_EXCLUDE_FILES)
    registry = ToolRegistry()
    registry.register(
        Tool(
            name=FILE_CHANGES_TOOL,
            description="Gets the code changes made in given directory",
            input_model=FileChangesInput,
            handler=_file_changes_handler(exclude_files),
        )
    )
    registry.register(
        Tool(
            name=COMMIT_MESSAGE_TOOL,
            description="Generates a conventional commit message based on file changes",
            input_model=CommitMessageInput,
            handler=_commit_message_handler,
        )
    )
    registry.register(
        Tool(
            name=MARKDOWN_FILE_TOOL,
            description="Generates and saves a markdown file with specified content and structure",
            input_model=MarkdownFileInput,
            handler=_markdown_file_handler,
        )
    )
    return registry
