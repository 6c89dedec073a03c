"""
Markdown document rendering and persistence.

A report is rendered in a fixed order: the ``# title`` heading, an
optional ``---`` delimited front matter block holding only the metadata
fields that are set, the main content, then one ``## heading`` section
per entry in input order. Every block is followed by a blank line.

:func:`write_markdown_report` never raises on a failed write. It
returns a :class:`ReportResult` whose ``success`` flag the caller is
expected to inspect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


PREVIEW_LENGTH = 200


@dataclass
class Section:
    """A ``## heading`` block of the report."""

    heading: str
    content: str


@dataclass
class Metadata:
    """Optional front matter fields. Unset fields are not rendered."""

    author: Optional[str] = None
    date: Optional[str] = None
    tags: List[str] = field(default_factory=list)


@dataclass
class ReportResult:
    """Outcome of writing a report."""

    success: bool
    path: str
    size: int = 0
    preview: str = ""
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "path": self.path,
                "size": self.size,
                "preview": self.preview,
            }
        return {"success": False, "error": self.error, "path": self.path}


def _render_front_matter(metadata: Metadata) -> str:
    lines = ["---"]
    if metadata.author:
        lines.append(f"author: {metadata.author}")
    if metadata.date:
        lines.append(f"date: {metadata.date}")
    if metadata.tags:
        lines.append(f"tags: [{', '.join(metadata.tags)}]")
    lines.append("---")
    return "\n".join(lines) + "\n\n"


def render_markdown(
    title: str,
    content: str,
    sections: Optional[Sequence[Section]] = None,
    metadata: Optional[Metadata] = None,
) -> str:
    """Render a markdown document.

    Parameters
    ----------
    title : str
        Document title, rendered as the level-one heading.
    content : str
        Main body placed after the title (and front matter).
    sections : Sequence[Section], optional
        Extra ``##`` sections, rendered in the given order.
    metadata : Metadata, optional
        Front matter. When ``None`` no front matter block is emitted.

    Returns
    -------
    str
        The rendered document.
    """
    parts = [f"# {title}\n\n"]
    if metadata is not None:
        parts.append(_render_front_matter(metadata))
    parts.append(f"{content}\n\n")
    for section in sections or ():
        parts.append(f"## {section.heading}\n\n{section.content}\n\n")
    return "".join(parts)


def write_markdown_report(
    title: str,
    content: str,
    output_path: str,
    sections: Optional[Sequence[Section]] = None,
    metadata: Optional[Metadata] = None,
) -> ReportResult:
    """Render a markdown document and write it to ``output_path``.

    An existing file is overwritten. Write failures (missing parent
    directory, permissions, disk errors, text that cannot be encoded as
    UTF-8) are reported in the returned :class:`ReportResult` instead of
    being raised.
    """
    markdown = render_markdown(title, content, sections=sections, metadata=metadata)
    try:
        # Encode first so an unencodable document never truncates the target.
        data = markdown.encode("utf-8")
        Path(output_path).write_bytes(data)
    except (OSError, UnicodeError) as exc:
        logger.warning("Failed to write report to %s: %s", output_path, exc)
        return ReportResult(success=False, path=output_path, error=str(exc))

    preview = markdown[:PREVIEW_LENGTH]
    if len(markdown) > PREVIEW_LENGTH:
        preview += "..."
    logger.info("Wrote report to %s (%d characters)", output_path, len(markdown))
    return ReportResult(success=True, path=output_path, size=len(markdown), preview=preview)
