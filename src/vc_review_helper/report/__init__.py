"""
Markdown report generation.

See :mod:`vc_review_helper.report.markdown_writer` for the rendering
rules and the write result returned to the review agent.
"""

from .markdown_writer import (  # noqa: F401
    Metadata,
    ReportResult,
    Section,
    render_markdown,
    write_markdown_report,
)
