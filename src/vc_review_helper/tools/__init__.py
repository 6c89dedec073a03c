"""
Tools exposed to the review model.

:mod:`vc_review_helper.tools.registry` implements validated dispatch and
:mod:`vc_review_helper.tools.review_tools` registers the review tools.
"""

from .registry import Tool, ToolRegistry  # noqa: F401
from .review_tools import build_review_registry  # noqa: F401
