"""
The review agent.

See :mod:`vc_review_helper.agent.review_agent` for the tool-calling loop.
"""

from .prompts import SYSTEM_PROMPT, build_review_prompt  # noqa: F401
from .review_agent import MAX_STEPS, ReviewAgent  # noqa: F401
