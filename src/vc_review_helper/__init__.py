"""
Top-level package for vc_review_helper.

This package exposes the main CLI entry point via the
``vc_review_helper.cli`` module. The review itself is driven by
:class:`vc_review_helper.agent.review_agent.ReviewAgent`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
