"""
Configuration loading for vc_review_helper.

Provides a loader for the optional user-level configuration file. See
:mod:`vc_review_helper.config.loader` for implementation details.
"""

from .loader import ConfigError, load_config  # noqa: F401
