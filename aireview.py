#!/usr/bin/env python
"""
Thin wrapper script to invoke the vc_review_helper CLI.

Running ``python aireview.py`` is equivalent to running the
``aireview`` console script installed via ``pyproject.toml``.
"""

from vc_review_helper.cli import main


if __name__ == "__main__":
    main(prog_name="aireview")
