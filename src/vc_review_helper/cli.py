"""
Command line interface for the vc_review_helper tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``aireview`` command. It loads the
configuration, connects the review agent to the LLM server and streams
the model's review to standard output while the model reads the diffs
and writes its report through tools. Status messages go to standard
error so that standard output only carries the review text.
"""

from __future__ import annotations

import logging
from typing import Optional

import click

from vc_review_helper import __version__
from vc_review_helper.agent.prompts import build_review_prompt
from vc_review_helper.agent.review_agent import ReviewAgent
from vc_review_helper.config.loader import ConfigError, load_config
from vc_review_helper.llm.ollama_client import LLMError, OllamaClient
from vc_review_helper.tools.review_tools import build_review_registry

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_CONFIG_ERROR = 3
EXIT_LLM_FAILURE = 4

DEFAULT_OUTPUT = "code-review-report.md"


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=True)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=True)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def build_agent(config: dict, max_steps: Optional[int] = None) -> ReviewAgent:
    """Create the review agent described by ``config``."""
    llm_client = OllamaClient(
        base_url=config["base_url"],
        port=config["port"],
        model=config["model"],
        request_timeout=float(config.get("request_timeout", 120)),
        max_tokens=config.get("max_tokens"),
        api_key=config.get("api_key"),
    )
    return ReviewAgent(
        llm_client,
        build_review_registry(config),
        max_steps=max_steps if max_steps is not None else config["max_steps"],
    )


@click.command()
@click.argument("prompt", required=False)
@click.option("--dir", "directory", default=".", show_default=True,
              help="Directory to review when no PROMPT is given.")
@click.option("--output", default=DEFAULT_OUTPUT, show_default=True,
              help="Report file name to request when no PROMPT is given.")
@click.option("--max-steps", type=click.IntRange(min=1),
              help="Maximum number of model steps (overrides the configuration).")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="aireview")
def main(
    prompt: Optional[str],
    directory: str,
    output: str,
    max_steps: Optional[int],
    verbose: bool,
) -> None:
    """🔍 AI code reviewer for uncommitted Git changes.

    PROMPT is the instruction given to the model. It should name the
    directory to review and the markdown file to write. When omitted, a
    review of --dir saved to --output is requested.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    try:
        try:
            config = load_config()
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        agent = build_agent(config, max_steps)
        print_info(f"LLM Server: {config['base_url']}:{config['port']}")
        print_info(f"Model: {config['model']}")

        if not prompt:
            prompt = build_review_prompt(directory, output)
        logger.debug("Prompt: %s", prompt)

        try:
            for chunk in agent.run(prompt):
                click.echo(chunk, nl=False)
        except LLMError as exc:
            click.echo("")
            print_error(f"LLM error: {exc}")
            print_info("Make sure Ollama is running and the model supports tool calling", indent=1)
            raise click.exceptions.Exit(EXIT_LLM_FAILURE)

        click.echo("")
        print_success(f"Review finished after {agent.steps_taken} step(s)")
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
