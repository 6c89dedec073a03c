"""
Registry of the tools a model may call.

Each :class:`Tool` pairs a name and description with a pydantic input
model and a handler. :meth:`ToolRegistry.dispatch` validates the
arguments the model sent against the input model before the handler
runs, so handlers always receive a validated model instance.

Invalid arguments, unknown tool names and version control failures are
returned to the model as ``{"success": False, "error": ...}`` so it can
adapt; any other exception propagates to the caller.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type

from pydantic import BaseModel, ValidationError

from vc_review_helper.vcs.git_client import VersionControlError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass
class Tool:
    """A named operation the model may invoke."""

    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[[BaseModel], Any]

    def schema(self) -> Dict[str, Any]:
        """Return the function tool definition sent to the model."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_model.model_json_schema(),
            },
        }


def _failure(error: str) -> Dict[str, Any]:
    return {"success": False, "error": error}


class ToolRegistry:
    """Maps tool names to their schema and handler."""

    def __init__(self) -> None:
        self._tools: Dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool:
        return self._tools[name]

    def names(self) -> List[str]:
        return list(self._tools)

    def schemas(self) -> List[Dict[str, Any]]:
        return [tool.schema() for tool in self._tools.values()]

    def dispatch(self, name: str, arguments: Any) -> Any:
        """Validate ``arguments`` and run the tool called ``name``.

        ``arguments`` may be a mapping or a JSON encoded object, since
        models are not consistent about which one they send.
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.warning("Model requested unknown tool '%s'", name)
            return _failure(f"Unknown tool '{name}'. Available tools: {', '.join(self.names())}")

        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments) if arguments.strip() else {}
            except json.JSONDecodeError as exc:
                logger.warning("Tool '%s' received undecodable arguments: %s", name, exc)
                return _failure(f"Arguments for '{name}' are not valid JSON: {exc}")

        try:
            validated = tool.input_model.model_validate(arguments if arguments is not None else {})
        except ValidationError as exc:
            logger.warning("Tool '%s' rejected invalid arguments: %s", name, exc)
            return _failure(f"Invalid arguments for '{name}': {exc}")

        logger.info("Running tool %s", name)
        try:
            return tool.handler(validated)
        except VersionControlError as exc:
            logger.warning("Tool '%s' failed: %s", name, exc)
            return _failure(str(exc))
