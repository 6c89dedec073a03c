"""
Tool-calling review loop.

The :class:`ReviewAgent` holds a single conversation with the model.
Each step streams one response: text fragments are yielded to the caller
as they arrive, and tool calls announced by the model are collected.
When a step ends with tool calls, they are dispatched one at a time
through the :class:`ToolRegistry` and their results are appended to the
conversation before the next step. The loop ends when the model answers
without calling a tool or after ``max_steps`` steps.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Optional

from vc_review_helper.agent.prompts import SYSTEM_PROMPT
from vc_review_helper.llm.ollama_client import OllamaClient, ToolCall
from vc_review_helper.tools.registry import ToolRegistry


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


MAX_STEPS = 10


class ReviewAgent:
    """Drive a tool-calling conversation with the model."""

    def __init__(
        self,
        llm_client: OllamaClient,
        registry: ToolRegistry,
        system_prompt: str = SYSTEM_PROMPT,
        max_steps: int = MAX_STEPS,
    ) -> None:
        if max_steps < 1:
            raise ValueError("max_steps must be at least 1")
        self.llm_client = llm_client
        self.registry = registry
        self.system_prompt = system_prompt
        self.max_steps = max_steps
        self.messages: List[Dict[str, Any]] = []
        self.steps_taken = 0

    def run(self, prompt: str) -> Iterator[str]:
        """Run the review for ``prompt``, yielding model text as it streams.

        The generator is lazy and can only be consumed once. Exceptions
        from the LLM client (:class:`LLMError`) propagate to the consumer.
        """
        self.messages = [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": prompt},
        ]
        self.steps_taken = 0
        tools = self.registry.schemas()

        while self.steps_taken < self.max_steps:
            self.steps_taken += 1
            logger.debug("Starting step %d/%d", self.steps_taken, self.max_steps)

            text_parts: List[str] = []
            tool_calls: List[ToolCall] = []
            for chunk in self.llm_client.chat_stream(self.messages, tools=tools):
                if chunk.content:
                    text_parts.append(chunk.content)
                    yield chunk.content
                tool_calls.extend(chunk.tool_calls)

            assistant: Dict[str, Any] = {"role": "assistant", "content": "".join(text_parts)}
            if tool_calls:
                assistant["tool_calls"] = [call.to_message() for call in tool_calls]
            self.messages.append(assistant)

            if not tool_calls:
                logger.debug("Model finished after %d step(s)", self.steps_taken)
                return

            for call in tool_calls:
                self.messages.append(self._invoke(call))

        logger.warning("Stopped after reaching the limit of %d step(s)", self.max_steps)

    def _invoke(self, call: ToolCall) -> Dict[str, Any]:
        logger.info("Model called tool %s", call.name)
        result = self.registry.dispatch(call.name, call.arguments)
        message: Dict[str, Any] = {
            "role": "tool",
            "tool_name": call.name,
            "content": _serialize(result),
        }
        if call.id is not None:
            message["tool_call_id"] = call.id
        return message


def _serialize(result: Optional[Any]) -> str:
    return json.dumps(result, ensure_ascii=False, default=str)
