"""
Client for interacting with an Ollama LLM server.

This client wraps streaming requests to the Ollama ``/api/chat``
endpoint, which accepts a conversation plus a list of function tools and
answers with newline-delimited JSON objects. Each object is turned into
a :class:`ChatChunk` carrying a text fragment and/or the tool calls the
model requested. On error conditions (connection failures, HTTP errors,
malformed stream lines), a :class:`LLMError` is raised.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import requests


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class LLMError(Exception):
    """Raised when communication with the LLM server fails."""

    pass


@dataclass
class ToolCall:
    """A function call requested by the model."""

    name: str
    arguments: Any
    id: Optional[str] = None

    def to_message(self) -> Dict[str, Any]:
        """Return the call in the shape Ollama expects in an assistant message."""
        call: Dict[str, Any] = {"function": {"name": self.name, "arguments": self.arguments}}
        if self.id is not None:
            call["id"] = self.id
        return call


@dataclass
class ChatChunk:
    """One line of a streamed chat response."""

    content: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)
    done: bool = False


def _parse_tool_calls(raw_calls: Any) -> List[ToolCall]:
    calls: List[ToolCall] = []
    for raw in raw_calls or []:
        function = raw.get("function") if isinstance(raw, dict) else None
        if not isinstance(function, dict) or not function.get("name"):
            raise LLMError(f"Malformed tool call in LLM response: {raw!r}")
        calls.append(
            ToolCall(
                name=function["name"],
                arguments=function.get("arguments", {}),
                id=raw.get("id"),
            )
        )
    return calls


@dataclass
class OllamaClient:
    """Client for interacting with an Ollama server.

    Parameters
    ----------
    base_url : str
        Base URL of the Ollama server, e.g. ``"http://localhost"``.
    port : int
        Port number of the Ollama server, e.g. ``11434``.
    model : str
        Name of the model to use, e.g. ``"llama3.1"``. It must support
        tool calling.
    request_timeout : float, optional
        Timeout in seconds for connecting and for each read of the
        stream. Defaults to 120 seconds.
    max_tokens : int, optional
        Maximum number of tokens per response. If provided, passed via
        the ``options`` payload.
    api_key : str, optional
        Bearer token sent in the ``Authorization`` header, needed by
        hosted Ollama endpoints.
    """

    base_url: str
    port: int
    model: str
    request_timeout: float = 120.0
    max_tokens: Optional[int] = None
    api_key: Optional[str] = None

    def _endpoint(self) -> str:
        return f"{self.base_url}:{self.port}/api/chat"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def chat_stream(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> Iterator[ChatChunk]:
        """Stream a chat completion from the model.

        Parameters
        ----------
        messages : List[Dict[str, Any]]
            The conversation so far, as Ollama chat messages.
        tools : List[Dict[str, Any]], optional
            Function tool definitions the model may call.

        Yields
        ------
        ChatChunk
            Chunks in the order the server sends them. The last one has
            ``done`` set.

        Raises
        ------
        LLMError
            If the request fails, the server returns an error or a line
            of the stream cannot be decoded.
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "stream": True,
        }
        if tools:
            payload["tools"] = tools
        options: Dict[str, Any] = {}
        if self.max_tokens is not None:
            options["num_predict"] = self.max_tokens
        if options:
            payload["options"] = options

        url = self._endpoint()
        logger.debug("Sending chat request to LLM at %s with %d message(s)", url, len(messages))
        try:
            response = requests.post(
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.request_timeout,
                stream=True,
            )
        except requests.RequestException as exc:
            logger.error("Failed to connect to LLM: %s", exc)
            raise LLMError(str(exc)) from exc

        try:
            if response.status_code != 200:
                logger.error(
                    "LLM returned non-200 status %s: %s", response.status_code, response.text
                )
                raise LLMError(f"LLM returned status {response.status_code}: {response.text}")
            yield from self._iter_chunks(response)
        finally:
            response.close()

    def _iter_chunks(self, response: requests.Response) -> Iterator[ChatChunk]:
        try:
            for line in response.iter_lines(decode_unicode=True):
                if not line:
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError as exc:
                    logger.error("Failed to parse LLM stream line %r: %s", line, exc)
                    raise LLMError("Failed to parse LLM response") from exc
                if not isinstance(data, dict):
                    logger.error("Unexpected LLM stream line: %r", line)
                    raise LLMError("Failed to parse LLM response: expected a JSON object")
                if "error" in data:
                    raise LLMError(f"LLM reported an error: {data['error']}")
                message = data.get("message") or {}
                if not isinstance(message, dict):
                    raise LLMError(f"Malformed message in LLM response: {message!r}")
                yield ChatChunk(
                    content=message.get("content", "") or "",
                    tool_calls=_parse_tool_calls(message.get("tool_calls")),
                    done=bool(data.get("done", False)),
                )
        except requests.RequestException as exc:
            logger.error("LLM stream interrupted: %s", exc)
            raise LLMError(str(exc)) from exc
