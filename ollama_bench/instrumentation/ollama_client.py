"""
Ollama client for benchmark requests.

The harness only depends on the narrow CompletionClient interface:

    completion = await client.complete(prompt, model, server_address)

OllamaClient implements it against Ollama's REST API using aiohttp. Timing
comes from the server-reported ``total_duration`` (nanoseconds) rather than
a local clock, so network overhead is excluded from the measurement.

Usage:
    client = OllamaClient()
    completion = await client.complete(
        "What is the capital of France?",
        model="gemma2:2b",
        server_address="http://localhost:11434",
    )
    print(completion.text)
    print(f"Tokens used: {completion.total_tokens}")
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol

import aiohttp

from ..errors import OllamaServerError, UsageMetadataError
from .timing import nanoseconds_to_seconds


@dataclass(frozen=True)
class Completion:
    """Normalized completion returned by a CompletionClient."""

    text: str
    elapsed_seconds: float
    input_tokens: int
    output_tokens: int
    total_tokens: int


class CompletionClient(Protocol):
    """Anything that can run a single non-streaming completion."""

    async def complete(
        self,
        prompt: str,
        model: str,
        server_address: str,
    ) -> Completion:
        ...


def _endpoint(server_address: str, path: str) -> str:
    return f"{server_address.rstrip('/')}{path}"


def parse_chat_response(data: dict) -> Completion:
    """Build a Completion from an Ollama /api/chat response body.

    Only ``total_duration`` is required. Ollama omits ``prompt_eval_count``
    when the whole prompt is served from its cache, so missing token counts
    are read as 0.
    """
    if data.get("total_duration") is None:
        raise UsageMetadataError("Response is missing usage metadata: total_duration")

    try:
        elapsed_seconds = nanoseconds_to_seconds(data["total_duration"])
        input_tokens = int(data.get("prompt_eval_count") or 0)
        output_tokens = int(data.get("eval_count") or 0)
    except (TypeError, ValueError) as e:
        raise UsageMetadataError(f"Malformed usage metadata: {e}") from e

    if elapsed_seconds <= 0:
        raise UsageMetadataError(
            f"Invalid total_duration: {data['total_duration']}"
        )

    message = data.get("message") or {}

    return Completion(
        text=str(message.get("content", "")),
        elapsed_seconds=elapsed_seconds,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=input_tokens + output_tokens,
    )


class OllamaClient:
    """
    CompletionClient backed by the Ollama REST API.

    A new aiohttp session is opened per request and the session's default
    timeout applies. Errors are never retried: connection failures surface
    as aiohttp.ClientError, server-side errors as OllamaServerError and
    incomplete responses as UsageMetadataError.
    """

    def __init__(
        self,
        options: Optional[dict[str, Any]] = None,
        keep_alive: Optional[str] = None,
    ):
        """
        Initialize the Ollama client.

        Args:
            options: Model options forwarded with each request
                (e.g. {"temperature": 0, "num_predict": 256})
            keep_alive: How long the server keeps the model loaded
                after a request (e.g. "5m")
        """
        self.options = options or {}
        self.keep_alive = keep_alive

    def _chat_payload(self, prompt: str, model: str) -> dict:
        payload: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": False,
        }
        if self.options:
            payload["options"] = self.options
        if self.keep_alive is not None:
            payload["keep_alive"] = self.keep_alive
        return payload

    async def complete(
        self,
        prompt: str,
        model: str,
        server_address: str,
    ) -> Completion:
        """
        Run one non-streaming chat completion.

        Args:
            prompt: The user prompt
            model: Ollama model name (e.g. "gemma2:2b")
            server_address: Base URL of the Ollama server

        Returns:
            Completion with response text, elapsed seconds and token counts
        """
        async with aiohttp.ClientSession() as session:
            async with session.post(
                _endpoint(server_address, "/api/chat"),
                json=self._chat_payload(prompt, model),
            ) as resp:
                data = await self._read_json(resp)

        return parse_chat_response(data)

    async def list_models(self, server_address: str) -> list[str]:
        """Return the names of the models available on the server."""
        async with aiohttp.ClientSession() as session:
            async with session.get(_endpoint(server_address, "/api/tags")) as resp:
                data = await self._read_json(resp)

        return [m["name"] for m in data.get("models", [])]

    @staticmethod
    async def _read_json(resp: aiohttp.ClientResponse) -> dict:
        try:
            data = await resp.json(content_type=None)
        except ValueError:
            data = None

        if isinstance(data, dict) and "error" in data:
            raise OllamaServerError(resp.status, str(data["error"]))
        if resp.status >= 400:
            raise OllamaServerError(resp.status, resp.reason or "request failed")
        if not isinstance(data, dict):
            raise OllamaServerError(resp.status, "Response body is not a JSON object")

        return data
