"""Shared fixtures for ollama-bench tests."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from ollama_bench.harness import BenchmarkConfig
from ollama_bench.instrumentation import Completion


class FakeClient:
    """In-memory CompletionClient.

    Returns a scripted Completion per prompt (or ``default``) and records
    every call in order. Prompts listed in ``failures`` raise instead.
    """

    def __init__(
        self,
        responses: Optional[dict[str, Completion]] = None,
        default: Optional[Completion] = None,
        failures: Optional[dict[str, Exception]] = None,
    ):
        self.responses = responses or {}
        self.default = default or Completion(
            text="ok",
            elapsed_seconds=1.0,
            input_tokens=2,
            output_tokens=3,
            total_tokens=5,
        )
        self.failures = failures or {}
        self.calls: list[tuple[str, str, str]] = []

    async def complete(self, prompt: str, model: str, server_address: str) -> Completion:
        self.calls.append((prompt, model, server_address))
        # Yield so concurrently running benchmarks interleave
        await asyncio.sleep(0)
        if prompt in self.failures:
            raise self.failures[prompt]
        return self.responses.get(prompt, self.default)

    @property
    def prompts(self) -> list[str]:
        return [call[0] for call in self.calls]


def make_completion(text: str, seconds: float, input_tokens: int, output_tokens: int) -> Completion:
    return Completion(
        text=text,
        elapsed_seconds=seconds,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=input_tokens + output_tokens,
    )


@pytest.fixture
def results_dir(tmp_path: Path) -> Path:
    d = tmp_path / "results"
    d.mkdir()
    return d


@pytest.fixture
def config(results_dir: Path) -> BenchmarkConfig:
    return BenchmarkConfig(
        prompts=["first prompt", "second prompt", "third prompt"],
        model="test-model",
        server_address="http://ollama.test:11434",
        results_dir=results_dir,
    )


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


class OllamaStub:
    """Mutable state behind the fake Ollama server."""

    def __init__(self):
        self.requests: list[dict] = []
        self.status = 200
        self.chat_body: object = {
            "model": "test-model",
            "message": {"role": "assistant", "content": "4"},
            "done": True,
            "total_duration": 2_000_000_000,
            "prompt_eval_count": 5,
            "eval_count": 1,
        }
        self.models = ["gemma2:2b", "llama3.2:3b"]


@pytest.fixture
async def ollama_server():
    """Real aiohttp server speaking the subset of the Ollama API we use.

    Yields (base_url, stub); mutate the stub to change responses.
    """
    stub = OllamaStub()

    async def chat(request: web.Request) -> web.Response:
        stub.requests.append(await request.json())
        if isinstance(stub.chat_body, str):
            return web.Response(text=stub.chat_body, status=stub.status)
        return web.json_response(stub.chat_body, status=stub.status)

    async def tags(request: web.Request) -> web.Response:
        return web.json_response({"models": [{"name": name} for name in stub.models]})

    app = web.Application()
    app.router.add_post("/api/chat", chat)
    app.router.add_get("/api/tags", tags)

    server = TestServer(app)
    await server.start_server()
    try:
        yield str(server.make_url("/")), stub
    finally:
        await server.close()
