"""Tests for the Ollama client against a fake Ollama server."""

from __future__ import annotations

import aiohttp
import pytest

from ollama_bench.errors import OllamaServerError, UsageMetadataError
from ollama_bench.instrumentation import OllamaClient, parse_chat_response


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------


def test_parse_chat_response_normalizes_units():
    completion = parse_chat_response({
        "model": "gemma2:2b",
        "message": {"role": "assistant", "content": "Paris"},
        "total_duration": 1_250_000_000,
        "prompt_eval_count": 12,
        "eval_count": 8,
    })

    assert completion.text == "Paris"
    assert completion.elapsed_seconds == pytest.approx(1.25)
    assert completion.input_tokens == 12
    assert completion.output_tokens == 8
    assert completion.total_tokens == 20


def test_parse_chat_response_requires_total_duration():
    with pytest.raises(UsageMetadataError, match="total_duration"):
        parse_chat_response({
            "message": {"content": "hi"},
            "prompt_eval_count": 1,
            "eval_count": 1,
        })


def test_parse_chat_response_cached_prompt_counts_zero_input_tokens():
    # Ollama leaves out prompt_eval_count when the prompt is fully cached
    completion = parse_chat_response({
        "message": {"role": "assistant", "content": "4"},
        "total_duration": 1_000_000_000,
        "eval_count": 4,
    })

    assert completion.input_tokens == 0
    assert completion.output_tokens == 4
    assert completion.total_tokens == 4


def test_parse_chat_response_missing_eval_count_is_zero():
    completion = parse_chat_response({"total_duration": 500_000_000, "prompt_eval_count": 3})

    assert (completion.input_tokens, completion.output_tokens, completion.total_tokens) == (3, 0, 3)


@pytest.mark.parametrize(
    "field, value",
    [("eval_count", "n/a"), ("prompt_eval_count", [1]), ("total_duration", "soon")],
)
def test_parse_chat_response_rejects_malformed_usage(field, value):
    body = {"total_duration": 1_000_000_000, "prompt_eval_count": 1, "eval_count": 1}
    body[field] = value

    with pytest.raises(UsageMetadataError) as exc_info:
        parse_chat_response(body)

    assert isinstance(exc_info.value.__cause__, (TypeError, ValueError))


def test_parse_chat_response_rejects_zero_duration():
    with pytest.raises(UsageMetadataError):
        parse_chat_response({"total_duration": 0, "prompt_eval_count": 1, "eval_count": 1})


# ---------------------------------------------------------------------------
# HTTP round trips
# ---------------------------------------------------------------------------


async def test_complete_sends_non_streaming_chat_request(ollama_server):
    base_url, stub = ollama_server

    completion = await OllamaClient().complete("2+2=?", "test-model", base_url)

    assert stub.requests == [{
        "model": "test-model",
        "messages": [{"role": "user", "content": "2+2=?"}],
        "stream": False,
    }]
    assert completion.text == "4"
    assert completion.elapsed_seconds == 2.0
    assert completion.total_tokens == 6


async def test_complete_forwards_options_and_keep_alive(ollama_server):
    base_url, stub = ollama_server
    client = OllamaClient(options={"temperature": 0, "num_predict": 64}, keep_alive="10m")

    await client.complete("hi", "test-model", base_url)

    assert stub.requests[0]["options"] == {"temperature": 0, "num_predict": 64}
    assert stub.requests[0]["keep_alive"] == "10m"


async def test_complete_raises_on_server_error(ollama_server):
    base_url, stub = ollama_server
    stub.status = 404
    stub.chat_body = {"error": "model 'missing' not found"}

    with pytest.raises(OllamaServerError) as exc_info:
        await OllamaClient().complete("hi", "missing", base_url)

    assert exc_info.value.status == 404
    assert "not found" in exc_info.value.message


async def test_complete_raises_on_non_json_error(ollama_server):
    base_url, stub = ollama_server
    stub.status = 502
    stub.chat_body = "Bad Gateway"

    with pytest.raises(OllamaServerError) as exc_info:
        await OllamaClient().complete("hi", "test-model", base_url)

    assert exc_info.value.status == 502


async def test_complete_raises_on_missing_usage(ollama_server):
    base_url, stub = ollama_server
    stub.chat_body = {"message": {"content": "partial"}, "done": True}

    with pytest.raises(UsageMetadataError):
        await OllamaClient().complete("hi", "test-model", base_url)


async def test_complete_accepts_cached_prompt_response(ollama_server):
    base_url, stub = ollama_server
    stub.chat_body = {
        "model": "test-model",
        "message": {"role": "assistant", "content": "4"},
        "done": True,
        "total_duration": 2_000_000_000,
        "eval_count": 6,
    }

    completion = await OllamaClient().complete("2+2=?", "test-model", base_url)

    assert completion.input_tokens == 0
    assert completion.total_tokens == 6
    assert completion.elapsed_seconds == 2.0


async def test_complete_propagates_connection_errors():
    with pytest.raises(aiohttp.ClientError):
        await OllamaClient().complete("hi", "test-model", "http://127.0.0.1:1")


async def test_list_models(ollama_server):
    base_url, _ = ollama_server

    assert await OllamaClient().list_models(base_url) == ["gemma2:2b", "llama3.2:3b"]
