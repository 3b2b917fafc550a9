"""
Instrumentation module for Ollama benchmarking.

Provides the Ollama client and timing/token aggregation utilities.
"""

from .timing import (
    ResultCollector,
    RunSummary,
    TestResult,
    nanoseconds_to_seconds,
)

from .ollama_client import (
    Completion,
    CompletionClient,
    OllamaClient,
    parse_chat_response,
)

__all__ = [
    # Timing
    "ResultCollector",
    "RunSummary",
    "TestResult",
    "nanoseconds_to_seconds",
    # Client
    "Completion",
    "CompletionClient",
    "OllamaClient",
    "parse_chat_response",
]
