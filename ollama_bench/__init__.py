"""
Ollama Bench - throughput benchmarking for local Ollama models.

Sends a fixed set of prompts to an Ollama server, records server-reported
timing and token counts per prompt, and writes a Markdown report.

Key modules:
- instrumentation: Ollama client and timing/token aggregation
- harness: Benchmark orchestration and reporting
- scenarios: Default prompts and server settings
"""

__version__ = "0.1.0"

from . import errors
from . import instrumentation
from . import harness
from . import scenarios

__all__ = [
    "errors",
    "instrumentation",
    "harness",
    "scenarios",
]
