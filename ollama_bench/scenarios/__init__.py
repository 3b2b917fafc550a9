"""
Prompt sets and defaults for Ollama benchmarking.
"""

from .definitions import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_PROMPTS,
    DEFAULT_RESULTS_DIR,
    DEFAULT_RUN_COUNT,
    WARMUP_PROMPT,
    get_default_prompts,
    load_prompts,
    parse_prompts,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "DEFAULT_PROMPTS",
    "DEFAULT_RESULTS_DIR",
    "DEFAULT_RUN_COUNT",
    "WARMUP_PROMPT",
    "get_default_prompts",
    "load_prompts",
    "parse_prompts",
]
