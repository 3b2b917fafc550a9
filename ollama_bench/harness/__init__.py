"""
Benchmark harness for Ollama runs.

Provides orchestration and reporting capabilities.
"""

from .runner import (
    BenchmarkConfig,
    BenchmarkRunner,
    RunResult,
)

from .reporter import (
    ConsoleReporter,
    MarkdownReporter,
    report_path,
    report_timestamp,
    reserve_report_path,
)

__all__ = [
    # Runner
    "BenchmarkConfig",
    "BenchmarkRunner",
    "RunResult",
    # Reporter
    "ConsoleReporter",
    "MarkdownReporter",
    "report_path",
    "report_timestamp",
    "reserve_report_path",
]
