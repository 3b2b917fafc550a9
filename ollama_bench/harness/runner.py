"""
Benchmark orchestrator for Ollama runs.

A run sends one warm-up prompt, then every configured prompt in order,
aggregates the measurements and appends a Markdown report to the results
directory.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..errors import ConfigurationError, EmptyPromptListError
from ..instrumentation.ollama_client import CompletionClient, OllamaClient
from ..instrumentation.timing import ResultCollector, RunSummary, TestResult
from ..scenarios.definitions import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_RESULTS_DIR,
    DEFAULT_RUN_COUNT,
    WARMUP_PROMPT,
    get_default_prompts,
)
from .reporter import MarkdownReporter, reserve_report_path


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark."""

    prompts: list[str] = field(default_factory=get_default_prompts)
    model: str = DEFAULT_MODEL
    server_address: str = DEFAULT_BASE_URL
    run_count: int = DEFAULT_RUN_COUNT
    warmup_prompt: str = WARMUP_PROMPT
    results_dir: Path = DEFAULT_RESULTS_DIR

    # Forwarded to the Ollama client
    options: dict[str, Any] = field(default_factory=dict)
    keep_alive: Optional[str] = None

    def __post_init__(self):
        self.prompts = list(self.prompts)
        self.results_dir = Path(self.results_dir)

        if not self.prompts:
            raise EmptyPromptListError()
        if self.run_count < 1:
            raise ConfigurationError(f"run_count must be at least 1, got {self.run_count}")
        if not self.model:
            raise ConfigurationError("A model name is required")
        if not self.server_address:
            raise ConfigurationError("A server address is required")

    @classmethod
    def from_env(cls, **overrides) -> "BenchmarkConfig":
        """Build a config from environment variables.

        Reads OLLAMA_BENCH_MODEL, OLLAMA_HOST, OLLAMA_BENCH_RUNS and
        OLLAMA_BENCH_RESULTS_DIR. Keyword overrides set to None are ignored.
        """
        values: dict[str, Any] = {
            "model": os.environ.get("OLLAMA_BENCH_MODEL", DEFAULT_MODEL),
            "server_address": os.environ.get("OLLAMA_HOST", DEFAULT_BASE_URL),
            "results_dir": Path(os.environ.get("OLLAMA_BENCH_RESULTS_DIR", DEFAULT_RESULTS_DIR)),
        }

        runs = os.environ.get("OLLAMA_BENCH_RUNS")
        if runs is not None:
            try:
                values["run_count"] = int(runs)
            except ValueError as e:
                raise ConfigurationError(f"OLLAMA_BENCH_RUNS must be an integer, got {runs!r}") from e

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class RunResult:
    """Results from one benchmark run."""

    config: BenchmarkConfig
    results: list[TestResult]
    summary: RunSummary
    report_path: Path
    start_time: datetime
    end_time: datetime

    @property
    def duration_seconds(self) -> float:
        """Wall-clock duration of the run, warm-up included."""
        return (self.end_time - self.start_time).total_seconds()


class BenchmarkRunner:
    """Orchestrates benchmark execution against an Ollama server."""

    def __init__(
        self,
        config: BenchmarkConfig,
        client: Optional[CompletionClient] = None,
        reporter: Optional[MarkdownReporter] = None,
        verbose: bool = True,
    ):
        self.config = config
        self.client = client or OllamaClient(
            options=config.options,
            keep_alive=config.keep_alive,
        )
        self.reporter = reporter or MarkdownReporter()
        self.verbose = verbose

    async def probe(self, prompt: str) -> TestResult:
        """Send a single prompt and measure it."""
        completion = await self.client.complete(
            prompt,
            self.config.model,
            self.config.server_address,
        )

        return TestResult(
            query=prompt,
            response=completion.text,
            model=self.config.model,
            elapsed_time=completion.elapsed_seconds,
            tokens_per_second=completion.total_tokens / completion.elapsed_seconds,
            input_tokens=completion.input_tokens,
            output_tokens=completion.output_tokens,
            total_tokens=completion.total_tokens,
        )

    async def warm_up(self) -> None:
        """Send the warm-up prompt so model loading is not measured."""
        if self.verbose:
            print("  Warming up...", end="", flush=True)
        await self.probe(self.config.warmup_prompt)
        if self.verbose:
            print(" done")

    async def run(self) -> RunResult:
        """Run every prompt once and write the report.

        Any failure aborts the run. Report sections already appended stay
        on disk.
        """
        config = self.config
        collector = ResultCollector()
        start_time = datetime.now(timezone.utc)
        total = len(config.prompts)

        if self.verbose:
            print(f"\nRunning benchmark: {config.model}")
            print(f"  Server: {config.server_address}")
            print(f"  Prompts: {total}")

        await self.warm_up()

        for i, prompt in enumerate(config.prompts, start=1):
            if self.verbose:
                print(f"  Test {i}/{total}...", end="", flush=True)
            result = await self.probe(prompt)
            collector.add(result)
            if self.verbose:
                print(f" {result.elapsed_time:.2f}s ({result.tokens_per_second:.1f} tokens/s)")

        summary = collector.summary()

        path = reserve_report_path(config.results_dir, start_time)
        self.reporter.write(path, config.model, config.prompts, summary, collector.results)
        end_time = datetime.now(timezone.utc)

        if self.verbose:
            print(f"  Results saved to: {path}")

        return RunResult(
            config=config,
            results=collector.results,
            summary=summary,
            report_path=path,
            start_time=start_time,
            end_time=end_time,
        )

    async def run_all(self) -> list[RunResult]:
        """Run the benchmark ``run_count`` times, one run after another."""
        results = []

        for i in range(self.config.run_count):
            if self.verbose:
                print(f"\nStarting benchmark run {i + 1}/{self.config.run_count}")
            results.append(await self.run())

        return results
