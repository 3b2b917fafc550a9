"""
Timing and token metrics for Ollama benchmarking.

Provides the per-request result record and aggregation across a run:
- Elapsed time (from server-reported durations)
- Token counts (prompt, response, total)
- Token throughput (tokens/sec)
"""

from dataclasses import dataclass, field


NANOSECONDS_PER_SECOND = 1e9


def nanoseconds_to_seconds(nanoseconds: float) -> float:
    """Convert a server-reported duration in nanoseconds to seconds."""
    return float(nanoseconds) / NANOSECONDS_PER_SECOND


@dataclass(frozen=True)
class TestResult:
    """Measurements for a single prompt."""

    __test__ = False  # not a pytest test class

    query: str
    response: str
    model: str
    elapsed_time: float
    tokens_per_second: float
    input_tokens: int
    output_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class RunSummary:
    """Totals and averages over the results of one run."""

    count: int
    total_time: float
    total_input_tokens: int
    total_output_tokens: int
    total_tokens: int
    average_time: float
    average_input_tokens: float
    average_output_tokens: float
    average_total_tokens: float
    # Mean of the per-test rates, not total_tokens / total_time
    average_tokens_per_second: float


@dataclass
class ResultCollector:
    """Collects test results for one run and aggregates them."""

    results: list[TestResult] = field(default_factory=list)

    def add(self, result: TestResult) -> None:
        """Add a test result."""
        self.results.append(result)

    @property
    def count(self) -> int:
        """Number of collected results."""
        return len(self.results)

    def summary(self) -> RunSummary:
        """Calculate aggregate statistics.

        Raises ValueError when nothing has been collected, since averages
        over zero results are undefined.
        """
        if not self.results:
            raise ValueError("Cannot summarize a run with no results")

        count = self.count
        total_time = sum(r.elapsed_time for r in self.results)
        total_input = sum(r.input_tokens for r in self.results)
        total_output = sum(r.output_tokens for r in self.results)
        total_tokens = sum(r.total_tokens for r in self.results)

        return RunSummary(
            count=count,
            total_time=total_time,
            total_input_tokens=total_input,
            total_output_tokens=total_output,
            total_tokens=total_tokens,
            average_time=total_time / count,
            average_input_tokens=total_input / count,
            average_output_tokens=total_output / count,
            average_total_tokens=total_tokens / count,
            average_tokens_per_second=(
                sum(r.tokens_per_second for r in self.results) / count
            ),
        )
