"""
Report generation for benchmark runs.

Provides the Markdown report written to disk and CLI summaries.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Sequence, Union

from ..instrumentation.timing import RunSummary, TestResult

if TYPE_CHECKING:
    from .runner import RunResult


REPORT_PREFIX = "benchmark-"
REPORT_SUFFIX = ".md"


def report_timestamp(moment: datetime) -> str:
    """Filesystem-safe ISO-8601 timestamp, e.g. 2024-05-01T13-45-10-123.

    Aware datetimes are converted to UTC first.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment.isoformat(timespec="milliseconds").replace(":", "-").replace(".", "-")


def report_path(results_dir: Union[str, Path], moment: datetime) -> Path:
    """Path of the report for a run started at ``moment``."""
    return Path(results_dir) / f"{REPORT_PREFIX}{report_timestamp(moment)}{REPORT_SUFFIX}"


def reserve_report_path(results_dir: Union[str, Path], moment: datetime) -> Path:
    """Create an empty report file and return its path.

    The file is created exclusively. If a report with the same timestamp
    already exists the timestamp is advanced one millisecond at a time, so
    every run gets its own file. The results directory must exist.
    """
    while True:
        path = report_path(results_dir, moment)
        try:
            with open(path, "x", encoding="utf-8"):
                return path
        except FileExistsError:
            moment += timedelta(milliseconds=1)


def format_number(value: float) -> str:
    """Format a token average: whole numbers without a decimal part."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _cell(text: str) -> str:
    """Escape text for use inside a Markdown table cell."""
    return " ".join(str(text).split("\n")).replace("|", "\\|")


def _metric_table(rows: Sequence[tuple[str, str]]) -> list[str]:
    lines = ["| **Metric** | **Value** |", "|---|---|"]
    for label, value in rows:
        lines.append(f"| **{label}** | {value} |")
    return lines


class MarkdownReporter:
    """Renders a run as a Markdown report and appends it to disk."""

    title = "Ollama Benchmark"

    def render_summary(
        self,
        model: str,
        prompts: Sequence[str],
        summary: RunSummary,
    ) -> str:
        """Summary section: run metrics followed by the prompt list."""
        lines = [f"# {self.title}", "", "## Summary", ""]
        lines.extend(_metric_table([
            ("Model", _cell(model)),
            ("Total Tests", str(summary.count)),
            ("Total Time", f"{summary.total_time:.2f}s"),
            ("Total Prompt Tokens", str(summary.total_input_tokens)),
            ("Total Response Tokens", str(summary.total_output_tokens)),
            ("Total Tokens", str(summary.total_tokens)),
            ("Average Time", f"{summary.average_time:.2f}s"),
            ("Average Prompt Tokens", format_number(summary.average_input_tokens)),
            ("Average Response Tokens", format_number(summary.average_output_tokens)),
            ("Average Tokens", format_number(summary.average_total_tokens)),
            ("Score", f"{summary.average_tokens_per_second:.2f} tokens/s"),
        ]))

        lines.extend(["", "| **Test Prompts** |", "|---|"])
        for i, prompt in enumerate(prompts, start=1):
            lines.append(f"| {i}. {_cell(prompt)} |")

        return "\n".join(lines) + "\n\n"

    def render_test(self, index: int, result: TestResult) -> str:
        """Detail section for one test, numbered from 1."""
        lines = [f"## Test {index}", ""]
        lines.extend(_metric_table([
            ("Time", f"{result.elapsed_time:.2f}s"),
            ("Prompt Tokens", str(result.input_tokens)),
            ("Response Tokens", str(result.output_tokens)),
            ("Tokens Total", str(result.total_tokens)),
            ("Score", f"{result.tokens_per_second:.2f} tokens/s"),
        ]))
        lines.extend([
            "",
            "### **Prompt**",
            result.query,
            "",
            "### **Response**",
            result.response,
        ])
        return "\n".join(lines) + "\n\n"

    def write(
        self,
        path: Path,
        model: str,
        prompts: Sequence[str],
        summary: RunSummary,
        results: Sequence[TestResult],
    ) -> Path:
        """Append the summary, then each test section in order, to ``path``."""
        with open(path, "a", encoding="utf-8") as f:
            f.write(self.render_summary(model, prompts, summary))

        for i, result in enumerate(results, start=1):
            with open(path, "a", encoding="utf-8") as f:
                f.write(self.render_test(i, result))

        return path


class ConsoleReporter:
    """Generates console/CLI reports."""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color if enabled."""
        if not self.use_color:
            return text

        colors = {
            "green": "\033[92m",
            "red": "\033[91m",
            "yellow": "\033[93m",
            "blue": "\033[94m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def format_duration(self, seconds: float) -> str:
        """Format duration for display."""
        if seconds < 1:
            return f"{seconds * 1000:.1f}ms"
        return f"{seconds:.2f}s"

    def single_result(self, result: "RunResult") -> str:
        """Generate report for a single benchmark run."""
        summary = result.summary
        lines = []
        lines.append(self._color(f"\n{'=' * 60}", "blue"))
        lines.append(self._color(f"Benchmark: {result.config.model}", "bold"))
        lines.append(self._color(f"{'=' * 60}", "blue"))

        lines.append(f"\nConfiguration:")
        lines.append(f"  Server: {result.config.server_address}")
        lines.append(f"  Tests: {summary.count}")

        lines.append(f"\nTime:")
        lines.append(f"  {'Total:':<10} {self.format_duration(summary.total_time)}")
        lines.append(f"  {'Average:':<10} {self.format_duration(summary.average_time)}")

        lines.append(f"\nTokens:")
        lines.append(f"  {'Prompt:':<10} {summary.total_input_tokens} "
                     f"(avg {format_number(summary.average_input_tokens)})")
        lines.append(f"  {'Response:':<10} {summary.total_output_tokens} "
                     f"(avg {format_number(summary.average_output_tokens)})")
        lines.append(f"  {'Total:':<10} {summary.total_tokens} "
                     f"(avg {format_number(summary.average_total_tokens)})")

        lines.append(f"\nThroughput:")
        lines.append("  Score: " + self._color(
            f"{summary.average_tokens_per_second:.2f} tokens/s", "green"))

        lines.append(f"\nReport: {result.report_path}")
        lines.append(f"Wall time: {result.duration_seconds:.1f}s")

        return "\n".join(lines)

    def comparison_table(self, results: Sequence["RunResult"]) -> str:
        """Generate a table comparing repeated runs."""
        if not results:
            return "No results to display"

        headers = ["Run", "Tests", "Total", "Average", "Tokens", "Tokens/s"]
        col_widths = [6, 8, 12, 12, 10, 10]

        lines = []
        lines.append(self._color(f"\n{'=' * sum(col_widths)}", "blue"))
        lines.append(self._color("Run Comparison", "bold"))
        lines.append(self._color(f"{'=' * sum(col_widths)}", "blue"))

        header_row = ""
        for i, header in enumerate(headers):
            header_row += f"{header:<{col_widths[i]}}"
        lines.append(self._color(header_row, "bold"))
        lines.append("-" * sum(col_widths))

        for run_number, result in enumerate(results, start=1):
            summary = result.summary
            row = [
                f"{run_number:<{col_widths[0]}}",
                f"{summary.count:<{col_widths[1]}}",
                f"{self.format_duration(summary.total_time):<{col_widths[2]}}",
                f"{self.format_duration(summary.average_time):<{col_widths[3]}}",
                f"{summary.total_tokens:<{col_widths[4]}}",
                f"{summary.average_tokens_per_second:<{col_widths[5]}.2f}",
            ]
            lines.append("".join(row))

        return "\n".join(lines)
