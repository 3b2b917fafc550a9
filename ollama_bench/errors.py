"""Exceptions raised by the benchmark harness."""


class BenchmarkError(Exception):
    """Base class for benchmark failures."""


class ConfigurationError(BenchmarkError):
    """Invalid benchmark configuration."""


class EmptyPromptListError(ConfigurationError):
    """Raised when a benchmark is configured without any prompts."""

    def __init__(self, message: str = "At least one prompt is required"):
        super().__init__(message)


class OllamaServerError(BenchmarkError):
    """The Ollama server answered with an error."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"Ollama server error ({status}): {message}")


class UsageMetadataError(BenchmarkError):
    """A response is missing the timing or token counts needed for scoring."""
