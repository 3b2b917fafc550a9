"""
Default prompt set and server settings for Ollama benchmarking.

The prompts cover a broad mix of general-knowledge tasks (science,
history, math, ethics, economics) so that response lengths vary across
a run.
"""

from pathlib import Path
from typing import Union

from ..errors import EmptyPromptListError


DEFAULT_MODEL = "gemma2:2b"
DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_RUN_COUNT = 1
DEFAULT_RESULTS_DIR = Path("results")
WARMUP_PROMPT = "Hello"


DEFAULT_PROMPTS = [
    "Explain the principle of **conservation of energy** and provide examples of its application in everyday life.",
    "What were the causes and consequences of the **French Revolution**?",
    "Solve the following quadratic equation: (2x^2 - 4x - 6 = 0). Show all steps.",
    "Analyze the main theme and symbolism in the poem 'The Song of the Pirate' by **José de Espronceda**.",
    "Describe how **blockchain** works and mention some of its applications in the modern world.",
    "Explain the benefits and risks of **intermittent fasting**. Is it suitable for everyone?",
    "Compare and contrast **utilitarianism** and **deontology** in ethical decision-making.",
    "Describe the traditions and customs of a specific cultural celebration, such as **Day of the Dead** in Mexico.",
    "What is **attachment theory** and how does it influence the emotional development of children?",
    "List and describe the main **biomes of the world**, including their characteristics and examples.",
    "Explain the difference between **inflation** and **deflation**, and their effects on a country's economy.",
    "Analyze the impact of **Impressionism** on contemporary art. Name some of its key figures.",
    "Describe **quantum theory** and how it has changed our understanding of the universe.",
    "Explain the basic principles of **criminal law** and its implications in society.",
    "What is the function of **DNA** in living organisms? Describe its structure and role in inheritance.",
    "What are **black holes** and how do they form? Explain their significance in the universe.",
    "Analyze the concept of **social mobility** and its different types. What factors influence it?",
    "Describe the differences between a **language** and a **dialect**. Provide examples.",
    "What are the advantages and disadvantages of **online learning** compared to traditional education?",
    "Explain the phenomenon of **global warming** and its possible consequences for the planet.",
]


def get_default_prompts() -> list[str]:
    """Return a copy of the default prompt list."""
    return list(DEFAULT_PROMPTS)


def parse_prompts(text: str) -> list[str]:
    """Parse prompts from text: one per line, blank lines and # comments skipped."""
    prompts = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        prompts.append(line)
    return prompts


def load_prompts(path: Union[str, Path]) -> list[str]:
    """Load prompts from a text file.

    Raises EmptyPromptListError if the file holds no prompts.
    """
    path = Path(path)
    prompts = parse_prompts(path.read_text(encoding="utf-8"))
    if not prompts:
        raise EmptyPromptListError(f"No prompts found in {path}")
    return prompts
