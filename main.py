#!/usr/bin/env python3
"""
Ollama Bench - Main entry point for running benchmarks.

Usage:
    python main.py [command] [options]

Commands:
    run       - Benchmark a model and write a Markdown report (default)
    models    - List the models available on the server
    prompts   - Print the prompts that would be sent
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from ollama_bench.harness import BenchmarkConfig, BenchmarkRunner, ConsoleReporter
from ollama_bench.instrumentation import OllamaClient
from ollama_bench.scenarios import load_prompts

# Load environment variables from .env file
load_dotenv()


def build_config(args) -> BenchmarkConfig:
    """Build a benchmark config from CLI args layered over the environment."""
    options = {}
    if args.temperature is not None:
        options["temperature"] = args.temperature
    if args.num_predict is not None:
        options["num_predict"] = args.num_predict

    return BenchmarkConfig.from_env(
        prompts=load_prompts(args.prompts_file) if args.prompts_file else None,
        model=args.model,
        server_address=args.base_url,
        run_count=args.runs,
        results_dir=args.output_dir,
        warmup_prompt=args.warmup_prompt,
        options=options or None,
        keep_alive=args.keep_alive,
    )


async def run_benchmarks(args):
    """Run the benchmark and print a summary of each run."""
    config = build_config(args)
    config.results_dir.mkdir(parents=True, exist_ok=True)

    reporter = ConsoleReporter(use_color=not args.no_color)
    runner = BenchmarkRunner(config, verbose=not args.quiet)

    print("=" * 60)
    print("OLLAMA BENCHMARK")
    print("=" * 60)
    print(f"Model: {config.model}")
    print(f"Server: {config.server_address}")
    print(f"Runs: {config.run_count}")

    results = await runner.run_all()

    for result in results:
        print(reporter.single_result(result))
    if len(results) > 1:
        print(reporter.comparison_table(results))


async def list_models(args):
    """List models available on the server."""
    config = build_config(args)
    models = await OllamaClient().list_models(config.server_address)

    if not models:
        print(f"No models found on {config.server_address}")
        return
    for name in models:
        print(name)


async def show_prompts(args):
    """Print the configured prompts."""
    config = build_config(args)
    for i, prompt in enumerate(config.prompts, start=1):
        print(f"{i}. {prompt}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Ollama Bench - Benchmark local Ollama models",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py
    python main.py run --model llama3.2:3b --runs 3
    python main.py run --prompts-file prompts.txt --temperature 0
    python main.py models --base-url http://gpu-box:11434
        """,
    )

    parser.add_argument(
        "command",
        nargs="?",
        default="run",
        choices=["run", "models", "prompts"],
        help="Action to perform (default: run)",
    )
    parser.add_argument(
        "--model",
        help="Model to benchmark (default: $OLLAMA_BENCH_MODEL or gemma2:2b)",
    )
    parser.add_argument(
        "--base-url",
        help="Ollama server URL (default: $OLLAMA_HOST or http://localhost:11434)",
    )
    parser.add_argument(
        "--runs",
        type=int,
        help="Number of benchmark runs (default: $OLLAMA_BENCH_RUNS or 1)",
    )
    parser.add_argument(
        "--prompts-file",
        type=Path,
        help="File with one prompt per line (default: built-in prompt set)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory to save reports (default: $OLLAMA_BENCH_RESULTS_DIR or results/)",
    )
    parser.add_argument(
        "--warmup-prompt",
        help="Prompt used for the discarded warm-up request (default: Hello)",
    )
    parser.add_argument(
        "--temperature",
        type=float,
        help="Sampling temperature passed to the model",
    )
    parser.add_argument(
        "--num-predict",
        type=int,
        help="Maximum number of tokens to generate per prompt",
    )
    parser.add_argument(
        "--keep-alive",
        help="How long Ollama keeps the model loaded after each request (e.g. 5m)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the final summary",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    commands = {
        "run": run_benchmarks,
        "models": list_models,
        "prompts": show_prompts,
    }

    try:
        asyncio.run(commands[args.command](args))
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
