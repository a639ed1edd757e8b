"""CLI entry point for toka.

Usage:
    python -m toka request <model> <prompt>     Run a request (simulated client)
    python -m toka estimate <prompt>            Show tokens and cost per model
    python -m toka select <prompt> --budget B   Show the model the budget allows
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from toka.cache.memoryCache import MemoryCache
from toka.config import createSampleConfig, loadConfig
from toka.core.orchestrator import RequestOrchestrator
from toka.cost.catalog import DEFAULT_MODEL_PRICES
from toka.cost.estimator import CostEstimator
from toka.cost.modelSelector import getModelWithinBudget
from toka.exceptions import TokaError
from toka.llm.client import SimulatedClient
from toka.logging import configureLogging


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="toka",
        description="Toka - cost-aware LLM request orchestration",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # request command
    requestParser = subparsers.add_parser("request", help="Run a request through the simulated client")
    requestParser.add_argument("model", help="Requested model")
    requestParser.add_argument("prompt", help="Prompt text")
    requestParser.add_argument(
        "--option",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Request option (repeatable); VALUE is parsed as JSON when possible",
    )
    requestParser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON config file (TOKA_ environment variables take precedence)",
    )
    requestParser.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in sample configuration",
    )

    # estimate command
    estimateParser = subparsers.add_parser("estimate", help="Estimate tokens and cost per model")
    estimateParser.add_argument("prompt", help="Prompt text")
    estimateParser.add_argument(
        "--model",
        action="append",
        default=None,
        help="Model to price (repeatable; default: all known models)",
    )

    # select command
    selectParser = subparsers.add_parser("select", help="Show the model the budget allows")
    selectParser.add_argument("prompt", help="Prompt text")
    selectParser.add_argument("--budget", type=float, required=True, help="Budget in USD")
    selectParser.add_argument(
        "--model",
        action="append",
        default=None,
        help="Catalog model, most expensive first (repeatable)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configureLogging(level="DEBUG" if args.verbose else None)

    try:
        if args.command == "request":
            return cmdRequest(args)
        elif args.command == "estimate":
            return cmdEstimate(args)
        elif args.command == "select":
            return cmdSelect(args)
    except TokaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def parseOptions(pairs: list[str]) -> dict[str, Any]:
    """Parse KEY=VALUE pairs into an options dict."""
    options: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise TokaError(f"Invalid option '{pair}', expected KEY=VALUE")
        try:
            options[key] = json.loads(value)
        except json.JSONDecodeError:
            options[key] = value
    return options


def cmdRequest(args: argparse.Namespace) -> int:
    """Run a single request and print the response."""
    config = createSampleConfig() if args.sample else loadConfig(args.config)
    orchestrator = RequestOrchestrator(config, cache=MemoryCache(), client=SimulatedClient())

    response = asyncio.run(orchestrator.request(args.model, args.prompt, parseOptions(args.option)))

    print(f"Text: {response.text}")
    print(f"Tokens: {response.tokens}")
    print(f"Cost: ${response.cost:.4f}")
    print(f"Model Used: {response.modelUsed}")
    print(f"Cache Hit: {response.cacheHit}")
    return 0


def cmdEstimate(args: argparse.Namespace) -> int:
    """Print the estimate for each model."""
    estimator = CostEstimator()
    for model in args.model or list(DEFAULT_MODEL_PRICES):
        print(estimator.formatEstimate(args.prompt, model))
    return 0


def cmdSelect(args: argparse.Namespace) -> int:
    """Print the model selected for a budget."""
    # Most expensive first
    models = args.model or sorted(DEFAULT_MODEL_PRICES, key=DEFAULT_MODEL_PRICES.get, reverse=True)
    selected = getModelWithinBudget(args.prompt, models, args.budget)
    if selected is None:
        print(f"No model fits within ${args.budget}")
        return 1

    print(selected)
    return 0


if __name__ == "__main__":
    sys.exit(main())
