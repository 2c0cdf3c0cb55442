"""CLI entry point: print the step trace for one algorithm and input.

Usage:
    python scripts/run_trace.py checksum "TEST"
    python scripts/run_trace.py feistel-cipher "Secret123" --mode inverse
    python scripts/run_trace.py aes "Hello, this is a secret message!" --json
    python scripts/run_trace.py spn-cipher "Two One Nine Two" --output runs/
    python scripts/run_trace.py --list

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from cryptolearn.config import load_settings
from cryptolearn.dispatcher import AlgorithmRegistry, dispatch
from cryptolearn.exceptions import CryptoLearnError
from cryptolearn.trace.model import TraceRequest, TraceResult
from cryptolearn.utils.export import trace_to_json, write_trace


def _print_catalog(registry: AlgorithmRegistry) -> None:
    for entry in registry.list():
        block = f"{entry.block_size}-char block" if entry.block_size else "any length"
        print(f"{entry.algorithm_id:<16} [{entry.complexity}] {entry.title} ({block})")
        print(f"{'':<16} {entry.step_overview}")
        print(f"{'':<16} example: {entry.example_input!r}")


def _print_trace(result: TraceResult) -> None:
    for step in result.steps:
        print(f"[{step.ordinal:>2}/{len(result)}] {step.title}")
        print(f"      {step.description}")
        print(f"      in : {step.input_hex}")
        print(f"      out: {step.output_hex}")
    print(f"\nResult: {result.result}")


def main() -> int:
    settings = load_settings()
    registry = AlgorithmRegistry()

    parser = argparse.ArgumentParser(
        description="Step-by-step trace of a teaching cipher or checksum",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python scripts/run_trace.py checksum TEST\n"
            "  python scripts/run_trace.py des Secret123 --mode decrypt\n"
        ),
    )
    parser.add_argument("algorithm", nargs="?", help="spn-cipher, feistel-cipher or checksum (aliases: aes, des)")
    parser.add_argument("text", nargs="?", help="Input text (ciphers pad/truncate it to their block size)")
    parser.add_argument(
        "--mode", default=settings.default_mode,
        choices=["forward", "inverse", "both", "encrypt", "decrypt"],
        help=f"forward, inverse or both; encrypt/decrypt also accepted (default: {settings.default_mode})",
    )
    parser.add_argument("--json", action="store_true", help="Print the trace as JSON")
    parser.add_argument(
        "--output", type=str, default=None, metavar="PATH",
        help=f"Write the JSON trace to PATH (a directory gets a timestamped file; try {settings.runs_dir}/)",
    )
    parser.add_argument("--list", action="store_true", help="List available algorithms and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.list:
        _print_catalog(registry)
        return 0
    if args.algorithm is None or args.text is None:
        parser.error("algorithm and text are required unless --list is given")

    try:
        request = TraceRequest(algorithm=args.algorithm, input_text=args.text, mode=args.mode)
        result = dispatch(request, registry)
    except CryptoLearnError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 2
    except ValidationError as err:
        print(f"Error: invalid request: {err.errors()[0]['msg']}", file=sys.stderr)
        return 2

    if args.json:
        print(trace_to_json(result, request))
    else:
        _print_trace(result)

    if args.output:
        path = write_trace(args.output, result, request)
        print(f"Trace written to {path}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
