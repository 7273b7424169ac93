"""
Filler player entry point.

Reads the player line and then one turn at a time from stdin, answering
each turn with ``X Y`` on stdout. Logs go to stderr.

Usage:
    filler-ai                                  # default strategy
    filler-ai --strategy defensive -v          # other strategy, debug logs
    filler-ai --benchmark 200 < turn.txt       # time cached vs uncached scoring
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from . import metrics
from .ai.benchmark import benchmark_selection
from .ai.heuristic_ai import HeuristicAI
from .config import RuntimeConfig, load_config, parse_strategy
from .errors import ConfigurationError, ProtocolError
from .logging_config import setup_logging
from .protocol import Move, ProtocolReader, write_move

logger = logging.getLogger(__name__)


def _strategy_arg(value: str):
    try:
        return parse_strategy(value)
    except ConfigurationError as exc:
        raise argparse.ArgumentTypeError(exc.message) from None


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filler-ai",
        description="Filler territory game player",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--strategy",
        type=_strategy_arg,
        help="Scoring strategy (default: FILLER_AI_STRATEGY or advanced_balanced)",
    )
    parser.add_argument("--no-cache", action="store_true", help="Disable the batch scoring caches")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--metrics-port", type=int, help="Expose Prometheus metrics on this port")
    parser.add_argument("--log-file", type=str, help="Also append logs to this file")
    parser.add_argument(
        "--benchmark",
        type=int,
        metavar="ITERATIONS",
        help="Benchmark selection on the first turn read from stdin and exit",
    )
    return parser


def apply_overrides(config: RuntimeConfig, args: argparse.Namespace) -> RuntimeConfig:
    """Return ``config`` with command line flags applied on top."""
    ai_updates = {}
    if args.strategy is not None:
        ai_updates["strategy"] = args.strategy
    if args.no_cache:
        ai_updates["use_batch_cache"] = False

    updates: dict = {"ai": config.ai.model_copy(update=ai_updates)}
    if args.verbose:
        updates["log_level"] = "DEBUG"
    if args.metrics_port is not None:
        updates["metrics_port"] = args.metrics_port
    return config.model_copy(update=updates)


def play(ai: HeuristicAI, reader: ProtocolReader, out: TextIO) -> int:
    """Answer every turn until the input ends. Returns the number of answers."""
    answered = 0
    while True:
        try:
            turn = reader.read_turn()
        except ProtocolError as exc:
            metrics.PROTOCOL_ERRORS.inc()
            logger.warning(f"Bad turn input, sending fallback move: {exc}")
            write_move(out, Move.fallback())
            answered += 1
            continue
        if turn is None:
            break
        write_move(out, Move.from_placement(ai.select_placement(turn)))
        answered += 1
    logger.info(f"Input closed after {answered} turns")
    return answered


def run_benchmark(config: RuntimeConfig, reader: ProtocolReader, iterations: int, out: TextIO) -> int:
    try:
        turn = reader.read_turn()
    except ProtocolError as exc:
        logger.error(f"Could not read benchmark turn: {exc}")
        return 1
    if turn is None:
        logger.error("No turn on stdin to benchmark")
        return 1
    result = benchmark_selection(turn, config.ai.strategy, iterations)
    out.write(result.format() + "\n")
    return 0


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    args = create_parser().parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    try:
        config = apply_overrides(load_config(), args)
    except ConfigurationError as exc:
        setup_logging("filler_ai")
        logger.error(f"Invalid configuration: {exc}")
        return 2

    setup_logging("filler_ai", level=config.log_level, log_file=args.log_file)
    logger.debug(f"Configuration: {config.model_dump()}")

    if config.metrics_port is not None:
        metrics.start_metrics_server(config.metrics_port)
        logger.info(f"Metrics exporter listening on port {config.metrics_port}")

    reader = ProtocolReader(stdin)

    if args.benchmark is not None:
        if args.benchmark <= 0:
            logger.error("--benchmark needs a positive iteration count")
            return 2
        return run_benchmark(config, reader, args.benchmark, stdout)

    try:
        player = reader.read_player()
    except ProtocolError as exc:
        logger.error(f"Could not read player line: {exc}")
        return 1
    ai = HeuristicAI(player, config.ai)
    logger.info(f"Starting {ai!r}")

    play(ai, reader, stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
