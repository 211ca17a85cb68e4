"""Walk through every operation on generated data and report step counts."""

from __future__ import annotations

import argparse
import logging
import operator
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from . import sequences
from .config import AppConfig, apply_loop_config, build_app_config, load_app_config
from .loops import LoopFn, max_safe_iterations, resolve_loop
from .utils.logging import StepTally, instrument, setup_logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("configs/defaults.yaml")


def make_records(size: int, strategy: str) -> List[Dict[str, Any]]:
    """Build ``size`` record dicts; every third one has no ``score`` field."""

    def record(index: int) -> Dict[str, Any]:
        if index % 3 == 2:
            return {"id": index}
        return {"id": index, "score": index * 10}

    return sequences.map(range(size), record, strategy=strategy)


def counting_loop(strategy: str, tally: StepTally) -> LoopFn:
    """Wrap the ``strategy`` primitive so each loop step bumps ``tally.iterations``."""

    run = resolve_loop(strategy)

    def counted(condition, body) -> None:
        run(condition, instrument(body, tally, key="iterations"))

    return counted


def run_demo(config: AppConfig) -> Dict[str, Dict[str, Any]]:
    """Run each operation once and return its result with its step tally."""

    strategy = config.loop.strategy
    numbers = range(config.demo.size)
    records = make_records(config.demo.size, strategy)
    report: Dict[str, Dict[str, Any]] = {}

    def record_step(name: str, result: Any, tally: StepTally) -> None:
        report[name] = {"result": result, "steps": tally.as_dict()}

    tally = StepTally()
    visited: List[int] = []
    sequences.for_each(numbers, instrument(visited.append, tally), strategy=counting_loop(strategy, tally))
    record_step("for_each", visited, tally)

    tally = StepTally()
    total = sequences.reduce(
        numbers, instrument(operator.add, tally), 0, strategy=counting_loop(strategy, tally)
    )
    record_step("reduce", total, tally)

    tally = StepTally()
    doubled = sequences.map(
        numbers, instrument(lambda n: n * 2, tally), strategy=counting_loop(strategy, tally)
    )
    record_step("map", doubled, tally)

    tally = StepTally()
    evens = sequences.filter(
        numbers, instrument(lambda n: n % 2 == 0, tally), strategy=counting_loop(strategy, tally)
    )
    record_step("filter", evens, tally)

    tally = StepTally()
    scores = sequences.pluck(records, "score", strategy=counting_loop(strategy, tally))
    tally.incr(records=len(records))
    record_step("pluck", scores, tally)

    tally = StepTally()
    kept = sequences.compact(scores, strategy=counting_loop(strategy, tally))
    tally.incr(dropped=len(scores) - len(kept))
    record_step("compact", kept, tally)

    return report


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--strategy", choices=("recursive", "trampoline"), default=None)
    parser.add_argument("--size", type=int, default=None, help="length of the generated sequence")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Load the config file (if present) and apply command-line overrides."""

    if args.config.exists():
        config = load_app_config(args.config)
    else:
        config = build_app_config({})
    if args.strategy is not None:
        config.loop.strategy = args.strategy
    if args.size is not None:
        config.demo.size = args.size
    if args.log_level is not None:
        config.logging.level = args.log_level
    return config


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    config = resolve_config(args)
    setup_logging(level=config.logging.level, rich_tracebacks=config.logging.rich_tracebacks)
    apply_loop_config(config.loop)

    if config.loop.strategy == "recursive" and config.demo.size > max_safe_iterations():
        logger.warning(
            "size=%d exceeds the safe recursive depth (%d); expect RecursionError "
            "or pass --strategy trampoline",
            config.demo.size,
            max_safe_iterations(),
        )

    logger.info("Running walkthrough with strategy=%s size=%d", config.loop.strategy, config.demo.size)
    report = run_demo(config)
    sequences.for_each(
        sorted(report),
        lambda name: logger.info("%-8s -> %s %s", name, report[name]["result"], report[name]["steps"]),
    )


__all__ = ["make_records", "counting_loop", "run_demo", "parse_args", "resolve_config", "main"]
