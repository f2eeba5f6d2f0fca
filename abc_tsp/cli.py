import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from abc_tsp.colony import ArtificialBeeColony
from abc_tsp.config import ColonyConfig, load_config
from abc_tsp.data import Instance, load_instance
from abc_tsp.errors import AbcError
from abc_tsp.report import write_result


logger = logging.getLogger("abc_tsp")


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def log(msg: str) -> None:
    logger.info(msg)


def _load(args) -> Tuple[Instance, ColonyConfig]:
    instance = load_instance(Path(args.input))
    log(f"loaded {instance.name}: {instance.city_amount} cities from {args.input}")
    config_path = Path(args.config) if args.config else None
    cfg = load_config(config_path, random_seed=getattr(args, "seed", None))
    log(
        f"colony_size={cfg.colony_size} candidates={cfg.candidate_amount} "
        f"method={cfg.generation_method.value} workers={cfg.concurrent_count} "
        f"max_iterations={cfg.max_iterations} max_unimproved={cfg.max_unimproved} "
        f"threshold={cfg.improvement_threshold}"
    )
    return instance, cfg


def solve(args) -> None:
    t0 = time.perf_counter()
    instance, cfg = _load(args)
    model = ArtificialBeeColony(cfg, instance.dist)
    result = model.run(optimum=instance.optimum)
    elapsed = time.perf_counter() - t0
    write_result(Path(args.output), result, elapsed)
    log(f"best length {result.length:.4f} after {result.iterations} iterations ({result.state.value})")
    if result.optimum is not None:
        log(f"gap to known optimum {result.optimum:.4f}: {result.gap:.2%}")
    log(f"result written to {args.output} in {elapsed:.2f}s")


def check(args) -> None:
    instance, cfg = _load(args)
    print(f"{instance.name}: {instance.city_amount} cities, config OK ({cfg.population_size} bees)")
    if instance.optimum is not None:
        print(f"known optimum: {instance.optimum:.4f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Artificial Bee Colony TSP solver")
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser("solve", help="Run the colony and write the best tour")
    solve_parser.add_argument("--input", required=True, help="City table (.xlsx, .csv) or TSPLIB .tsp file")
    solve_parser.add_argument("--output", required=True, help="Result file (.json for JSON, else text)")
    solve_parser.add_argument("--config", help="key = value configuration file")
    solve_parser.add_argument("--seed", type=int, help="Seed the colony's random source")
    solve_parser.add_argument("--verbose", action="store_true", help="Log every iteration")
    solve_parser.set_defaults(func=solve)

    check_parser = subparsers.add_parser("check", help="Validate input and configuration without solving")
    check_parser.add_argument("--input", required=True)
    check_parser.add_argument("--config")
    check_parser.add_argument("--verbose", action="store_true")
    check_parser.set_defaults(func=check)
    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        args.func(args)
    except (AbcError, OSError) as exc:
        sys.exit(f"error: {exc}")


if __name__ == "__main__":
    main()
