"""
markov-snakes SEED PATHS

Print PATHS random snakes and ladders games, seeding the random source
with SEED.
"""

from typing import List, Optional
import argparse
import sys
import time
import structlog
from pydantic import ValidationError

from markov_engine.domain.chain.errors import MarkovChainError
from markov_engine.domain.chain.markov_chain import MarkovChain, destroy_chain
from markov_engine.domain.drivers.board.cell_operations import CellOperations
from markov_engine.domain.drivers.board.snakes_and_ladders import build_board, fill_database, generate_walks
from markov_engine.domain.drivers.errors import USAGE_ERROR_SNAKES
from markov_engine.infrastructure.config.settings import SnakesAndLaddersConfig
from markov_engine.infrastructure.observability.logging import chain_logger, metrics
from markov_engine.infrastructure.randomness.random_source import RandomSource
from .common import EXIT_FAILURE, EXIT_SUCCESS, add_logging_arguments, configure_logging, release_run_context

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markov-snakes",
        description="Simulate snakes and ladders games as random walks of a Markov chain.",
        epilog=USAGE_ERROR_SNAKES,
    )
    parser.add_argument("seed", type=int, help="Seed of the random source")
    parser.add_argument("num_paths", type=int, help="Number of games to print")
    add_logging_arguments(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    run_id = configure_logging(args, "snakes")

    try:
        config = SnakesAndLaddersConfig(seed=args.seed, num_paths=args.num_paths)
    except ValidationError as e:
        logger.error("Invalid run parameters", errors=e.errors(include_url=False))
        print(USAGE_ERROR_SNAKES)
        release_run_context(run_id)
        return EXIT_FAILURE

    try:
        return run(config)
    finally:
        release_run_context(run_id)


def run(config: SnakesAndLaddersConfig) -> int:
    """Build the board chain then print the games"""

    metrics.reset()
    chain = MarkovChain.create(random_source=RandomSource(config.seed))
    structlog.contextvars.bind_contextvars(chain_id=chain.chain_id)
    try:
        chain.bind(CellOperations(stream=sys.stdout, board_size=config.board_size))

        started = time.perf_counter()
        try:
            fill_database(chain, build_board(config.board_size))
        except MarkovChainError as e:
            chain_logger.log_learning_phase(chain.chain_id, "snakes", success=False, error=str(e))
            print(str(e))
            return EXIT_FAILURE

        duration_ms = (time.perf_counter() - started) * 1000
        metrics.record_latency("fill_database", duration_ms, {"driver": "snakes"})
        metrics.set_gauge("registry_size", len(chain), {"driver": "snakes"})
        chain_logger.log_learning_phase(
            chain.chain_id,
            "snakes",
            summary=chain.get_chain_summary(),
            duration_ms=duration_ms,
        )

        generate_walks(chain, config.num_paths, stream=sys.stdout, max_length=config.max_generation_length)
        metrics.increment_counter("walks_generated", config.num_paths, {"driver": "snakes"})
        chain_logger.log_run_summary("snakes", metrics.get_metrics_summary())
        return EXIT_SUCCESS
    finally:
        structlog.contextvars.unbind_contextvars("chain_id")
        chain = destroy_chain(chain)


if __name__ == "__main__":
    sys.exit(main())
