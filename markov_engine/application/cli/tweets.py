"""
markov-tweets SEED TWEETS CORPUS [WORDS]

Learn word transitions from CORPUS (at most WORDS words when given) and
print TWEETS random tweets, seeding the random source with SEED.
"""

from typing import List, Optional
import argparse
import sys
import time
import structlog
from pydantic import ValidationError

from markov_engine.domain.chain.errors import MarkovChainError
from markov_engine.domain.chain.markov_chain import MarkovChain, destroy_chain
from markov_engine.domain.drivers.errors import CorpusFileError, FILE_ERROR, USAGE_ERROR_TWEETS
from markov_engine.domain.drivers.text.tweet_operations import TweetOperations
from markov_engine.domain.drivers.text.tweets_generator import fill_database, generate_tweets, load_corpus
from markov_engine.infrastructure.config.settings import TweetGeneratorConfig
from markov_engine.infrastructure.observability.logging import chain_logger, metrics
from markov_engine.infrastructure.randomness.random_source import RandomSource
from .common import EXIT_FAILURE, EXIT_SUCCESS, add_logging_arguments, configure_logging, release_run_context

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markov-tweets",
        description="Generate random tweets from a text corpus with a first-order Markov chain.",
        epilog=USAGE_ERROR_TWEETS,
    )
    parser.add_argument("seed", type=int, help="Seed of the random source")
    parser.add_argument("num_tweets", type=int, help="Number of tweets to generate")
    parser.add_argument("corpus_path", help="Path of the corpus text file")
    parser.add_argument("words_to_read", type=int, nargs="?", default=None, help="Read at most this many words")
    add_logging_arguments(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    run_id = configure_logging(args, "tweets")

    try:
        config = TweetGeneratorConfig(
            seed=args.seed,
            num_tweets=args.num_tweets,
            corpus_path=args.corpus_path,
            words_to_read=args.words_to_read,
        )
    except ValidationError as e:
        logger.error("Invalid run parameters", errors=e.errors(include_url=False))
        print(USAGE_ERROR_TWEETS)
        release_run_context(run_id)
        return EXIT_FAILURE

    try:
        return run(config)
    finally:
        release_run_context(run_id)


def run(config: TweetGeneratorConfig) -> int:
    """Learn from the corpus then print the tweets"""

    metrics.reset()
    chain = MarkovChain.create(random_source=RandomSource(config.seed))
    lines = load_corpus(config.corpus_path)
    structlog.contextvars.bind_contextvars(chain_id=chain.chain_id)
    try:
        chain.bind(TweetOperations(stream=sys.stdout))

        started = time.perf_counter()
        try:
            words_read = fill_database(chain, lines, config.words_to_read)
        except CorpusFileError as e:
            chain_logger.log_learning_phase(chain.chain_id, "tweets", success=False, error=str(e))
            print(FILE_ERROR)
            return EXIT_FAILURE
        except MarkovChainError as e:
            chain_logger.log_learning_phase(chain.chain_id, "tweets", success=False, error=str(e))
            print(str(e))
            return EXIT_FAILURE

        duration_ms = (time.perf_counter() - started) * 1000
        metrics.record_latency("fill_database", duration_ms, {"driver": "tweets"})
        metrics.set_gauge("registry_size", len(chain), {"driver": "tweets"})
        chain_logger.log_learning_phase(
            chain.chain_id,
            "tweets",
            words_read=words_read,
            summary=chain.get_chain_summary(),
            duration_ms=duration_ms,
        )

        if config.num_tweets > 0 and chain.get_chain_summary()["walkable_states"] == 0:
            logger.error("Corpus has no word transitions", corpus=config.corpus_path)
            print("ERROR: corpus holds no word transitions to generate from.")
            return EXIT_FAILURE

        generate_tweets(chain, config.num_tweets, stream=sys.stdout, max_words=config.max_words_in_tweet)
        metrics.increment_counter("walks_generated", config.num_tweets, {"driver": "tweets"})
        chain_logger.log_run_summary("tweets", metrics.get_metrics_summary())
        return EXIT_SUCCESS
    finally:
        lines.close()
        structlog.contextvars.unbind_contextvars("chain_id")
        chain = destroy_chain(chain)


if __name__ == "__main__":
    sys.exit(main())
