"""
Tweet generator: learns word-to-word transitions from a text corpus and
prints random "tweets" from them.

Learning reads the corpus line by line. Every word becomes a state, and a
transition is recorded from each word to the one following it on the same
line, unless the first word ends a sentence. Transitions never cross lines.
"""

from typing import Iterable, Iterator, Optional, TextIO
import sys
import structlog

from markov_engine.domain.chain.markov_chain import MarkovChain
from markov_engine.domain.drivers.errors import CorpusFileError

logger = structlog.get_logger(__name__)

MAX_WORDS_IN_TWEET = 20


def clean_word(word: str) -> str:
    """Strip trailing line markers"""
    return word.rstrip("\r\n\0")


def load_corpus(path: str) -> Iterator[str]:
    """Yield the corpus lines one at a time

    The file is opened on first iteration and read only as far as the
    consumer goes. A file that cannot be opened or is not UTF-8 text raises
    CorpusFileError.
    """

    try:
        with open(path, "r", encoding="utf-8") as corpus:
            for line in corpus:
                yield line
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read corpus", path=path, error=str(e))
        raise CorpusFileError(path, str(e)) from e


def fill_database(chain: MarkovChain, lines: Iterable[str], words_to_read: Optional[int] = None) -> int:
    """Insert corpus words and their transitions; returns the number of words read

    Stops once words_to_read words were read. AllocationFailure from the
    chain propagates and is fatal for the fill.
    """

    def limit_reached() -> bool:
        return words_to_read is not None and words_read >= words_to_read

    words_read = 0
    remaining_lines = iter(lines)
    # No line is pulled once the limit is reached
    while not limit_reached():
        line = next(remaining_lines, None)
        if line is None:
            break

        words = [clean_word(word) for word in line.split()]
        words = [word for word in words if word]
        if not words:
            continue

        previous = chain.get_or_insert(words[0])
        words_read += 1

        for word in words[1:]:
            if limit_reached():
                break
            current = chain.get_or_insert(word)
            words_read += 1
            if not chain.operations.is_terminal(previous.payload):
                chain.record_transition(previous, current)
            previous = current

    logger.info("Corpus loaded", words_read=words_read, states=len(chain))
    return words_read


def generate_tweets(
    chain: MarkovChain,
    num_tweets: int,
    stream: Optional[TextIO] = None,
    max_words: int = MAX_WORDS_IN_TWEET
) -> None:
    """Print num_tweets walks, each from a uniform start"""

    out = stream or sys.stdout
    for tweet_number in range(1, num_tweets + 1):
        first_state = chain.pick_uniform_start()
        out.write(f"Tweet {tweet_number}: ")
        chain.generate_walk(first_state, max_words)
        out.write("\n")
