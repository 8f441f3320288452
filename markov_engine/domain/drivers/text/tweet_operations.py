from typing import Optional, TextIO
import sys

from markov_engine.domain.chain.operations import DomainOperations

SENTENCE_END = "."


class TweetOperations(DomainOperations):
    """Domain operations for single-word states of a text corpus"""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved late so a replaced sys.stdout is honoured
        return self._stream or sys.stdout

    def print_state(self, payload: str) -> None:
        """Words ending a sentence are written bare, others with a trailing space"""
        if payload.endswith(SENTENCE_END):
            self.stream.write(payload)
        else:
            self.stream.write(f"{payload} ")

    def copy(self, payload: Optional[str]) -> Optional[str]:
        if payload is None:
            return None
        return str(payload)

    def compare(self, first: str, second: str) -> int:
        if first == second:
            return 0
        return -1 if first < second else 1

    def is_terminal(self, payload: Optional[str]) -> bool:
        if not payload:
            return False
        return payload.endswith(SENTENCE_END)

    def free(self, payload: Optional[str]) -> None:
        # Strings are released by the garbage collector
        return None
