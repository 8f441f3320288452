from __future__ import annotations

from typing import Any, Iterable, List, Optional

import pytest

from markov_engine.domain.chain.markov_chain import MarkovChain
from markov_engine.domain.chain.operations import DomainOperations
from markov_engine.infrastructure.observability.logging import setup_logging
from markov_engine.infrastructure.randomness.random_source import RandomSource


@pytest.fixture(scope="session", autouse=True)
def structured_logging() -> None:
    setup_logging(log_level="DEBUG", log_format="console")


class RecordingOperations(DomainOperations):
    """String payloads; remembers every print, copy and free."""

    def __init__(self, fail_copy_on: Optional[str] = None, copy_raises: bool = False) -> None:
        self.printed: List[str] = []
        self.copied: List[str] = []
        self.freed: List[Optional[str]] = []
        self.terminal_checks = 0
        self.fail_copy_on = fail_copy_on
        self.copy_raises = copy_raises

    def print_state(self, payload: str) -> None:
        self.printed.append(payload)

    def copy(self, payload: str) -> Optional[str]:
        if payload == self.fail_copy_on:
            if self.copy_raises:
                raise MemoryError("copy")
            return None
        self.copied.append(payload)
        return "".join(payload)

    def compare(self, first: str, second: str) -> int:
        return (first > second) - (first < second)

    def is_terminal(self, payload: str) -> bool:
        self.terminal_checks += 1
        return payload.endswith(".")

    def free(self, payload: Optional[str]) -> None:
        self.freed.append(payload)


class ScriptedRandomSource(RandomSource):
    """Returns queued draws instead of random ones."""

    def __init__(self, draws: Iterable[int]) -> None:
        super().__init__(seed=None)
        self.draws = list(draws)
        self.requested: List[int] = []

    def randrange(self, stop: int) -> int:
        self.requested.append(stop)
        value = self.draws.pop(0)
        assert 0 <= value < stop, f"scripted draw {value} outside [0, {stop})"
        return value


@pytest.fixture
def operations() -> RecordingOperations:
    return RecordingOperations()


@pytest.fixture
def chain(operations: RecordingOperations) -> MarkovChain:
    chain = MarkovChain.create(random_source=RandomSource(1234))
    chain.bind(operations)
    yield chain
    chain.destroy()


def build_chain(edges: Iterable[tuple], seed: Any = 0, operations: Optional[DomainOperations] = None) -> MarkovChain:
    """Chain whose states and transitions come from (source, target) pairs, in order."""
    chain = MarkovChain.create(random_source=RandomSource(seed))
    chain.bind(operations or RecordingOperations())
    for source, target in edges:
        chain.record_transition(chain.get_or_insert(source), chain.get_or_insert(target))
    return chain


@pytest.fixture
def make_chain():
    return build_chain


@pytest.fixture
def make_operations():
    return RecordingOperations


@pytest.fixture
def scripted_random():
    return ScriptedRandomSource
