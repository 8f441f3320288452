"""
Walk generation.

A walk emits its start state, then keeps stepping to a weighted-random
successor until max_length states were emitted. When the current state is
a dead end the walk emits it once more and stops, so a walk emits between
1 and max_length + 1 states. is_terminal is not consulted here.
"""

from typing import Iterator, Optional
import structlog

from markov_engine.domain.models.chain_state import MarkovState, WalkResult, WalkStatus
from .errors import UnknownStateError
from .operations import DomainOperations
from .random_selector import RandomSelector

logger = structlog.get_logger(__name__)


class WalkGenerator:
    """Drives the selector through one bounded walk at a time"""

    def __init__(self, selector: RandomSelector, operations: DomainOperations):
        self.selector = selector
        self.operations = operations
        self.status = WalkStatus.START

    def iter_walk(self, start: Optional[MarkovState], max_length: int) -> Iterator[MarkovState]:
        """Yield the states of one walk in emission order

        A missing start is replaced by a uniform start pick. self.status
        tracks where the state machine is.
        """

        if max_length < 1:
            raise ValueError(f"max_length must be at least 1, got {max_length}")

        if start is not None and not self.selector.registry.owns(start):
            raise UnknownStateError(f"Start state {start.handle} is not registered in this chain")

        self.status = WalkStatus.START
        current = start if start is not None else self.selector.pick_uniform_start()

        yield current
        count = 1
        self.status = WalkStatus.WALKING

        while count < max_length:
            if current.out_degree == 0:
                self.status = WalkStatus.TERMINATED_DEAD_END
                yield current
                return
            current = self.selector.pick_weighted_next(current)
            yield current
            count += 1

        self.status = WalkStatus.TERMINATED_MAX_LENGTH

    def run(self, start: Optional[MarkovState], max_length: int) -> WalkResult:
        """Emit one walk through the print operation"""

        emitted = []
        for state in self.iter_walk(start, max_length):
            self.operations.print_state(state.payload)
            emitted.append(state.handle)

        return WalkResult(emitted=emitted, status=self.status, max_length=max_length)
