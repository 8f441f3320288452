from typing import Any, Iterator, List, Optional, Tuple
from contextlib import ExitStack
import structlog

from markov_engine.domain.models.chain_state import MarkovState, TransitionCounter, TransitionTable
from .errors import AllocationFailure, UnknownStateError
from .operations import DomainOperations

logger = structlog.get_logger(__name__)


class StateRegistry:
    """Ordered, deduplicated collection of the states discovered by a chain

    States are appended in discovery order and addressed by their index
    (handle), which never changes for the lifetime of the registry. Order is
    only used to index uniform start picks.
    """

    def __init__(self, operations: DomainOperations):
        self.operations = operations
        self._states: List[MarkovState] = []
        self._walkable = 0

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[MarkovState]:
        return iter(self._states)

    def __getitem__(self, index: int) -> MarkovState:
        return self._states[index]

    @property
    def states(self) -> Tuple[MarkovState, ...]:
        return tuple(self._states)

    @property
    def walkable_count(self) -> int:
        """Number of states with at least one outgoing transition"""
        return self._walkable

    def lookup(self, payload: Any) -> Optional[MarkovState]:
        """Find the state whose payload compares equal to payload"""

        for state in self._states:
            if self.operations.compare(state.payload, payload) == 0:
                return state
        return None

    def get_or_insert(self, payload: Any) -> MarkovState:
        """Return the state for payload, registering a copy of it if unseen

        A failure at any step frees whatever this call allocated and leaves
        the registry untouched.
        """

        existing = self.lookup(payload)
        if existing is not None:
            return existing

        with ExitStack() as rollback:
            owned = self._copy_payload(payload)
            rollback.callback(self.operations.free, owned)

            try:
                state = self._new_state(owned)
            except MemoryError as e:
                logger.error("State allocation failed", handle=len(self._states))
                raise AllocationFailure(
                    "Allocation failure: Alloc of new MarkovNode failed."
                ) from e

            self._states.append(state)
            rollback.pop_all()

        logger.debug("State registered", handle=state.handle, size=len(self._states))
        return state

    def resolve(self, handle: int) -> MarkovState:
        """Get the state behind a handle"""

        if not 0 <= handle < len(self._states):
            raise UnknownStateError(f"No state with handle {handle}")
        return self._states[handle]

    def owns(self, state: MarkovState) -> bool:
        """Whether state is the registry's own object for its handle"""

        return 0 <= state.handle < len(self._states) and self._states[state.handle] is state

    def record_transition(self, source: MarkovState, target: MarkovState) -> TransitionCounter:
        """Count one observed source -> target step"""

        for state in (source, target):
            if not self.owns(state):
                raise UnknownStateError(f"State {state.handle} is not registered in this chain")

        was_dead_end = source.out_degree == 0
        counter = source.transitions.record(target.handle)
        if was_dead_end:
            self._walkable += 1
        return counter

    def teardown(self) -> int:
        """Free every payload and empty the registry; returns the number of states freed

        Every payload is handed to free even when an earlier free raised;
        the first such error is re-raised once the registry is empty.
        """

        freed = 0
        failures = []
        states, self._states = self._states, []
        self._walkable = 0
        for state in states:
            state.transitions.clear()
            payload, state.payload = state.payload, None
            try:
                self.operations.free(payload)
            except Exception as e:
                logger.error("Payload free failed", handle=state.handle, error=str(e))
                failures.append(e)
            else:
                freed += 1

        if failures:
            raise failures[0]
        return freed

    def _copy_payload(self, payload: Any) -> Any:
        try:
            owned = self.operations.copy(payload)
        except MemoryError as e:
            logger.error("Payload copy failed", operations=self.operations.describe())
            raise AllocationFailure("Allocation failure: Alloc of generic data failed.") from e

        if owned is None:
            logger.error("Payload copy returned nothing", operations=self.operations.describe())
            raise AllocationFailure("Allocation failure: Alloc of generic data failed.")
        return owned

    def _new_state(self, owned: Any) -> MarkovState:
        return MarkovState(handle=len(self._states), payload=owned, transitions=TransitionTable())
