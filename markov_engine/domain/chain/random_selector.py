import structlog

from markov_engine.domain.models.chain_state import MarkovState
from markov_engine.infrastructure.randomness.random_source import RandomSource
from .errors import DeadEndError, MarkovChainError, UnknownStateError
from .state_registry import StateRegistry

logger = structlog.get_logger(__name__)


class RandomSelector:
    """Uniform start picks and frequency-weighted next-state picks"""

    def __init__(self, registry: StateRegistry, random_source: RandomSource):
        self.registry = registry
        self.random_source = random_source

    def pick_uniform_start(self) -> MarkovState:
        """Draw uniform registry indices until one lands on a state with outgoing transitions"""

        if self.registry.walkable_count == 0:
            logger.warning("No walkable state to start from", size=len(self.registry))
            raise DeadEndError("No state in the chain has an outgoing transition")

        while True:
            index = self.random_source.randrange(len(self.registry))
            state = self.registry[index]
            if state.out_degree != 0:
                return state

    def pick_weighted_next(self, state: MarkovState) -> MarkovState:
        """Choose a successor of state with probability frequency / total

        Draws r in [0, total) and walks the table in storage order,
        subtracting each frequency; the first entry that takes r below zero
        wins.
        """

        if not self.registry.owns(state):
            raise UnknownStateError(f"State {state.handle} is not registered in this chain")

        table = state.transitions
        if table.total <= 0:
            raise DeadEndError(f"State {state.handle} has no outgoing transitions")

        remainder = self.random_source.randrange(table.total)
        for counter in table.entries:
            remainder -= counter.frequency
            if remainder < 0:
                return self.registry.resolve(counter.target)

        # Only reachable if total drifted from the sum of frequencies
        raise MarkovChainError(
            f"Transition total {table.total} of state {state.handle} exceeds its frequencies"
        )
