from typing import Any, Callable, Dict, Optional, Tuple
import uuid
import structlog

from markov_engine.domain.models.chain_state import MarkovState, TransitionCounter
from markov_engine.infrastructure.observability.logging import chain_logger
from markov_engine.infrastructure.randomness.random_source import RandomSource
from .errors import (
    AllocationFailure, ChainDestroyedError, ChainNotConfiguredError, ChainStateError
)
from .operations import DomainOperations, FunctionalOperations
from .random_selector import RandomSelector
from .state_registry import StateRegistry
from .walk_generator import WalkGenerator

logger = structlog.get_logger(__name__)


class MarkovChain:
    """First-order Markov chain over opaque payloads

    Owns the state registry, the random source and the bound domain
    operations. Populate it with get_or_insert and record_transition, then
    draw walks with generate_walk. destroy() releases every payload through
    the domain free operation; using the chain as a context manager does it
    on exit.
    """

    def __init__(self, random_source: Optional[RandomSource] = None):
        self.chain_id = str(uuid.uuid4())
        self.random_source = random_source or RandomSource()
        self.operations: Optional[DomainOperations] = None
        self.registry: Optional[StateRegistry] = None
        self.selector: Optional[RandomSelector] = None
        self.walk_generator: Optional[WalkGenerator] = None
        self.destroyed = False

    @classmethod
    def create(cls, random_source: Optional[RandomSource] = None) -> "MarkovChain":
        """Create an empty, unconfigured chain"""

        try:
            chain = cls(random_source=random_source)
        except MemoryError as e:
            logger.error("Chain allocation failed")
            raise AllocationFailure("Allocation failure: Alloc of new MarkovChain failed.") from e

        chain_logger.log_chain_event("created", chain.chain_id, {"seed": chain.random_source.seed})
        return chain

    def configure(
        self,
        print_fn: Callable[[Any], None],
        copy_fn: Callable[[Any], Optional[Any]],
        compare_fn: Callable[[Any, Any], int],
        is_terminal_fn: Callable[[Any], bool],
        free_fn: Callable[[Optional[Any]], None],
    ) -> "MarkovChain":
        """Bind the five domain operations given as plain callables"""

        return self.bind(FunctionalOperations(print_fn, copy_fn, compare_fn, is_terminal_fn, free_fn))

    def bind(self, operations: DomainOperations) -> "MarkovChain":
        """Bind a domain operation set; only allowed while the chain holds no states"""

        self._ensure_alive()
        if self.registry is not None and len(self.registry) > 0:
            raise ChainStateError("Cannot rebind operations of a chain that already holds states")

        registry = StateRegistry(operations)
        selector = RandomSelector(registry, self.random_source)
        walk_generator = WalkGenerator(selector, operations)

        self.operations = operations
        self.registry = registry
        self.selector = selector
        self.walk_generator = walk_generator

        chain_logger.log_chain_event("configured", self.chain_id, {"operations": operations.describe()})
        return self

    @property
    def configured(self) -> bool:
        return self.operations is not None

    @property
    def states(self) -> Tuple[MarkovState, ...]:
        if self.registry is None:
            return ()
        return self.registry.states

    def __len__(self) -> int:
        return 0 if self.registry is None else len(self.registry)

    def lookup(self, payload: Any) -> Optional[MarkovState]:
        """Find the state for payload, or None"""

        return self._require_registry().lookup(payload)

    def get_or_insert(self, payload: Any) -> MarkovState:
        """Return the state for payload, registering a copy if it is new"""

        return self._require_registry().get_or_insert(payload)

    def state(self, handle: int) -> MarkovState:
        """Resolve a handle to its state"""

        return self._require_registry().resolve(handle)

    def record_transition(self, source: MarkovState, target: MarkovState) -> TransitionCounter:
        """Count one observed step from source to target"""

        return self._require_registry().record_transition(source, target)

    def pick_uniform_start(self) -> MarkovState:
        """Uniformly pick a state that has outgoing transitions"""

        self._require_registry()
        return self.selector.pick_uniform_start()

    def pick_weighted_next(self, state: MarkovState) -> MarkovState:
        """Pick a successor of state proportionally to observed frequency"""

        self._require_registry()
        return self.selector.pick_weighted_next(state)

    def generate_walk(self, start: Optional[MarkovState] = None, max_length: int = 20) -> None:
        """Print one random walk through the domain print operation

        Starts at start, or at a uniform start pick when start is None.
        """

        self._require_registry()
        result = self.walk_generator.run(start, max_length)
        chain_logger.log_walk(
            chain_id=self.chain_id,
            start_handle=result.emitted[0],
            length=result.length,
            status=result.status.value,
            max_length=max_length
        )

    def get_chain_summary(self) -> Dict[str, Any]:
        """Get a summary of the chain"""

        states = self.states
        return {
            "chain_id": self.chain_id,
            "configured": self.configured,
            "destroyed": self.destroyed,
            "states": len(states),
            "walkable_states": self.registry.walkable_count if self.registry is not None else 0,
            "transitions": sum(state.out_degree for state in states),
            "observations": sum(state.transitions.total for state in states),
        }

    def destroy(self) -> None:
        """Release every state, its table and its payload

        Safe on an empty or unconfigured chain; later calls do nothing. The
        chain ends up destroyed even when a domain free raises.
        """

        if self.destroyed:
            return

        registry = self.registry
        self.registry = None
        self.selector = None
        self.walk_generator = None
        self.operations = None
        self.destroyed = True

        freed = registry.teardown() if registry is not None else 0

        chain_logger.log_chain_event("destroyed", self.chain_id, {"freed_states": freed})

    def __enter__(self) -> "MarkovChain":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()

    def _ensure_alive(self):
        if self.destroyed:
            raise ChainDestroyedError(f"Chain {self.chain_id} was destroyed")

    def _require_registry(self) -> StateRegistry:
        self._ensure_alive()
        if self.registry is None:
            raise ChainNotConfiguredError("Bind domain operations with configure() before using the chain")
        return self.registry


def create_chain(random_source: Optional[RandomSource] = None) -> MarkovChain:
    """Create an empty, unconfigured chain"""
    return MarkovChain.create(random_source=random_source)


def destroy_chain(chain: Optional[MarkovChain]) -> None:
    """Destroy chain if given; returns None so callers can drop their reference

    chain = destroy_chain(chain)
    """
    if chain is not None:
        chain.destroy()
    return None
