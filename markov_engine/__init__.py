"""Generic first-order Markov chain engine with text and board game drivers."""

from markov_engine.domain.chain.errors import (
    AllocationFailure,
    ChainDestroyedError,
    ChainNotConfiguredError,
    ChainStateError,
    DeadEndError,
    MarkovChainError,
    UnknownStateError,
)
from markov_engine.domain.chain.markov_chain import MarkovChain, create_chain, destroy_chain
from markov_engine.domain.chain.operations import DomainOperations, FunctionalOperations
from markov_engine.domain.models.chain_state import (
    MarkovState,
    TransitionCounter,
    TransitionTable,
    WalkResult,
    WalkStatus,
)
from markov_engine.infrastructure.randomness.random_source import RandomSource

__version__ = "0.1.0"

__all__ = [
    "AllocationFailure",
    "ChainDestroyedError",
    "ChainNotConfiguredError",
    "ChainStateError",
    "DeadEndError",
    "DomainOperations",
    "FunctionalOperations",
    "MarkovChain",
    "MarkovChainError",
    "MarkovState",
    "RandomSource",
    "TransitionCounter",
    "TransitionTable",
    "UnknownStateError",
    "WalkResult",
    "WalkStatus",
    "create_chain",
    "destroy_chain",
]
