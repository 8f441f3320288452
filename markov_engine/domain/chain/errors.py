"""
Errors raised by the Markov chain engine.

A lookup that finds nothing is not an error: it returns None.
"""


class MarkovChainError(Exception):
    """Base class for every engine error"""


class AllocationFailure(MarkovChainError):
    """A payload copy or a transition table growth could not be allocated.

    Raised only after the failing operation released its partial work.
    """


class ChainNotConfiguredError(MarkovChainError):
    """The domain operations were not bound before the chain was used"""


class ChainDestroyedError(MarkovChainError):
    """The chain was used after destroy()"""


class ChainStateError(MarkovChainError):
    """The lifecycle step is not allowed in the chain's current state"""


class UnknownStateError(MarkovChainError):
    """The state or handle does not belong to this chain"""


class DeadEndError(MarkovChainError):
    """No outgoing transition to choose from"""
