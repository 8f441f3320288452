from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from enum import Enum

from markov_engine.domain.chain.errors import AllocationFailure


class WalkStatus(str, Enum):
    """Walk generator states"""
    START = "start"
    WALKING = "walking"
    TERMINATED_MAX_LENGTH = "terminated_max_length"
    TERMINATED_DEAD_END = "terminated_dead_end"


class TransitionCounter(BaseModel):
    """One reachable next-state and how often it was observed"""
    target: int = Field(ge=0, description="Handle of the target state in the registry")
    frequency: int = Field(default=1, ge=1)


class TransitionTable(BaseModel):
    """Outgoing transitions of one state, in storage order"""
    entries: List[TransitionCounter] = Field(default_factory=list)
    total: int = Field(default=0, ge=0, description="Sum of all entry frequencies")

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, target: int) -> Optional[TransitionCounter]:
        """Get the counter for a target handle, if present"""
        for counter in self.entries:
            if counter.target == target:
                return counter
        return None

    def record(self, target: int) -> TransitionCounter:
        """Count one observation of target

        An already known target has its frequency bumped. A new target grows
        the table by one slot; if the grown storage cannot be allocated the
        table is left exactly as it was.
        """
        counter = self.find(target)
        if counter is not None:
            counter.frequency += 1
            self.total += 1
            return counter

        try:
            grown = self._allocate_slot(target)
        except MemoryError as e:
            raise AllocationFailure(
                "Allocation failure: reallocation of transition table failed."
            ) from e

        self.entries = grown
        self.total += 1
        return grown[-1]

    def _allocate_slot(self, target: int) -> List[TransitionCounter]:
        """Copy the entries into storage one slot larger, holding the new counter"""
        grown = list(self.entries)
        grown.append(TransitionCounter(target=target, frequency=1))
        return grown

    def frequencies(self) -> Dict[int, int]:
        """Map of target handle to frequency"""
        return {counter.target: counter.frequency for counter in self.entries}

    def clear(self):
        self.entries = []
        self.total = 0


class MarkovState(BaseModel):
    """A discovered payload and its outgoing transition table"""
    handle: int = Field(ge=0, description="Stable index of the state in its registry")
    payload: Any = Field(description="Owned deep copy of the domain payload")
    transitions: TransitionTable = Field(default_factory=TransitionTable)

    @property
    def out_degree(self) -> int:
        return len(self.transitions)

    @property
    def is_dead_end(self) -> bool:
        return self.transitions.total == 0

    def get_state_summary(self) -> Dict[str, Any]:
        """Get a summary of the state"""
        return {
            "handle": self.handle,
            "payload": repr(self.payload),
            "out_degree": self.out_degree,
            "total": self.transitions.total,
        }


class WalkResult(BaseModel):
    """Outcome of one walk"""
    emitted: List[int] = Field(default_factory=list, description="Handles in emission order")
    status: WalkStatus = Field(default=WalkStatus.START)
    max_length: int = Field(ge=1)

    @property
    def length(self) -> int:
        return len(self.emitted)
