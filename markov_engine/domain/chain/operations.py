from abc import ABC, abstractmethod
from typing import Any, Callable, Optional


class DomainOperations(ABC):
    """The five operations a domain supplies to parameterize a chain

    The chain never looks inside a payload; everything it needs to know
    about one goes through these methods.
    """

    @abstractmethod
    def print_state(self, payload: Any) -> None:
        """Write a human-readable form of one state"""
        pass

    @abstractmethod
    def copy(self, payload: Any) -> Optional[Any]:
        """Return an owned deep copy of payload, or None if it cannot be allocated"""
        pass

    @abstractmethod
    def compare(self, first: Any, second: Any) -> int:
        """Zero when both payloads are semantically equal, nonzero otherwise"""
        pass

    @abstractmethod
    def is_terminal(self, payload: Any) -> bool:
        """Whether payload ends a sequence in its domain"""
        pass

    @abstractmethod
    def free(self, payload: Optional[Any]) -> None:
        """Release one payload; must accept None"""
        pass

    def describe(self) -> str:
        return type(self).__name__


class FunctionalOperations(DomainOperations):
    """Operation set built from five plain callables"""

    def __init__(
        self,
        print_fn: Callable[[Any], None],
        copy_fn: Callable[[Any], Optional[Any]],
        compare_fn: Callable[[Any, Any], int],
        is_terminal_fn: Callable[[Any], bool],
        free_fn: Callable[[Optional[Any]], None],
    ):
        for name, fn in (
            ("print_fn", print_fn),
            ("copy_fn", copy_fn),
            ("compare_fn", compare_fn),
            ("is_terminal_fn", is_terminal_fn),
            ("free_fn", free_fn),
        ):
            if not callable(fn):
                raise TypeError(f"{name} must be callable, got {type(fn).__name__}")

        self.print_fn = print_fn
        self.copy_fn = copy_fn
        self.compare_fn = compare_fn
        self.is_terminal_fn = is_terminal_fn
        self.free_fn = free_fn

    def print_state(self, payload: Any) -> None:
        self.print_fn(payload)

    def copy(self, payload: Any) -> Optional[Any]:
        return self.copy_fn(payload)

    def compare(self, first: Any, second: Any) -> int:
        return self.compare_fn(first, second)

    def is_terminal(self, payload: Any) -> bool:
        return self.is_terminal_fn(payload)

    def free(self, payload: Optional[Any]) -> None:
        self.free_fn(payload)

    def describe(self) -> str:
        return f"FunctionalOperations({getattr(self.print_fn, '__name__', 'print_fn')})"
