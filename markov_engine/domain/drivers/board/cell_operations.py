from typing import Optional, TextIO
from pydantic import BaseModel, Field
import sys

from markov_engine.domain.chain.operations import DomainOperations

BOARD_SIZE = 100


class Cell(BaseModel):
    """A square of the snakes and ladders board"""
    number: int = Field(ge=1, description="Cell number, 1 based")
    ladder_to: Optional[int] = Field(None, description="Destination of a ladder starting here")
    snake_to: Optional[int] = Field(None, description="Destination of a snake starting here")

    @property
    def jump_to(self) -> Optional[int]:
        if self.ladder_to is not None:
            return self.ladder_to
        return self.snake_to


class CellOperations(DomainOperations):
    """Domain operations for board cells"""

    def __init__(self, stream: Optional[TextIO] = None, board_size: int = BOARD_SIZE):
        self._stream = stream
        self.board_size = board_size

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def print_state(self, payload: Cell) -> None:
        if payload.ladder_to is not None:
            self.stream.write(f"[{payload.number}]-ladder to {payload.ladder_to} -> ")
        elif payload.snake_to is not None:
            self.stream.write(f"[{payload.number}]-snake to {payload.snake_to} -> ")
        elif payload.number != self.board_size:
            self.stream.write(f"[{payload.number}] -> ")
        else:
            self.stream.write(f"[{payload.number}]")

    def copy(self, payload: Optional[Cell]) -> Optional[Cell]:
        if payload is None:
            return None
        return payload.model_copy(deep=True)

    def compare(self, first: Cell, second: Cell) -> int:
        return first.number - second.number

    def is_terminal(self, payload: Optional[Cell]) -> bool:
        if payload is None:
            return False
        return payload.number == self.board_size

    def free(self, payload: Optional[Cell]) -> None:
        return None
