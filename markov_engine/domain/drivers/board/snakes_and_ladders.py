"""
Snakes and ladders simulator: the board is encoded as a Markov chain whose
walks are random games.

A cell holding a ladder or snake has exactly one transition, to where it
leads. Any other cell has one transition per die face landing on the board.
The last cell has none and ends every walk that reaches it.
"""

from typing import List, Optional, Sequence, TextIO, Tuple
import sys
import structlog

from markov_engine.domain.chain.markov_chain import MarkovChain
from .cell_operations import BOARD_SIZE, Cell

logger = structlog.get_logger(__name__)

DICE_MAX = 6
MAX_GENERATION_LENGTH = 60

# (from, to): a ladder when from < to, a snake otherwise
TRANSITIONS: Tuple[Tuple[int, int], ...] = (
    (13, 4),
    (85, 17),
    (95, 67),
    (97, 58),
    (66, 89),
    (87, 31),
    (57, 83),
    (91, 25),
    (28, 50),
    (35, 11),
    (8, 30),
    (41, 62),
    (81, 43),
    (69, 32),
    (20, 39),
    (33, 70),
    (79, 99),
    (23, 76),
    (15, 47),
    (61, 14),
)


def build_board(
    board_size: int = BOARD_SIZE,
    transitions: Sequence[Tuple[int, int]] = TRANSITIONS
) -> List[Cell]:
    """Create the board cells with their ladders and snakes"""

    cells = [Cell(number=number) for number in range(1, board_size + 1)]
    for source, destination in transitions:
        if not (1 <= source <= board_size and 1 <= destination <= board_size):
            raise ValueError(f"Jump {source}->{destination} leaves a board of {board_size} cells")
        if source < destination:
            cells[source - 1].ladder_to = destination
        else:
            cells[source - 1].snake_to = destination
    return cells


def fill_database(chain: MarkovChain, cells: Sequence[Cell]) -> None:
    """Register every cell, then record its moves"""

    for cell in cells:
        chain.get_or_insert(cell)

    board_size = len(cells)
    for cell in cells:
        from_state = chain.lookup(cell)
        destination = cell.jump_to
        if destination is not None:
            chain.record_transition(from_state, chain.lookup(cells[destination - 1]))
            continue

        for face in range(1, DICE_MAX + 1):
            index_to = cell.number + face - 1
            if index_to >= board_size:
                break
            chain.record_transition(from_state, chain.lookup(cells[index_to]))

    logger.info("Board loaded", cells=board_size, walkable=chain.get_chain_summary()["walkable_states"])


def generate_walks(
    chain: MarkovChain,
    num_paths: int,
    stream: Optional[TextIO] = None,
    max_length: int = MAX_GENERATION_LENGTH
) -> None:
    """Print num_paths games, each starting from the first cell"""

    out = stream or sys.stdout
    for path_number in range(1, num_paths + 1):
        first_state = chain.states[0]
        out.write(f"\nRandom Walk {path_number}: ")
        chain.generate_walk(first_state, max_length)
    out.write("\n")
