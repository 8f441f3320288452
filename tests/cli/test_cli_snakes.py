from __future__ import annotations

import re

import pytest

from markov_engine.application.cli import snakes
from markov_engine.domain.drivers.errors import USAGE_ERROR_SNAKES
from markov_engine.infrastructure.observability.logging import metrics

CELL = re.compile(r"\[(\d+)\]")


def test_prints_requested_games(capsys) -> None:
    assert snakes.main(["3", "4"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("\nRandom Walk 1: [1] -> ")
    games = out.strip("\n").split("\n")
    assert [game.split(":")[0] for game in games] == [f"Random Walk {i}" for i in range(1, 5)]
    for game in games:
        cells = [int(number) for number in CELL.findall(game)]
        assert cells[0] == 1
        assert all(1 <= number <= 100 for number in cells)
        assert len(cells) <= 61


def test_game_reaching_last_cell_ends_there(capsys) -> None:
    snakes.main(["8", "30"])

    for game in capsys.readouterr().out.strip("\n").split("\n"):
        if "[100]" in game:
            tail = game[game.index("[100]"):]
            assert tail in ("[100]", "[100][100]")


def test_same_seed_replays_output(capsys) -> None:
    snakes.main(["21", "3"])
    first = capsys.readouterr().out
    snakes.main(["21", "3"])
    second = capsys.readouterr().out

    assert first == second


def test_zero_paths(capsys) -> None:
    assert snakes.main(["1", "0"]) == 0
    assert capsys.readouterr().out == "\n"


def test_negative_paths_print_usage(capsys) -> None:
    assert snakes.main(["1", "-1"]) == 1
    assert capsys.readouterr().out.strip() == USAGE_ERROR_SNAKES


@pytest.mark.parametrize("argv", [[], ["1"], ["1", "two"]])
def test_missing_or_malformed_arguments_exit(argv) -> None:
    with pytest.raises(SystemExit):
        snakes.main(argv)


def test_run_metrics(capsys) -> None:
    snakes.main(["2", "5"])

    summary = metrics.get_metrics_summary()
    assert summary["walks_generated"] == 5
    assert summary["registry_size"] == 100
