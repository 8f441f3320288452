from __future__ import annotations

import pytest

from markov_engine.infrastructure.randomness.random_source import RandomSource


def test_same_seed_same_sequence() -> None:
    first, second = RandomSource(42), RandomSource(42)

    assert [first.randrange(1000) for _ in range(50)] == [second.randrange(1000) for _ in range(50)]


def test_draws_stay_in_range() -> None:
    source = RandomSource(0)

    assert {source.randrange(3) for _ in range(300)} == {0, 1, 2}
    assert source.randrange(1) == 0


def test_reseed_restarts_sequence() -> None:
    source = RandomSource(9)
    expected = [source.randrange(100) for _ in range(10)]

    source.randrange(100)
    source.reseed(9)

    assert [source.randrange(100) for _ in range(10)] == expected
    assert source.seed == 9
    assert repr(source) == "RandomSource(seed=9)"


@pytest.mark.parametrize("stop", [0, -4])
def test_empty_range_rejected(stop: int) -> None:
    with pytest.raises(ValueError):
        RandomSource(1).randrange(stop)
