from __future__ import annotations

import pytest

from markov_engine.domain.chain.random_selector import RandomSelector
from markov_engine.domain.chain.walk_generator import WalkGenerator
from markov_engine.domain.models.chain_state import WalkStatus


def _generator(chain):
    return WalkGenerator(RandomSelector(chain.registry, chain.random_source), chain.operations)


def test_dead_end_start_is_emitted_twice(make_chain, make_operations) -> None:
    ops = make_operations()
    chain = make_chain([], operations=ops)
    y = chain.get_or_insert("Y")

    result = _generator(chain).run(y, 10)

    assert ops.printed == ["Y", "Y"]
    assert result.status is WalkStatus.TERMINATED_DEAD_END
    assert result.emitted == [y.handle, y.handle]


def test_cycle_runs_to_max_length(make_chain, make_operations) -> None:
    ops = make_operations()
    chain = make_chain([("A", "B"), ("B", "A")], operations=ops)

    result = _generator(chain).run(chain.lookup("A"), 5)

    assert ops.printed == ["A", "B", "A", "B", "A"]
    assert result.status is WalkStatus.TERMINATED_MAX_LENGTH
    assert result.length == 5


def test_dead_end_reached_mid_walk(make_chain, make_operations) -> None:
    ops = make_operations()
    chain = make_chain([("a", "b"), ("b", "end")], operations=ops)

    result = _generator(chain).run(chain.lookup("a"), 10)

    assert ops.printed == ["a", "b", "end", "end"]
    assert result.status is WalkStatus.TERMINATED_DEAD_END


def test_dead_end_reached_on_last_step_is_not_repeated(make_chain, make_operations) -> None:
    ops = make_operations()
    chain = make_chain([("a", "b"), ("b", "end")], operations=ops)

    result = _generator(chain).run(chain.lookup("a"), 3)

    assert ops.printed == ["a", "b", "end"]
    assert result.status is WalkStatus.TERMINATED_MAX_LENGTH


def test_max_length_one_emits_only_start(make_chain, make_operations) -> None:
    ops = make_operations()
    chain = make_chain([("a", "b")], operations=ops)

    result = _generator(chain).run(chain.lookup("a"), 1)

    assert ops.printed == ["a"]
    assert result.status is WalkStatus.TERMINATED_MAX_LENGTH


def test_missing_start_uses_uniform_start(make_chain, make_operations) -> None:
    ops = make_operations()
    chain = make_chain([("live", "sink")], operations=ops)
    chain.get_or_insert("island")

    _generator(chain).run(None, 2)

    assert ops.printed[0] == "live"


def test_rejects_non_positive_max_length(make_chain) -> None:
    chain = make_chain([("a", "b")])

    with pytest.raises(ValueError):
        _generator(chain).run(chain.lookup("a"), 0)


def test_is_terminal_is_never_consulted(make_chain, make_operations) -> None:
    ops = make_operations()
    chain = make_chain([("stop.", "go"), ("go", "stop.")], operations=ops)

    _generator(chain).run(chain.lookup("stop."), 6)

    assert ops.terminal_checks == 0
    assert len(ops.printed) == 6


def test_status_moves_through_walking(make_chain) -> None:
    chain = make_chain([("A", "B"), ("B", "A")])
    generator = _generator(chain)
    assert generator.status is WalkStatus.START

    walk = generator.iter_walk(chain.lookup("A"), 3)
    next(walk)
    assert generator.status is WalkStatus.START
    next(walk)
    assert generator.status is WalkStatus.WALKING
    list(walk)
    assert generator.status is WalkStatus.TERMINATED_MAX_LENGTH


@pytest.mark.parametrize("seed", range(12))
@pytest.mark.parametrize("max_length", [1, 2, 5, 13])
def test_walk_length_bounds_and_stop_rule(seed: int, max_length: int, make_chain) -> None:
    edges = [
        ("s0", "s1"), ("s0", "s2"), ("s1", "s0"), ("s1", "s3"),
        ("s2", "s2"), ("s2", "s4"), ("s3", "s1"), ("s0", "s1"),
    ]
    chain = make_chain(edges, seed=seed)
    generator = _generator(chain)

    result = generator.run(chain.lookup("s0"), max_length)
    states = [chain.state(handle) for handle in result.emitted]

    assert 1 <= result.length <= max_length + 1
    if result.status is WalkStatus.TERMINATED_MAX_LENGTH:
        assert result.length == max_length
        assert all(state.out_degree > 0 for state in states[:-1])
    else:
        assert result.status is WalkStatus.TERMINATED_DEAD_END
        assert states[-1] is states[-2]
        assert states[-1].out_degree == 0
        assert all(state.out_degree > 0 for state in states[:-2])
