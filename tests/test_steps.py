import pytest

from powerset.automata import samples
from powerset.automata.steps import (
    IncompleteStepError,
    Step,
    StepIndexError,
    StepRecorder,
    Steps,
)
from powerset.automata.subset import build
from powerset.automata.view import Playback


def test_step_count_and_access():
    _, steps = build(samples.contains_ab())
    assert steps.step_count() == 4
    assert len(steps) == 4
    assert steps.step_at(0).subset == "q0"
    assert steps[3].subset == "q0,q3"
    assert [s.subset for s in steps] == ["q0", "q0,q1", "q0,q1,q2", "q0,q3"]


@pytest.mark.parametrize("index", [-1, 4, 100])
def test_step_at_out_of_range(index):
    _, steps = build(samples.contains_ab())
    with pytest.raises(StepIndexError) as excinfo:
        steps.step_at(index)
    assert excinfo.value.index == index
    assert excinfo.value.count == 4


def test_step_index_error_is_index_error():
    _, steps = build(samples.contains_ab())
    with pytest.raises(IndexError):
        steps[4]


def test_step_at_rejects_non_int():
    _, steps = build(samples.contains_ab())
    with pytest.raises(StepIndexError):
        steps.step_at("0")


@pytest.mark.parametrize("index", [True, False, 1.0])
def test_step_at_rejects_bool_and_float(index):
    _, steps = build(samples.contains_ab())
    with pytest.raises(StepIndexError):
        steps.step_at(index)


def test_index_of():
    _, steps = build(samples.a_or_b_star())
    assert steps.index_of("q0,q1,q3") == 2
    with pytest.raises(KeyError):
        steps.index_of("q9")


def test_step_transitions_are_copies():
    _, steps = build(samples.contains_ab())
    step = steps.step_at(0)
    trans = step.transitions
    trans["a"] = "changed"
    assert step.transitions == {"a": "q0,q1", "b": "q0"}
    assert step.symbols() == ["a", "b"]


def test_step_equality():
    assert Step("q0", {"a": "q1"}) == Step("q0", {"a": "q1"})
    assert Step("q0", {"a": "q1"}) != Step("q0", {"a": "q2"})
    assert len({Step("q0", {}), Step("q0", {})}) == 1


def test_recorder_keeps_discovery_order():
    rec = StepRecorder()
    rec.discover("a")
    rec.discover("b")
    rec.finish("b", {"x": "a"})
    rec.finish("a", {"x": "b"})
    steps = rec.freeze()
    assert isinstance(steps, Steps)
    assert steps.subsets() == ["a", "b"]
    assert steps.step_at(1).transitions == {"x": "a"}


def test_recorder_misuse():
    rec = StepRecorder()
    rec.discover("a")
    with pytest.raises(IncompleteStepError):
        rec.discover("a")
    with pytest.raises(IncompleteStepError):
        rec.finish("b", {})
    with pytest.raises(IncompleteStepError):
        rec.freeze()
    rec.finish("a", {})
    with pytest.raises(IncompleteStepError):
        rec.finish("a", {})
    assert len(rec.freeze()) == 1


def test_separate_runs_share_nothing():
    nfa = samples.contains_ab()
    _, steps1 = build(nfa)
    _, steps2 = build(nfa)
    assert steps1 == steps2
    assert steps1 is not steps2


def test_playback_walk():
    dfa, steps = build(samples.contains_ab())
    playback = Playback(steps)
    assert playback.position == 0
    assert playback.counter() == "Step 0 of 4"
    assert not playback.can_retreat

    seen = []
    while playback.can_advance:
        seen.append(playback.advance().subset)
    assert seen == list(dfa.subsets)
    assert playback.position == 4
    assert playback.counter() == "Step 4 of 4"

    with pytest.raises(StepIndexError):
        playback.advance()
    assert playback.position == 4


def test_playback_retreat():
    _, steps = build(samples.contains_ab())
    playback = Playback(steps)
    with pytest.raises(StepIndexError):
        playback.retreat()

    playback.advance()
    playback.advance()
    assert playback.retreat().subset == "q0,q1"
    assert playback.position == 1
    assert [s.subset for s in playback.revealed()] == ["q0"]

    playback.reset()
    assert playback.position == 0
    assert playback.revealed() == []


def test_playback_does_not_touch_steps():
    _, steps = build(samples.contains_ab())
    before = list(steps)
    p1 = Playback(steps)
    p2 = Playback(steps, position=2)
    p1.advance()
    p2.retreat()
    assert list(steps) == before
    assert p1.position == 1
    assert p2.position == 1


def test_playback_bad_position():
    _, steps = build(samples.contains_ab())
    with pytest.raises(StepIndexError):
        Playback(steps, position=5)
    assert Playback(steps, position=4).can_advance is False
