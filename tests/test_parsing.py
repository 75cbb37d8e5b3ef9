import pytest
from loguru import logger

from powerset.automata import samples
from powerset.automata.fsa import EPSILON
from powerset.automata.parsing import (
    MissingInputError,
    parse_list,
    parse_nfa,
    parse_transitions,
)


@pytest.fixture
def messages():
    records = []
    logger.enable("powerset")
    handler_id = logger.add(lambda m: records.append(m.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
    logger.disable("powerset")


def test_parse_list():
    assert parse_list("q0, q1 ,q2") == ["q0", "q1", "q2"]
    assert parse_list(" , ,") == []
    assert parse_list("a;b", sep=";") == ["a", "b"]


def test_parse_transitions():
    trans, symbols = parse_transitions("q0,a=q0,q1\nq0,b=q0\nq1,e=q2")
    assert trans == {
        "q0": {"a": ["q0", "q1"], "b": ["q0"]},
        "q1": {EPSILON: ["q2"]},
    }
    assert symbols == ["a", "b"]


def test_parse_transitions_strips_whitespace():
    trans, _ = parse_transitions("  q0 , a = q1 , q2  \n")
    assert trans == {"q0": {"a": ["q1", "q2"]}}


def test_parse_transitions_accumulates():
    trans, _ = parse_transitions("q0,a=q1\nq0,a=q2")
    assert trans == {"q0": {"a": ["q1", "q2"]}}


def test_parse_transitions_custom_epsilon():
    trans, symbols = parse_transitions("q0,eps=q1\nq0,e=q2", epsilon="eps")
    assert trans == {"q0": {EPSILON: ["q1"], "e": ["q2"]}}
    assert symbols == ["e"]


@pytest.mark.parametrize(
    "line",
    [
        "q0,a",
        "q0,a=q1=q2",
        "q0=q1",
        "q0,a,b=q1",
        ",a=q1",
        "q0,=q1",
        "q0,a=",
        "q0,a= , ",
        "",
    ],
)
def test_malformed_line_is_skipped(line):
    trans, symbols = parse_transitions("q0,b=q0\n%s\nq1,b=q0" % line)
    assert trans == {"q0": {"b": ["q0"]}, "q1": {"b": ["q0"]}}
    assert symbols == ["b"]


def test_malformed_line_is_logged(messages):
    parse_transitions("q0,a=q1\nnonsense\nq1,a=q0")
    skipped = [r for r in messages if r["level"].name == "DEBUG"]
    assert len(skipped) == 1
    assert "line 2" in skipped[0]["message"]


def test_parse_nfa():
    nfa = parse_nfa(**samples.CONTAINS_AB)
    assert nfa.states == ("q0", "q1", "q2", "q3")
    assert nfa.alphabet == ("a", "b")
    assert nfa.initial == "q0"
    assert nfa.final_states == frozenset(["q3"])
    assert nfa.targets("q0", "a") == frozenset(["q0", "q1"])


def test_parse_nfa_epsilon():
    nfa = samples.a_or_b_star()
    assert nfa.targets("q0", EPSILON) == frozenset(["q1"])
    assert EPSILON not in nfa.alphabet


@pytest.mark.parametrize("field", ["states", "alphabet", "transitions", "start"])
def test_parse_nfa_missing_field(field):
    fields = dict(samples.CONTAINS_AB)
    fields[field] = "  "
    with pytest.raises(MissingInputError) as excinfo:
        parse_nfa(**fields)
    assert excinfo.value.field == field
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize(
    "field, value",
    [
        ("alphabet", "e"),
        ("alphabet", ","),
        ("alphabet", " , "),
        ("alphabet", "e, e"),
        ("states", ","),
        ("states", " , ,"),
    ],
)
def test_parse_nfa_field_empty_after_parsing(field, value):
    fields = dict(samples.CONTAINS_AB)
    fields[field] = value
    with pytest.raises(MissingInputError) as excinfo:
        parse_nfa(**fields)
    assert excinfo.value.field == field


def test_parse_nfa_accepting_optional():
    fields = dict(samples.CONTAINS_AB)
    del fields["accepting"]
    nfa = parse_nfa(**fields)
    assert nfa.final_states == frozenset()


def test_parse_nfa_drops_epsilon_symbol(messages):
    nfa = parse_nfa("q0", "a,e", "q0,e=q0\nq0,a=q0", "q0")
    assert nfa.alphabet == ("a",)
    assert any(r["level"].name == "WARNING" for r in messages)


def test_parse_nfa_all_lines_malformed():
    nfa = parse_nfa("q0,q1", "a", "garbage\nmore garbage", "q0")
    assert nfa.transitions == {}
    assert nfa.to_dfa().subsets == ("q0",)


def test_samples_load():
    assert samples.load("no-epsilon") == samples.contains_ab()
    with pytest.raises(KeyError):
        samples.load("missing")
