from powerset.automata import samples
from powerset.automata.fsa import NFA
from powerset.automata.subset import build
from powerset.automata.view import (
    Edge,
    Node,
    Playback,
    Row,
    dfa_edges,
    dfa_nodes,
    dfa_table,
    merge_edges,
    nfa_edges,
    nfa_nodes,
    nfa_table,
    step_edges,
)


def test_merge_edges():
    edges = merge_edges(
        [("q0", "b", "q1"), ("q1", "a", "q0"), ("q0", "a", "q1"), ("q0", "b", "q1")]
    )
    assert edges == [Edge("q0", "q1", "a,b"), Edge("q1", "q0", "a")]


def test_nfa_nodes():
    nodes = nfa_nodes(samples.contains_ab())
    assert [n.id for n in nodes] == ["q0", "q1", "q2", "q3"]
    assert nodes[0] == Node("q0", "q0", True, False)
    assert nodes[3].accepting
    assert not nodes[3].initial


def test_nfa_edges_merge_symbols():
    edges = {(e.source, e.dest): e.label for e in nfa_edges(samples.contains_ab())}
    assert edges[("q0", "q0")] == "a,b"
    assert edges[("q0", "q1")] == "a"
    assert edges[("q3", "q3")] == "b"


def test_nfa_edges_epsilon_label():
    nfa = samples.a_or_b_star()
    edges = {(e.source, e.dest): e.label for e in nfa_edges(nfa)}
    assert edges[("q0", "q1")] == "ε"
    assert edges[("q2", "q0")] == "ε"
    assert edges[("q2", "q2")] == "a,b"
    edges = {(e.source, e.dest): e.label for e in nfa_edges(nfa, epsilon_label="eps")}
    assert edges[("q0", "q1")] == "eps"


def test_dfa_nodes():
    dfa, _ = build(samples.contains_ab())
    nodes = dfa_nodes(dfa)
    assert [n.label for n in nodes] == ["{q0}", "{q0,q1}", "{q0,q1,q2}", "{q0,q3}"]
    assert nodes[0].initial
    assert [n.accepting for n in nodes] == [False, False, False, True]


def test_dfa_edges():
    dfa, _ = build(samples.a_or_b_star())
    edges = dfa_edges(dfa)
    assert Edge("q0,q1,q2,q3", "q0,q1,q2,q3", "a,b") in edges
    assert Edge("q0,q1", "q0,q1,q2", "a") in edges
    # One edge per pair
    pairs = [(e.source, e.dest) for e in edges]
    assert len(pairs) == len(set(pairs))


def test_step_edges_match_dfa_edges():
    dfa, steps = build(samples.contains_ab())
    assert step_edges(steps) == dfa_edges(dfa)
    assert step_edges(steps, 0) == []
    assert step_edges(steps, 1) == [Edge("q0", "q0,q1", "a"), Edge("q0", "q0", "b")]


def test_nfa_table():
    rows = nfa_table(samples.a_or_b_star())
    assert rows[0] == Row("q0", "ε", "q1")
    assert Row("q1", "a", "q1, q2") in rows
    assert len(rows) == 9


def test_nfa_table_sorts_targets():
    nfa = NFA(["q0", "q1", "q2"], ["a"], {"q0": {"a": ["q2", "q0", "q1"]}}, "q0")
    assert nfa_table(nfa) == [Row("q0", "a", "q0, q1, q2")]


def test_dfa_table_includes_missing_transitions():
    nfa = samples.contains_ab()
    dfa, _ = build(nfa)
    rows = dfa_table(dfa)
    assert len(rows) == len(dfa.subsets) * len(dfa.alphabet)
    assert rows[0] == Row("{q0}", "a", "{q0,q1}")
    assert rows[1] == Row("{q0}", "b", "{q0}")


def test_dfa_table_none_marker():
    nfa = NFA(["p", "q"], ["a", "b"], {"p": {"a": ["q"]}}, "p", ["q"])
    dfa, _ = build(nfa)
    assert dfa_table(dfa) == [
        Row("{p}", "a", "{q}"),
        Row("{p}", "b", "-"),
        Row("{q}", "a", "-"),
        Row("{q}", "b", "-"),
    ]
    assert dfa_table(dfa, none="none")[1].dest == "none"


def test_playback_view():
    dfa, steps = build(samples.contains_ab())
    playback = Playback(steps)
    assert playback.nodes(dfa) == []
    assert playback.edges() == []

    playback.advance()
    playback.advance()
    assert [n.id for n in playback.nodes(dfa)] == ["q0", "q0,q1"]
    assert playback.edges() == step_edges(steps, 2)

    playback.retreat()
    assert [n.id for n in playback.nodes(dfa)] == ["q0"]
