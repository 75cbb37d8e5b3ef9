# Copyright 2012 Matt Chaput. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY MATT CHAPUT ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL MATT CHAPUT OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of Matt Chaput.

"""
Structured view data for graph and table renderers.

Nothing here draws anything. The functions return lists of plain
namedtuples that a renderer can turn into graph nodes, labelled edges, or
table rows. Multiple symbols between the same pair of states are always
merged into one edge whose label is the sorted, comma-joined symbols.
"""

from collections import namedtuple

from powerset.automata.fsa import EPSILON
from powerset.automata.steps import StepIndexError

# How epsilon transitions are labelled in edges and tables
EPSILON_LABEL = "ε"
# Table cell for a missing DFA transition
NONE_MARKER = "-"
# Label of a DFA node
SUBSET_FORMAT = "{{{0}}}"

Node = namedtuple("Node", ["id", "label", "initial", "accepting"])
Edge = namedtuple("Edge", ["source", "dest", "label"])
Row = namedtuple("Row", ["source", "symbol", "dest"])


def _label(label, epsilon_label):
    return epsilon_label if label is EPSILON else label


def merge_edges(triples):
    """
    Merges ``(source, label, dest)`` triples into one :class:`Edge` per
    ``(source, dest)`` pair. Pairs keep the order they first appear in.

    Example:
        >>> merge_edges([("q0", "b", "q1"), ("q0", "a", "q1")])
        [Edge(source='q0', dest='q1', label='a,b')]
    """
    labels = {}
    for src, label, dest in triples:
        labels.setdefault((src, dest), set()).add(label)
    return [
        Edge(src, dest, ",".join(sorted(names)))
        for (src, dest), names in labels.items()
    ]


def subset_label(sid):
    return SUBSET_FORMAT.format(sid)


def nfa_nodes(nfa):
    """One node per state of the NFA, declared states first."""
    return [
        Node(state, state, state == nfa.initial, state in nfa.final_states)
        for state in nfa.all_states
    ]


def nfa_edges(nfa, epsilon_label=EPSILON_LABEL):
    return merge_edges(
        (src, _label(label, epsilon_label), dest)
        for src, label, dest in nfa.triples()
    )


def dfa_nodes(dfa, subsets=None):
    """
    One node per subset of the DFA, in discovery order.

    Args:
        dfa (DFA): The automaton.
        subsets (iterable, optional): Only produce nodes for these subsets,
            in the given order.
    """
    if subsets is None:
        subsets = dfa.subsets
    return [
        Node(sid, subset_label(sid), sid == dfa.initial, dfa.is_final(sid))
        for sid in subsets
    ]


def dfa_edges(dfa):
    return merge_edges(
        (src, label, dest)
        for src in dfa.subsets
        for label, dest in dfa.transitions[src].items()
    )


def step_edges(steps, count=None):
    """
    Returns the merged edges of the first ``count`` steps (all steps if
    ``count`` is None).
    """
    if count is None:
        count = steps.step_count()
    return merge_edges(
        (step.subset, label, dest)
        for step in (steps.step_at(i) for i in range(count))
        for label, dest in step.transitions.items()
    )


def nfa_table(nfa, epsilon_label=EPSILON_LABEL):
    """
    One row per (state, label) pair with at least one transition. Epsilon
    rows use ``epsilon_label`` as their symbol, and the targets are sorted
    and joined with ``", "``, since the NFA stores them as sets.
    """
    return [
        Row(src, _label(label, epsilon_label), ", ".join(sorted(dests)))
        for src, xs in nfa.transitions.items()
        for label, dests in xs.items()
    ]


def dfa_table(dfa, none=NONE_MARKER):
    """
    One row per (subset, symbol) pair, in discovery order and then alphabet
    order. Pairs without a transition get the ``none`` marker as their
    destination.
    """
    rows = []
    for src in dfa.subsets:
        for label in dfa.alphabet:
            dest = dfa.next_state(src, label)
            rows.append(
                Row(
                    subset_label(src),
                    label,
                    none if dest is None else subset_label(dest),
                )
            )
    return rows


class Playback:
    """
    A replay cursor over recorded construction steps.

    The cursor belongs to whoever created it; the :class:`Steps` it reads are
    never changed. ``position`` counts the revealed steps and stays within
    ``[0, len(steps)]``.

    Usage::

        dfa, steps = build(nfa)
        playback = Playback(steps)
        while playback.can_advance:
            playback.advance()
            render(playback.nodes(dfa), playback.edges())
    """

    def __init__(self, steps, position=0):
        self.steps = steps
        if not 0 <= position <= steps.step_count():
            raise StepIndexError(position, steps.step_count())
        self.position = position

    def __repr__(self):
        return "<%s %s>" % (type(self).__name__, self.counter())

    @property
    def can_advance(self):
        return self.position < self.steps.step_count()

    @property
    def can_retreat(self):
        return self.position > 0

    def advance(self):
        """
        Reveals the next step and returns it.

        Raises:
            StepIndexError: If every step is already revealed.
        """
        step = self.steps.step_at(self.position)
        self.position += 1
        return step

    def retreat(self):
        """
        Hides the last revealed step and returns it.

        Raises:
            StepIndexError: If no step is revealed.
        """
        if not self.can_retreat:
            raise StepIndexError(self.position - 1, self.steps.step_count())
        self.position -= 1
        return self.steps.step_at(self.position)

    def reset(self):
        self.position = 0

    def revealed(self):
        return [self.steps.step_at(i) for i in range(self.position)]

    def counter(self):
        return "Step %d of %d" % (self.position, self.steps.step_count())

    def nodes(self, dfa):
        """The DFA nodes of the revealed steps."""
        return dfa_nodes(dfa, [step.subset for step in self.revealed()])

    def edges(self):
        """The merged DFA edges of the revealed steps."""
        return step_edges(self.steps, self.position)
