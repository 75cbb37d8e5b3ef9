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
Breadth-first subset construction.

:func:`build` turns an :class:`~powerset.automata.fsa.NFA` into a
:class:`~powerset.automata.fsa.DFA` whose states are canonical subset ids,
and records one :class:`~powerset.automata.steps.Step` per discovered subset.
Each call works on its own queue and discovered set, so separate calls never
share state.
"""

from collections import deque

from loguru import logger

from powerset.automata.fsa import DFA, subset_id, subset_members
from powerset.automata.steps import StepRecorder
from powerset.util import now


class Construction:
    """
    The result of one construction run.

    Unpacks as ``dfa, steps = build(nfa)``.

    Attributes:
        dfa (DFA): The deterministic automaton.
        steps (Steps): The recorded steps, in discovery order.
    """

    def __init__(self, dfa, steps):
        self.dfa = dfa
        self.steps = steps

    def __iter__(self):
        yield self.dfa
        yield self.steps

    def __repr__(self):
        return "<%s %r %r>" % (type(self).__name__, self.dfa, self.steps)


def build(nfa):
    """
    Converts an NFA to a DFA with the subset construction.

    Starting from the epsilon closure of the NFA's start state, subsets are
    taken from a FIFO queue. For each symbol of the alphabet, in declared
    order, the targets of every member state are collected and closed under
    epsilon transitions. A non-empty result that has not been seen before is
    appended to the discovery order and queued; an empty result leaves the
    DFA without a transition for that pair.

    A start state missing from the declared states, and transition targets
    that have no outgoing edges, are treated as ordinary states.

    Args:
        nfa (NFA): The automaton to convert.

    Returns:
        Construction: The DFA and the recorded steps.

    Example:
        >>> from powerset.automata import samples
        >>> dfa, steps = build(samples.contains_ab())
        >>> dfa.initial
        'q0'
        >>> steps.step_count()
        4
    """
    t = now()
    start = subset_id(nfa.start())
    alphabet = nfa.alphabet
    logger.debug(
        "Building DFA from {!r}, start subset {!r}, {} symbols",
        nfa,
        start,
        len(alphabet),
    )

    recorder = StepRecorder()
    order = [start]
    seen = {start}
    recorder.discover(start)
    queue = deque([start])
    transitions = {}
    edgecount = 0

    while queue:
        current = queue.popleft()
        members = subset_members(current)
        xs = transitions[current] = {}
        for label in alphabet:
            new_state = subset_id(nfa.next_state(members, label))
            if not new_state:
                continue
            if new_state not in seen:
                seen.add(new_state)
                order.append(new_state)
                recorder.discover(new_state)
                queue.append(new_state)
            xs[label] = new_state
            edgecount += 1
        recorder.finish(current, xs)

    dfa = DFA(order, alphabet, transitions, nfa.final_states)
    steps = recorder.freeze()
    logger.debug(
        "Built DFA with {} subsets and {} transitions in {:0.4f} s",
        len(order),
        edgecount,
        now() - t,
    )
    return Construction(dfa, steps)
