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
Automaton model for the subset construction.

States and symbols are plain strings. Epsilon transitions are stored under the
reserved :data:`EPSILON` marker, which is not a string and so can never be a
member of an alphabet.

Sets of NFA states are named by their canonical subset id (see
:func:`subset_id`), and those ids double as the state names of the DFA.
"""

import sys

from cached_property import cached_property

# Marker constants


class Marker:
    """
    Represents a marker object.

    Markers are used as labels that can never collide with the string symbols
    of an alphabet.

    Attributes:
        name (str): The name of the marker.

    Example:
        >>> marker = Marker("EPSILON")
        >>> repr(marker)
        '<EPSILON>'
    """

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"<{self.name}>"


EPSILON = Marker("EPSILON")

# Separator used to join member states into a subset id
SUBSET_SEP = ","


def subset_id(states):
    """
    Returns the canonical id of a set of NFA states.

    The id is the member labels sorted with ordinary string comparison and
    joined with :data:`SUBSET_SEP`, so two sets of states get the same id if
    and only if they have the same members, whatever order they were
    collected in. The empty set has the empty id.

    Args:
        states (iterable): The member states.

    Returns:
        str: The canonical id.

    Example:
        >>> subset_id({"q2", "q0", "q1"})
        'q0,q1,q2'
    """
    return SUBSET_SEP.join(sorted(set(states)))


def subset_members(sid):
    """
    Returns the member states of a subset id as a sorted tuple.

    This is the inverse of :func:`subset_id`.

    Example:
        >>> subset_members("q0,q1")
        ('q0', 'q1')
    """
    if not sid:
        return ()
    return tuple(sid.split(SUBSET_SEP))


def closure(seed, transitions):
    """
    Computes the epsilon closure of a set of states.

    The closure is the smallest set that contains every seed state and is
    closed under epsilon transitions. Each state is pushed onto the worklist
    at most once, so the traversal stops after visiting every state reachable
    through epsilon edges.

    Args:
        seed (iterable): The states to start from.
        transitions (dict): The transition relation, mapping each state to a
            dictionary of labels and destination state sets.

    Returns:
        tuple: The states of the closure, sorted. An empty seed gives an
        empty tuple.

    Example:
        >>> closure({"q0"}, {"q0": {EPSILON: {"q1"}}, "q1": {EPSILON: {"q2"}}})
        ('q0', 'q1', 'q2')
    """
    states = set(seed)
    stack = list(states)
    while stack:
        state = stack.pop()
        xs = transitions.get(state)
        if xs and EPSILON in xs:
            for dest in xs[EPSILON]:
                if dest not in states:
                    states.add(dest)
                    stack.append(dest)
    return tuple(sorted(states))


def _check_label(label, what, state=False):
    if not isinstance(label, str):
        raise TypeError(f"{what} must be a string, not {label!r}")
    if not label:
        raise ValueError(f"{what} must not be empty")
    if state and SUBSET_SEP in label:
        raise ValueError(f"{what} {label!r} contains the subset separator")
    return label


def _check_group(labels, what):
    # A bare string would otherwise be read one character per state
    if isinstance(labels, str):
        raise TypeError(
            f"{what} must be an iterable of states, not the string {labels!r}"
        )
    return labels


class NFA:
    """
    Non-deterministic finite automaton with optional epsilon transitions.

    The automaton is built whole and is not modified afterwards. All keys are
    checked here, so a malformed state or symbol fails when the NFA is
    created instead of silently producing an empty lookup during
    construction.

    Construction is lenient about the state set: the start state and every
    state mentioned in the transition relation belong to the automaton even
    if they are missing from ``states`` (see :attr:`all_states`).

    Attributes:
        states (tuple): The declared states, in declared order.
        alphabet (tuple): The input symbols, in declared order. Never
            contains :data:`EPSILON`.
        transitions (dict): Maps each source state to a dictionary of labels
            (symbols or :data:`EPSILON`) and frozensets of destinations.
        initial (str): The start state.
        final_states (frozenset): The accepting states.
    """

    def __init__(self, states, alphabet, transitions, start, accepting=()):
        """
        Args:
            states (iterable): The declared states.
            alphabet (iterable): The input symbols, in the order the subset
                construction should try them.
            transitions (dict): Maps ``state`` to ``{label: destinations}``,
                where ``label`` is a symbol or :data:`EPSILON` and
                ``destinations`` is an iterable of states.
            start (str): The start state.
            accepting (iterable): The accepting states.

        Raises:
            TypeError: If a state or symbol is not a string, or a
                group of states is given as a single string.
            ValueError: If a state or symbol is empty, a state contains the
                subset separator, or the alphabet contains :data:`EPSILON`.
        """
        self.states = tuple(
            dict.fromkeys(
                _check_label(s, "State", state=True)
                for s in _check_group(states, "States")
            )
        )

        symbols = []
        for symbol in alphabet:
            if symbol is EPSILON:
                raise ValueError("The alphabet must not contain EPSILON")
            symbols.append(_check_label(symbol, "Symbol"))
        self.alphabet = tuple(dict.fromkeys(symbols))

        self.transitions = {}
        for src, xs in transitions.items():
            _check_label(src, "State", state=True)
            trans = self.transitions.setdefault(src, {})
            for label, dests in xs.items():
                if label is not EPSILON:
                    _check_label(label, "Symbol")
                dests = frozenset(
                    _check_label(d, "State", state=True)
                    for d in _check_group(dests, "Destinations")
                )
                trans[label] = trans.get(label, frozenset()) | dests

        self.initial = _check_label(start, "State", state=True)
        self.final_states = frozenset(
            _check_label(s, "State", state=True)
            for s in _check_group(accepting, "Accepting states")
        )

    def __repr__(self):
        return "<%s %d states, alphabet=%r>" % (
            type(self).__name__,
            len(self.all_states),
            self.alphabet,
        )

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and self.initial == other.initial
            and self.states == other.states
            and self.alphabet == other.alphabet
            and self.final_states == other.final_states
            and self.transitions == other.transitions
        )

    @cached_property
    def all_states(self):
        """
        Every state of the automaton: the declared states in declared order,
        followed by the start state and any state that only appears in the
        transition relation, sorted.
        """
        extra = {self.initial}
        for src, _, dest in self.triples():
            extra.add(src)
            extra.add(dest)
        extra.difference_update(self.states)
        return self.states + tuple(sorted(extra))

    def triples(self):
        """
        Generates every ``(source state, label, destination state)`` triple.
        """
        for src, trans in self.transitions.items():
            for label, dests in trans.items():
                for dest in sorted(dests):
                    yield src, label, dest

    def targets(self, state, label):
        """Returns the frozenset of states reached from ``state`` on ``label``."""
        return self.transitions.get(state, {}).get(label, frozenset())

    def closure(self, states):
        """Returns the sorted epsilon closure of ``states`` in this NFA."""
        return closure(states, self.transitions)

    def start(self):
        """
        Returns the epsilon closure of the start state as a sorted tuple.
        """
        return self.closure((self.initial,))

    def get_labels(self, states):
        """
        Returns the set of labels on edges leaving any of the given states.

        Example:
            >>> nfa = NFA(["0", "1"], ["a"], {"0": {"a": ["1"]}}, "0")
            >>> nfa.get_labels({"0", "1"})
            {'a'}
        """
        labels = set()
        for state in states:
            labels.update(self.transitions.get(state, ()))
        return labels

    def next_state(self, states, label):
        """
        Returns the sorted epsilon closure of every state reachable from one
        of ``states`` on ``label``. The result is empty when none of the
        states has an edge for the label.
        """
        dests = set()
        for state in states:
            dests.update(self.targets(state, label))
        return self.closure(dests)

    def is_final(self, states):
        """Returns True if any of the given states is accepting."""
        return not self.final_states.isdisjoint(states)

    def accept(self, string, debug=False):
        """
        Returns True if the NFA accepts the given sequence of symbols.

        Args:
            string (iterable): The symbols to read. A ``str`` reads one
                character per symbol.
            debug (bool): Print the state set after each symbol.
        """
        states = self.start()
        for label in string:
            if debug:
                print("  ", subset_id(states), "->", label)
            states = self.next_state(states, label)
            if not states:
                return False
        return self.is_final(states)

    def dump(self, stream=sys.stdout):
        """
        Prints a textual representation of the NFA to the specified stream.
        The start state is marked with ``@`` and accepting destinations with
        ``||``.
        """
        for src in self.all_states:
            beg = "@" if src == self.initial else " "
            print(beg, src, file=stream)
            for label, dests in self.transitions.get(src, {}).items():
                end = "||" if self.is_final(dests) else ""
                print("  ", label, "->", subset_id(dests), end, file=stream)

    def to_dfa(self):
        """
        Converts the NFA to a DFA with the subset construction.

        Returns:
            DFA: The converted DFA. Use
            :func:`powerset.automata.subset.build` to get the construction
            steps as well.
        """
        from powerset.automata.subset import build

        return build(self).dfa


class DFA:
    """
    Deterministic finite automaton produced by the subset construction.

    Every state is a subset id. The transition function is partial: a
    missing entry means the subset has no successor on that symbol, and no
    dead state is added.

    Attributes:
        subsets (tuple): The subset ids in discovery order. The first one is
            the start state.
        alphabet (tuple): The input symbols, in declared order.
        transitions (dict): Maps each subset id to a dictionary of symbols
            and destination subset ids.
        initial (str): The start subset id.
        nfa_final_states (frozenset): The accepting states of the source
            NFA; a subset is accepting if it contains any of them.
    """

    def __init__(self, subsets, alphabet, transitions, nfa_final_states):
        self.subsets = tuple(subsets)
        self.alphabet = tuple(alphabet)
        self.transitions = {
            src: dict(transitions.get(src, {})) for src in self.subsets
        }
        self.initial = self.subsets[0]
        self.nfa_final_states = frozenset(nfa_final_states)

    def __repr__(self):
        return "<%s %d subsets, start=%r>" % (
            type(self).__name__,
            len(self.subsets),
            self.initial,
        )

    def __len__(self):
        return len(self.subsets)

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and self.subsets == other.subsets
            and self.alphabet == other.alphabet
            and self.transitions == other.transitions
            and self.final_states == other.final_states
        )

    @cached_property
    def final_states(self):
        """The accepting subset ids."""
        return frozenset(s for s in self.subsets if self._contains_final(s))

    def _contains_final(self, sid):
        return not self.nfa_final_states.isdisjoint(subset_members(sid))

    def start(self):
        return self.initial

    def is_final(self, state):
        """
        Checks if the specified subset id is an accepting state of the DFA.

        Examples:
            >>> dfa = DFA(["q0", "q0,q1"], ["a"], {"q0": {"a": "q0,q1"}}, {"q1"})
            >>> dfa.is_final("q0,q1")
            True
            >>> dfa.is_final("q0")
            False
        """
        return state in self.final_states

    def next_state(self, src, label):
        """
        Returns the subset reached from ``src`` on ``label``, or None if the
        DFA has no transition for the pair.
        """
        return self.transitions.get(src, {}).get(label)

    def accept(self, string, debug=False):
        state = self.initial
        for label in string:
            if debug:
                print("  ", state, "->", label)
            state = self.next_state(state, label)
            if state is None:
                return False
        return self.is_final(state)

    def reachable_from(self, src, inclusive=True):
        """
        Returns the set of subsets reachable from ``src``.

        Args:
            src (str): The subset id to start from.
            inclusive (bool): Whether to include ``src`` itself.
        """
        stack = [src]
        seen = set()
        while stack:
            state = stack.pop()
            seen.add(state)
            for dest in self.transitions.get(state, {}).values():
                if dest not in seen:
                    stack.append(dest)
        if not inclusive:
            seen.discard(src)
        return seen

    def dump(self, stream=sys.stdout):
        """
        Prints a textual representation of the DFA to the specified stream,
        in discovery order.

        Example:
            >>> dfa = DFA(["q0", "q0,q1"], ["a"], {"q0": {"a": "q0,q1"}}, {"q1"})
            >>> dfa.dump()
            @ q0
               a -> q0,q1 ||
              q0,q1 ||
        """
        for src in self.subsets:
            beg = "@" if src == self.initial else " "
            if self.is_final(src):
                print(beg, src, "||", file=stream)
            else:
                print(beg, src, file=stream)
            xs = self.transitions[src]
            for label in self.alphabet:
                if label in xs:
                    dest = xs[label]
                    end = "||" if self.is_final(dest) else ""
                    print("  ", label, "->", dest, end, file=stream)

    def to_dfa(self):
        return self
