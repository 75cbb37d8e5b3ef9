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
Reads automata from the plain-text form used by the conversion front end.

Transitions are written one per line as ``state,symbol=target1,target2``;
the symbol ``e`` stands for an epsilon transition. Lines that cannot be read
are skipped, so callers that need strict validation must check their input
before calling :func:`parse_nfa`.
"""

from loguru import logger

from powerset.automata.fsa import EPSILON, NFA

# Token that marks an epsilon transition in transition text
EPSILON_TOKEN = "e"
# Separator between items of a list (states, symbols, targets)
LIST_SEP = ","
# Separator between the state/symbol pair and the targets of a transition
TARGET_SEP = "="


class MissingInputError(ValueError):
    """
    Exception raised when a required input field is blank.

    Attributes:
        field (str): The name of the missing field.
    """

    def __init__(self, field):
        self.field = field
        super().__init__(f"Missing required input: {field}")


def parse_list(text, sep=LIST_SEP):
    """
    Splits a separated list, stripping whitespace and dropping empty items.

    Example:
        >>> parse_list(" q0, q1,,q2 ")
        ['q0', 'q1', 'q2']
    """
    return [item.strip() for item in text.split(sep) if item.strip()]


def parse_transitions(
    text, epsilon=EPSILON_TOKEN, _list_sep=LIST_SEP, _target_sep=TARGET_SEP
):
    """
    Parses transition lines into a transition relation.

    Args:
        text (str): One transition per line, ``state,symbol=t1,t2,...``.
        epsilon (str, optional): The symbol that marks an epsilon transition.
            Defaults to "e".

    Returns:
        tuple: ``(transitions, symbols)`` where ``transitions`` maps each
        state to a dictionary of labels and target lists, with epsilon
        stored under :data:`~powerset.automata.fsa.EPSILON`, and ``symbols``
        is the list of non-epsilon symbols in the order they first appear.

    Repeated lines for the same state and symbol add to the same target
    list. A line is skipped if it does not contain exactly one target
    separator, if its left side is not exactly a state and a symbol, or if it
    has no non-empty target.

    Example:
        >>> parse_transitions("q0,a=q0,q1\\nq0,e=q2")
        ({'q0': {'a': ['q0', 'q1'], <EPSILON>: ['q2']}}, ['a'])
    """
    transitions = {}
    symbols = []
    for lineno, line in enumerate(text.strip().splitlines(), 1):
        parts = line.split(_target_sep)
        if len(parts) != 2:
            logger.debug("Skipping transition line {}: {!r}", lineno, line)
            continue
        left = [item.strip() for item in parts[0].split(_list_sep)]
        targets = parse_list(parts[1], _list_sep)
        if len(left) != 2 or not all(left) or not targets:
            logger.debug("Skipping transition line {}: {!r}", lineno, line)
            continue

        state, symbol = left
        if symbol == epsilon:
            label = EPSILON
        else:
            label = symbol
            if symbol not in symbols:
                symbols.append(symbol)
        transitions.setdefault(state, {}).setdefault(label, []).extend(targets)
    return transitions, symbols


def parse_nfa(
    states, alphabet, transitions, start, accepting="", epsilon=EPSILON_TOKEN
):
    """
    Builds an :class:`~powerset.automata.fsa.NFA` from the text fields of the
    conversion form.

    Args:
        states (str): Comma-separated state names.
        alphabet (str): Comma-separated input symbols, in the order the
            construction should try them.
        transitions (str): Transition lines, see :func:`parse_transitions`.
        start (str): The start state.
        accepting (str, optional): Comma-separated accepting states.
        epsilon (str, optional): The symbol that marks an epsilon transition.

    Returns:
        NFA: The automaton.

    Raises:
        MissingInputError: If the states, alphabet, transitions or start
            field is blank, or if the states or alphabet field holds
            no item once separators and the epsilon symbol are removed.

    Symbols used in the transitions but missing from ``alphabet`` are kept in
    the transition relation but never followed by the construction. The
    epsilon symbol is dropped from the alphabet if it is listed there.
    """
    fields = [
        ("states", states),
        ("alphabet", alphabet),
        ("transitions", transitions),
        ("start", start),
    ]
    for name, value in fields:
        if not value or not value.strip():
            raise MissingInputError(name)

    symbols = parse_list(alphabet)
    if epsilon in symbols:
        logger.warning("Dropping epsilon symbol {!r} from the alphabet", epsilon)
        symbols = [s for s in symbols if s != epsilon]
    if not symbols:
        raise MissingInputError("alphabet")
    names = parse_list(states)
    if not names:
        raise MissingInputError("states")

    trans, _ = parse_transitions(transitions, epsilon=epsilon)
    return NFA(
        names,
        symbols,
        trans,
        start.strip(),
        parse_list(accepting),
    )
