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
Recorded steps of a subset construction run.

The construction emits one :class:`Step` per discovered subset, in discovery
order. A :class:`StepRecorder` collects them while :func:`build` runs and
freezes them into an immutable :class:`Steps` sequence. Neither class keeps a
"current step": replay position belongs to the caller (see
:class:`powerset.automata.view.Playback`).
"""


class StepIndexError(IndexError):
    """
    Exception raised when a step index falls outside ``[0, step_count())``,
    or when a playback cursor is moved past either end.

    Attributes:
        index (int): The requested index.
        count (int): The number of recorded steps.
    """

    def __init__(self, index, count):
        self.index = index
        self.count = count
        super().__init__(f"Step index {index} out of range for {count} steps")


class IncompleteStepError(Exception):
    """
    Exception raised when a :class:`StepRecorder` is used out of order, for
    example when it is frozen while a discovered subset has not been
    finished yet.
    """

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class Step:
    """
    One step of the construction: a discovered subset and its complete map
    of outgoing transitions.

    Attributes:
        subset (str): The subset id, which is also the DFA state name.
    """

    __slots__ = ("subset", "_items")

    def __init__(self, subset, transitions):
        self.subset = subset
        self._items = tuple(transitions.items())

    def __repr__(self):
        return "%s(%r, %r)" % (type(self).__name__, self.subset, self.transitions)

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and self.subset == other.subset
            and self._items == other._items
        )

    def __hash__(self):
        return hash((self.subset, self._items))

    @property
    def transitions(self):
        """A new dictionary mapping each symbol to its destination subset."""
        return dict(self._items)

    def get(self, symbol, default=None):
        for label, dest in self._items:
            if label == symbol:
                return dest
        return default

    def symbols(self):
        return [label for label, _ in self._items]


class Steps:
    """
    Immutable, index-addressable sequence of :class:`Step` records.
    """

    def __init__(self, steps):
        self._steps = tuple(steps)
        self._index = {step.subset: i for i, step in enumerate(self._steps)}

    def __repr__(self):
        return "<%s %d>" % (type(self).__name__, len(self._steps))

    def __len__(self):
        return len(self._steps)

    def __iter__(self):
        return iter(self._steps)

    def __getitem__(self, index):
        return self.step_at(index)

    def __eq__(self, other):
        return type(self) is type(other) and self._steps == other._steps

    def step_count(self):
        return len(self._steps)

    def step_at(self, index):
        """
        Returns the step at the given position.

        Args:
            index (int): A position in ``[0, step_count())``. Negative
                indexes are not supported, and neither are
                booleans.

        Raises:
            StepIndexError: If the index is out of range.
        """
        count = len(self._steps)
        if isinstance(index, bool) or not isinstance(index, int):
            raise StepIndexError(index, count)
        if not 0 <= index < count:
            raise StepIndexError(index, count)
        return self._steps[index]

    def index_of(self, subset):
        """
        Returns the position of the step for the given subset id.

        Raises:
            KeyError: If the subset was never discovered.
        """
        return self._index[subset]

    def subsets(self):
        return [step.subset for step in self._steps]


class StepRecorder:
    """
    Collects steps during one construction run.

    :meth:`discover` reserves a slot for a subset in discovery order, and
    :meth:`finish` fills it in once every alphabet symbol of that subset has
    been processed. A finished step is never revised.
    """

    def __init__(self):
        self._order = []
        self._finished = {}

    def __len__(self):
        return len(self._order)

    def discover(self, subset):
        if subset in self._finished:
            raise IncompleteStepError(f"Subset {subset!r} was already discovered")
        self._order.append(subset)
        self._finished[subset] = None

    def finish(self, subset, transitions):
        if subset not in self._finished:
            raise IncompleteStepError(f"Subset {subset!r} was never discovered")
        if self._finished[subset] is not None:
            raise IncompleteStepError(f"Subset {subset!r} was already finished")
        step = Step(subset, transitions)
        self._finished[subset] = step
        return step

    def freeze(self):
        """
        Returns the recorded steps as a :class:`Steps` sequence.

        Raises:
            IncompleteStepError: If a discovered subset was not finished.
        """
        pending = [s for s in self._order if self._finished[s] is None]
        if pending:
            raise IncompleteStepError(f"Unfinished subsets: {', '.join(pending)}")
        return Steps(self._finished[s] for s in self._order)
