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
Example automata offered by the conversion front end.
"""

from powerset.automata.parsing import parse_nfa

# Strings over {a, b} that contain "ab"
CONTAINS_AB = {
    "states": "q0,q1,q2,q3",
    "alphabet": "a,b",
    "transitions": "\n".join(
        [
            "q0,a=q0,q1",
            "q0,b=q0",
            "q1,a=q2",
            "q1,b=q0",
            "q2,a=q2",
            "q2,b=q3",
            "q3,a=q2",
            "q3,b=q3",
        ]
    ),
    "start": "q0",
    "accepting": "q3",
}

# (a|b)* with epsilon transitions
A_OR_B_STAR = {
    "states": "q0,q1,q2,q3",
    "alphabet": "a,b",
    "transitions": "\n".join(
        [
            "q0,e=q1",
            "q1,a=q1,q2",
            "q1,b=q1,q3",
            "q2,a=q2",
            "q2,b=q2",
            "q3,a=q3",
            "q3,b=q3",
            "q2,e=q0",
            "q3,e=q0",
        ]
    ),
    "start": "q0",
    "accepting": "q0,q1",
}

SAMPLES = {
    "no-epsilon": CONTAINS_AB,
    "with-epsilon": A_OR_B_STAR,
}


def load(name):
    """
    Returns the sample automaton with the given name.

    Raises:
        KeyError: If there is no sample with that name.
    """
    return parse_nfa(**SAMPLES[name])


def contains_ab():
    """NFA without epsilon transitions: strings that contain "ab"."""
    return load("no-epsilon")


def a_or_b_star():
    """NFA with epsilon transitions that accepts (a|b)*."""
    return load("with-epsilon")
