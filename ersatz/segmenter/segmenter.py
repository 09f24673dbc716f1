"""
Word segmenter

A two-state machine over the input characters:
1. OUTSIDE: between words, characters pass straight through
2. INSIDE: collecting a word and its digraph opportunities

The caller feeds one trailing sentinel (``None``) so that a word at the very
end of the input is closed as well.
"""

from enum import Enum
from typing import Optional

from .words import Word


class State(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"


class Transition(Enum):
    """Outcome of feeding one character"""
    ENTERED = "entered"     # OUTSIDE -> INSIDE
    INTERNAL = "internal"   # INSIDE -> INSIDE
    EXITED = "exited"       # INSIDE -> OUTSIDE, word closed
    EXTERNAL = "external"   # OUTSIDE -> OUTSIDE


def is_word_char(char: Optional[str]) -> bool:
    """Letters of any case (umlauts and ß included) make up words"""
    return char is not None and char.isalpha()


class StateMachine:
    """Segmenter state machine"""

    def __init__(self):
        self.state = State.OUTSIDE
        self.word = Word()
        self._last = None

    def transition(self, char: Optional[str]) -> Transition:
        """Feed one character (or the ``None`` sentinel)"""
        inside = self.state is State.INSIDE

        if is_word_char(char):
            if inside:
                self.word.push(char)
                transition = Transition.INTERNAL
            else:
                self.word = Word(content=char)
                transition = Transition.ENTERED
            self.state = State.INSIDE
        else:
            transition = Transition.EXITED if inside else Transition.EXTERNAL
            self.state = State.OUTSIDE

        self._last = transition
        return transition

    @property
    def current_word(self) -> Word:
        """The word closed by the last transition; only valid right after EXITED"""
        if self._last is not Transition.EXITED:
            raise RuntimeError(
                f"current_word is only available after an exit transition (last: {self._last})"
            )
        return self.word

    def __repr__(self):
        return f"StateMachine(state={self.state.value}, word={self.word!r})"
