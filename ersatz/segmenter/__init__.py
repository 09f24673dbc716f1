# Word segmentation

from .segmenter import State, StateMachine, Transition, is_word_char
from .words import DIGRAPHS, Replacement, Word, apply_replacements

__all__ = [
    'State',
    'StateMachine',
    'Transition',
    'is_word_char',
    'DIGRAPHS',
    'Replacement',
    'Word',
    'apply_replacements',
]
