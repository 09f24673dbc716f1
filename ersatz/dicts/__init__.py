# Word list (data + service)

from .dictionary import DEFAULT_DICT_PATH, WordList, binary_search_uneven
from .build import build_word_list, merge_words, open_source

__all__ = [
    'DEFAULT_DICT_PATH',
    'WordList',
    'binary_search_uneven',
    'build_word_list',
    'merge_words',
    'open_source',
]
