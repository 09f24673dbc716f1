"""
Validity oracle

Decides whether a candidate spelling is an admissible German word:
1. lowercase words must be in the word list as they are
2. UPPERCASE and MiXeD words are titlecased first
3. Titlecase words are nouns, sentence-initial lowercase words or compounds

Results are memoized per exact input string.
"""

from typing import List, Optional

from ..dicts.dictionary import WordList
from .cache import LRUCache
from .casing import WordCasing, classify_casing, titlecase
from .logging import get_engine_logger

logger = get_engine_logger()


class Validator:
    """Casing- and compound-aware word validity check"""

    def __init__(self, words: WordList, cache_size: int = 1024, max_compound_length: int = 64):
        self.words = words
        self.cache = LRUCache(cache_size)
        self.max_compound_length = max_compound_length

    def is_valid(self, word: str) -> bool:
        casing = classify_casing(word)
        if casing is None:
            # Empty, or characters we cannot judge (digits, emoji, other scripts)
            return False

        cached = self.cache.get(word)
        if cached is not None:
            return cached

        valid = self._check(word, casing)
        self.cache.put(word, valid)
        return valid

    def _check(self, word: str, casing: WordCasing) -> bool:
        if casing is WordCasing.ALL_LOWERCASE:
            # Adjectives, verbs, ...; nouns never occur all lowercase
            return word in self.words

        if casing in (WordCasing.ALL_UPPERCASE, WordCasing.MIXED):
            # "ABENTEUER" -> "Abenteuer", "üBeRTrIeBeN" -> "Übertrieben"
            tc = titlecase(word)
            if classify_casing(tc) is not WordCasing.TITLECASE:
                logger.error(f"Titlecased '{word}' to '{tc}', which is not titlecase; treating as invalid")
                return False
            return self.is_valid(tc)

        # Titlecase: a noun ("Haus"), a sentence-initial word ("Gut gemacht!")
        # or a compound ("Hausüberfall")
        return (
            word in self.words
            or self.is_valid(word.lower())
            or self.is_compound_word(word)
        )

    # ===== Compound words =====

    def _is_head(self, prefix: str) -> bool:
        # Heads are plain word-list entries; nested compounds are found through the suffix
        return prefix in self.words or prefix.lower() in self.words

    def _find_split(self, word: str) -> Optional[int]:
        """Index of the first accepted split, trying the longest prefix first"""
        if len(word) > self.max_compound_length:
            return None

        for i in range(len(word) - 1, 0, -1):
            prefix, suffix = word[:i], word[i:]
            if not self._is_head(prefix):
                continue
            # Later parts are checked as they would stand alone: "dübel" -> "Dübel"
            if self.is_valid(titlecase(suffix)):
                logger.debug(f"Compound split '{word}' -> '{prefix}' + '{suffix}'")
                return i
        return None

    def is_compound_word(self, word: str) -> bool:
        """Whether ``word`` is a concatenation of at least two valid words"""
        return self._find_split(word) is not None

    def decompose(self, word: str) -> Optional[List[str]]:
        """
        Parts of a compound word as they appear in it.

        "Mauerdübelkübel" -> ["Mauer", "dübel", "kübel"]

        Returns:
            The parts, or None if ``word`` is not a compound
        """
        i = self._find_split(word)
        if i is None:
            return None

        prefix, suffix = word[:i], word[i:]
        head = titlecase(suffix)
        if head in self.words or head.lower() in self.words:
            return [prefix, suffix]

        rest = self.decompose(head)
        if rest is None or sum(map(len, rest)) != len(suffix):
            return [prefix, suffix]

        parts = [prefix]
        cursor = 0
        for part in rest:
            parts.append(suffix[cursor:cursor + len(part)])
            cursor += len(part)
        return parts
