"""
Word casing helpers

Pure functions: classification of a word's letter casing and titlecasing.
"""

from enum import Enum
from typing import Optional


class WordCasing(Enum):
    ALL_LOWERCASE = "all_lowercase"
    ALL_UPPERCASE = "all_uppercase"
    MIXED = "mixed"
    TITLECASE = "titlecase"


def classify_casing(word: str) -> Optional[WordCasing]:
    """
    Classify the casing of a word.

    Returns:
        The casing, or None if the word is empty or contains anything that is
        neither an uppercase nor a lowercase letter (digits, emoji, CJK, ...)
    """
    if not word:
        return None

    uppers = []
    for char in word:
        if char.isupper():
            uppers.append(True)
        elif char.islower():
            uppers.append(False)
        else:
            return None

    first, rest = uppers[0], uppers[1:]
    if first and not any(rest):
        return WordCasing.TITLECASE
    if all(uppers):
        return WordCasing.ALL_UPPERCASE
    if not any(uppers):
        return WordCasing.ALL_LOWERCASE
    return WordCasing.MIXED


def titlecase(word: str) -> str:
    """
    First letter uppercase, the rest lowercase, regardless of the source casing.

    "ABENTEUER" -> "Abenteuer", "üBeRTrIeBeN" -> "Übertrieben"
    """
    if not word:
        return word

    first = word[0].upper()
    # "ß".upper() is "SS"; keep single-character mappings only
    if len(first) != 1:
        first = word[0]
    return first + word[1:].lower()
