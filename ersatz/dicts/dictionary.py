"""
Word list service

The word list is a UTF-8 blob with one word per line, sorted ascending by
code point and free of duplicates. Lookups binary-search the blob in place
using line boundaries, so no list of entries is ever built.
"""

import os
from pathlib import Path
from typing import Iterator, List, Optional, Union

# Bundled German word list
DEFAULT_DICT_PATH = Path(__file__).parent / 'data' / 'de.txt'

SEPARATOR = b'\n'


def binary_search_uneven(needle: bytes, haystack: bytes, sep: bytes = SEPARATOR) -> bool:
    """
    Exact line match in a sorted, separator-delimited blob.

    Entries have unequal lengths, so the search range is narrowed by line
    boundary offsets rather than by index arithmetic.

    Args:
        needle: the line to look for (without separator)
        haystack: sorted blob without a trailing separator
        sep: line separator

    Returns:
        True if ``needle`` is one of the lines
    """
    low, high = 0, len(haystack)

    # Invariant: ``low`` is the start of a line, ``high`` is the end of one
    while low < high:
        mid = (low + high) // 2

        start = haystack.rfind(sep, low, mid)
        start = low if start == -1 else start + 1

        end = haystack.find(sep, mid, high)
        end = high if end == -1 else end

        line = haystack[start:end]
        if line == needle:
            return True
        if line < needle:
            low = end + 1
        else:
            high = start
    return False


class WordList:
    """Immutable sorted word list"""

    def __init__(self, blob: Union[bytes, str], source: str = "<memory>"):
        if isinstance(blob, str):
            blob = blob.encode('utf-8')
        # Normalize line endings and drop the trailing separator
        self.blob: bytes = blob.replace(b'\r\n', SEPARATOR).rstrip(SEPARATOR)
        self.source = source

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None, verify: bool = False) -> "WordList":
        """
        Load a word list from disk.

        Args:
            path: word list file; defaults to $ERSATZ_DICT or the bundled list
            verify: check sort order, uniqueness and completeness after loading

        Raises:
            FileNotFoundError: the file does not exist
            ValueError: ``verify`` is set and the word list is malformed
        """
        path = Path(path or os.getenv('ERSATZ_DICT') or DEFAULT_DICT_PATH)
        if not path.exists():
            raise FileNotFoundError(f"Word list not found: {path}")

        with open(path, 'rb') as f:
            words = cls(f.read(), source=str(path))

        if verify:
            problems = words.verify()
            if problems:
                raise ValueError(f"Malformed word list {path}: " + "; ".join(problems))
        return words

    def __contains__(self, word: str) -> bool:
        if not word:
            return False
        return binary_search_uneven(word.encode('utf-8'), self.blob)

    def __iter__(self) -> Iterator[str]:
        if not self.blob:
            return iter(())
        return iter(self.blob.decode('utf-8').split('\n'))

    def __len__(self) -> int:
        if not self.blob:
            return 0
        return self.blob.count(SEPARATOR) + 1

    def __repr__(self):
        return f"WordList(source={self.source!r}, bytes={len(self.blob)})"

    def verify(self) -> List[str]:
        """
        Check the word list invariants.

        Returns:
            Human-readable problems; empty if the word list is fine
        """
        problems = []
        previous = None
        has_ascii = False

        for lineno, word in enumerate(self, 1):
            if not word:
                problems.append(f"line {lineno}: empty line")
                continue
            if word.isascii():
                has_ascii = True
            if previous is not None:
                if word == previous:
                    problems.append(f"line {lineno}: duplicate entry {word!r}")
                elif word < previous:
                    problems.append(f"line {lineno}: {word!r} sorts before {previous!r}")
            previous = word

        if not has_ascii:
            problems.append(
                "no ASCII-only entries: the word list looks filtered to special "
                "characters, but the full list (including non-umlaut words) is required"
            )
        return problems

