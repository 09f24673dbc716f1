"""
Word list builder

Merges word sources into the sorted, deduplicated word list used for lookups.

Supported sources:
1. Plain word lists - one word per line, '#' starts a comment
2. Hunspell dictionaries (*.dic) - first line is the entry count, affix
   flags after '/' are dropped
3. gzip-compressed versions of the above (*.gz)

The result is NOT filtered to umlaut words: lookups rely on the full list.
"""

import gzip
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Iterator, List, Set, Union


# ============ Sources ============

class WordSource(ABC):
    """Word source base class"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def words(self) -> Iterator[str]:
        pass

    def _lines(self) -> Iterator[str]:
        opener = gzip.open if self.path.suffix == '.gz' else open
        with opener(self.path, 'rt', encoding='utf-8') as f:
            for line in f:
                yield line.rstrip('\r\n')


class PlainSource(WordSource):
    """One word per line"""

    @property
    def name(self) -> str:
        return f"plain:{self.path.name}"

    def words(self) -> Iterator[str]:
        for line in self._lines():
            line = line.strip()
            if line and not line.startswith('#'):
                yield line


class HunspellSource(WordSource):
    """Hunspell .dic file"""

    @property
    def name(self) -> str:
        return f"hunspell:{self.path.name}"

    def words(self) -> Iterator[str]:
        lines = self._lines()
        # First line holds the approximate entry count
        next(lines, None)
        for line in lines:
            word = line.split('/', 1)[0].strip()
            if word and not word.startswith('#'):
                yield word


def open_source(path: Union[str, Path]) -> WordSource:
    """Pick the source type from the file name"""
    path = Path(path)
    stem = path.name[:-3] if path.name.endswith('.gz') else path.name
    if stem.endswith('.dic'):
        return HunspellSource(path)
    return PlainSource(path)


# ============ Build ============

def is_word(text: str) -> bool:
    """Entries must be single words made of letters"""
    return bool(text) and text.isalpha()


def merge_words(sources: Iterable[WordSource]) -> List[str]:
    """Collect, deduplicate and sort (by code point) the words of all sources"""
    seen: Set[str] = set()
    for source in sources:
        seen.update(w for w in source.words() if is_word(w))
    return sorted(seen)


def build_word_list(sources: Iterable[Union[str, Path]], output: Union[str, Path]) -> int:
    """
    Build a word list file.

    Args:
        sources: source files (plain, hunspell, optionally gzip-compressed)
        output: destination path

    Returns:
        Number of words written
    """
    words = merge_words(open_source(p) for p in sources)

    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, 'w', encoding='utf-8', newline='\n') as f:
        f.write('\n'.join(words))
        if words:
            f.write('\n')

    return len(words)
