"""
Word model

A word is the original text of one letter run plus the digraph spans
("opportunities") that may be replaced by a native German letter.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional


# Digraph -> native letter. The first letter decides the case of the result.
DIGRAPHS: Dict[str, str] = {
    'ae': 'ä', 'aE': 'ä', 'Ae': 'Ä', 'AE': 'Ä',
    'oe': 'ö', 'oE': 'ö', 'Oe': 'Ö', 'OE': 'Ö',
    'ue': 'ü', 'uE': 'ü', 'Ue': 'Ü', 'UE': 'Ü',
    'ss': 'ß', 'sS': 'ß', 'Ss': 'ẞ', 'SS': 'ẞ',
}


@dataclass(frozen=True)
class Replacement:
    """A span of the word that may become a single native letter"""
    start: int
    end: int
    native: str

    def __str__(self):
        return f"{self.start}..{self.end}->{self.native}"


@dataclass
class Word:
    """A closed run of word characters"""
    content: str = ""
    replacements: List[Replacement] = field(default_factory=list)

    def push(self, char: str) -> Optional[Replacement]:
        """
        Append a character and register a replacement if the new suffix is a digraph.

        Returns:
            The newly registered Replacement, or None
        """
        self.content += char

        end = len(self.content)
        start = end - 2
        if start < 0:
            return None

        native = DIGRAPHS.get(self.content[start:end])
        if native is None:
            return None

        # "sss" only yields one opportunity
        if self.replacements and self.replacements[-1].end > start:
            return None

        replacement = Replacement(start, end, native)
        self.replacements.append(replacement)
        return replacement


def apply_replacements(content: str, replacements: Iterable[Replacement]) -> str:
    """
    Apply replacements to the original content.

    Args:
        content: original word
        replacements: non-overlapping spans into ``content``

    Returns:
        The rewritten word; characters outside the spans are kept as given
    """
    parts = []
    cursor = 0
    for r in sorted(replacements, key=lambda r: r.start):
        parts.append(content[cursor:r.start])
        parts.append(r.native)
        cursor = r.end
    parts.append(content[cursor:])
    return ''.join(parts)
