import itertools
from typing import Iterator, List, Sequence, Tuple

from ..segmenter.words import Replacement, apply_replacements
from .logging import get_engine_logger

logger = get_engine_logger()


def power_set_without_empty(items: Sequence) -> Iterator[Tuple]:
    """
    All non-empty subsets, smallest first.

    Within one size, subsets come in lexicographic order of positions:
    (a,), (b,), (c,), (a, b), (a, c), (b, c), (a, b, c)
    """
    for size in range(1, len(items) + 1):
        yield from itertools.combinations(items, size)


class CandidateGenerator:
    """Candidate spellings of one word, in canonical order"""

    def __init__(self, max_replacements: int = 12):
        self.max_replacements = max_replacements

    def generate(self, content: str, replacements: List[Replacement]) -> Iterator[str]:
        """
        Yield one candidate per non-empty subset of ``replacements``.

        The unmodified word is never yielded. Words with more than
        ``max_replacements`` opportunities yield nothing.
        """
        if len(replacements) > self.max_replacements:
            logger.warning(
                f"'{content}' has {len(replacements)} replacement spots "
                f"(limit {self.max_replacements}), leaving it unchanged"
            )
            return

        ordered = sorted(replacements, key=lambda r: r.start)
        for subset in power_set_without_empty(ordered):
            yield apply_replacements(content, subset)
