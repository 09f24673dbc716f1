import time
from itertools import chain
from typing import Dict, List, Optional

from ..dicts.dictionary import WordList
from ..segmenter import StateMachine, Transition, Word
from .config import EngineConfig, EngineOutput, WordResult
from .generator import CandidateGenerator
from .validator import Validator
from .logging import get_engine_logger, log_execution_time

logger = get_engine_logger()

# Fed after the input to close a trailing word; never emitted
SENTINEL = None


class GermanEngine:
    """
    German orthography engine

    Turns ASCII digraphs back into umlauts and ß wherever that yields a
    valid German word:
    - the segmenter splits the input into words and everything else
    - every non-empty combination of a word's digraph replacements is tried
    - the first valid candidate wins, otherwise the word stays as it is
    """

    def __init__(self, config: EngineConfig = None, words: Optional[WordList] = None):
        self.config = config or EngineConfig()

        # Modules
        self.words = words
        self.validator = None
        self.generator = None

        # Statistics
        self.stats = {'total': 0, 'words': 0, 'replaced': 0, 'total_ms': 0}

        self._init_modules()

    @log_execution_time(logger)
    def _init_modules(self):
        if self.words is None:
            self.words = WordList.load(self.config.dict_path, verify=self.config.verify_dict)

        self.validator = Validator(
            self.words,
            cache_size=self.config.cache_size,
            max_compound_length=self.config.max_compound_length,
        )
        self.generator = CandidateGenerator(self.config.max_replacements)

        logger.info(f"German engine ready: {self.words.source} ({len(self.words.blob)} bytes)")

    def substitute(self, text: str) -> str:
        """Main entry point: ``text`` with digraphs replaced where valid"""
        return self.process(text).text

    def process(self, text: str) -> EngineOutput:
        """Like ``substitute``, with per-word decisions and timing"""
        start = time.perf_counter()
        self.stats['total'] += 1
        logger.debug(f"Working on input {text!r}")

        output: List[str] = []
        results: List[WordResult] = []
        machine = StateMachine()

        for char in chain(text, [SENTINEL]):
            transition = machine.transition(char)

            if transition is Transition.EXTERNAL:
                if char is not SENTINEL:
                    output.append(char)
            elif transition is Transition.EXITED:
                result = self._decide(machine.current_word)
                results.append(result)
                output.append(result.text)

                # The character that closed the word
                if char is not SENTINEL:
                    output.append(char)

        elapsed = (time.perf_counter() - start) * 1000
        self.stats['total_ms'] += elapsed
        self.stats['words'] += len(results)
        self.stats['replaced'] += sum(1 for r in results if r.changed)

        result_text = ''.join(output)
        logger.debug(f"Final output {result_text!r}")

        return EngineOutput(
            raw_text=text,
            text=result_text,
            words=results,
            metadata={
                'elapsed_ms': round(elapsed, 2),
                'cache_rate': round(self.validator.cache.hit_rate, 3),
            }
        )

    def _decide(self, word: Word) -> WordResult:
        """First valid candidate, or the original word"""
        original = word.content
        tried = 0

        for candidate in self.generator.generate(original, word.replacements):
            tried += 1
            if self.validator.is_valid(candidate):
                logger.debug(
                    f"'{original}' -> '{candidate}' ({tried} candidates tried)",
                    extra={'word': original, 'candidate': candidate, 'candidates_tried': tried},
                )
                return WordResult(original, candidate, tried)

        if tried:
            logger.debug(
                f"No valid replacement for '{original}' ({tried} candidates tried)",
                extra={'word': original, 'candidates_tried': tried},
            )
        return WordResult(original, original, tried)

    def is_valid(self, word: str) -> bool:
        return self.validator.is_valid(word)

    def decompose(self, word: str):
        return self.validator.decompose(word)

    def get_stats(self) -> Dict:
        total = self.stats['total'] or 1
        return {
            'total_requests': self.stats['total'],
            'words': self.stats['words'],
            'replaced': self.stats['replaced'],
            'cache_hit_rate': self.validator.cache.hit_rate,
            'cache_entries': len(self.validator.cache),
            'avg_latency_ms': self.stats['total_ms'] / total,
        }
