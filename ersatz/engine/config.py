from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class EngineConfig:
    """Engine configuration"""
    cache_size: int = 1024            # validity cache capacity
    dict_path: Optional[str] = None   # None: $ERSATZ_DICT or the bundled list
    verify_dict: bool = False         # check word list invariants on load
    max_replacements: int = 12        # above this, words are left as they are
    max_compound_length: int = 64     # longer words are not decomposed


@dataclass
class WordResult:
    """Decision for one word"""
    original: str
    text: str
    candidates_tried: int = 0

    @property
    def changed(self) -> bool:
        return self.text != self.original


@dataclass
class EngineOutput:
    """Engine output"""
    raw_text: str = ""
    text: str = ""
    words: List[WordResult] = field(default_factory=list)
    metadata: Dict = field(default_factory=dict)
