"""
ersatz - German umlaut and ß restoration

Turns "Aepfel", "Suess" and "SCHLIESSEN" back into "Äpfel", "Süß" and
"SCHLIEẞEN" wherever the result is a valid German word.
"""

__version__ = "0.1.0"

import threading
from typing import Optional

from ersatz.engine import (
    GermanEngine,
    create_engine,
    EngineConfig,
    EngineOutput,
    WordResult,
    Validator,
    WordCasing,
    classify_casing,
    titlecase,
)
from ersatz.dicts import WordList

_engine: Optional[GermanEngine] = None
_engine_lock = threading.Lock()


def get_engine() -> GermanEngine:
    """Get the default engine singleton"""
    global _engine
    with _engine_lock:
        if _engine is None:
            _engine = create_engine()
    return _engine


def substitute(text: str) -> str:
    """Restore umlauts and ß in ``text`` using the default engine"""
    return get_engine().substitute(text)


__all__ = [
    "__version__",
    "substitute",
    "get_engine",
    # Engine
    "GermanEngine",
    "create_engine",
    "EngineConfig",
    "EngineOutput",
    "WordResult",
    "Validator",
    # Casing
    "WordCasing",
    "classify_casing",
    "titlecase",
    # Word list
    "WordList",
]
