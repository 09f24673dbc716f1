from dataclasses import replace

from .config import EngineConfig, EngineOutput, WordResult
from .core import GermanEngine
from .cache import LRUCache
from .casing import WordCasing, classify_casing, titlecase
from .generator import CandidateGenerator, power_set_without_empty
from .validator import Validator
from .logging import setup_logging, get_logger, get_api_logger, get_engine_logger


def create_engine(config: EngineConfig = None, dict_path: str = None) -> GermanEngine:
    """
    Create an engine.

    Args:
        config: engine configuration
        dict_path: word list path (overrides ``config.dict_path``)

    Returns:
        GermanEngine instance
    """
    config = config or EngineConfig()
    if dict_path is not None:
        config = replace(config, dict_path=dict_path)
    return GermanEngine(config)


__all__ = [
    # Engine
    'GermanEngine',
    'create_engine',
    'EngineConfig',
    'EngineOutput',
    'WordResult',
    # Building blocks
    'LRUCache',
    'WordCasing',
    'classify_casing',
    'titlecase',
    'CandidateGenerator',
    'power_set_without_empty',
    'Validator',
    # Logging
    'setup_logging',
    'get_logger',
    'get_api_logger',
    'get_engine_logger',
]
