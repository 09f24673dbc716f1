"""
Logging for the engine, the HTTP service and the command line

Everything goes to stderr, stdout carries the substituted text. Files and
JSON lines are switched on through the environment:

    ERSATZ_LOG_LEVEL     DEBUG, INFO, WARNING, ... (default INFO)
    ERSATZ_LOG_TO_FILE   write <name>.log and <name>_error.log to ERSATZ_LOG_DIR
    ERSATZ_LOG_DIR       default: <project>/logs
    ERSATZ_LOG_JSON      one JSON object per line instead of plain text

Context such as the request id or the word being decided is passed with
``extra=`` and becomes a field of its own in JSON output.
"""

import os
import sys
import time
import logging
from dataclasses import dataclass
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

import orjson


PROJECT_ROOT = Path(__file__).parent.parent.parent
LOG_DIR = Path(os.getenv('ERSATZ_LOG_DIR', PROJECT_ROOT / 'logs'))

# Record attributes set through ``extra=``
CONTEXT_FIELDS = (
    # api
    'request_id', 'method', 'path', 'status_code', 'duration_ms',
    # engine
    'word', 'candidate', 'candidates_tried',
)

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s'


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ('0', 'false', 'no', 'off', '')


@dataclass
class LogSettings:
    """Logging defaults, usually read from the environment"""
    level: str = 'INFO'
    to_file: bool = False
    json: bool = False
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    @classmethod
    def from_env(cls) -> "LogSettings":
        return cls(
            level=os.getenv('ERSATZ_LOG_LEVEL', 'INFO'),
            to_file=_env_flag('ERSATZ_LOG_TO_FILE', False),
            json=_env_flag('ERSATZ_LOG_JSON', False),
        )


class JsonFormatter(logging.Formatter):
    """One JSON object per record, context fields included"""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            'time': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                data[field] = value

        if record.exc_info:
            data['exception'] = self.formatException(record.exc_info)

        return orjson.dumps(data).decode('utf-8')


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable lines.

    Records of a request are prefixed with its id; level names are
    coloured when ``color`` is set. Both apply to a copy of the record,
    so other handlers see it unchanged.
    """

    LEVEL_COLORS = {
        'DEBUG': '36',
        'INFO': '32',
        'WARNING': '33',
        'ERROR': '31',
        'CRITICAL': '35',
    }

    def __init__(self, fmt: str = CONSOLE_FORMAT, color: bool = False):
        super().__init__(fmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, 'request_id', None)
        if not self.color and request_id is None:
            return super().format(record)

        record = logging.makeLogRecord(record.__dict__)
        if request_id is not None:
            record.msg = f"[{request_id}] {record.getMessage()}"
            record.args = None
        code = self.LEVEL_COLORS.get(record.levelname)
        if self.color and code:
            record.levelname = f"\033[{code}m{record.levelname:<8}\033[0m"
        return super().format(record)


def _console_handler(json_format: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(ConsoleFormatter(color=sys.stderr.isatty()))
    return handler


def _file_handlers(name: str, settings: LogSettings, json_format: bool) -> List[logging.Handler]:
    """<name>.log with everything, <name>_error.log with errors only"""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    formatter = JsonFormatter() if json_format else logging.Formatter(FILE_FORMAT)

    handlers = []
    for suffix, level in (('', logging.DEBUG), ('_error', logging.ERROR)):
        handler = RotatingFileHandler(
            LOG_DIR / f'{name}{suffix}.log',
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding='utf-8',
        )
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handlers.append(handler)
    return handlers


def setup_logging(
    name: str = 'ersatz',
    level: Optional[str] = None,
    log_to_file: Optional[bool] = None,
    log_to_console: bool = True,
    json_format: Optional[bool] = None,
    settings: Optional[LogSettings] = None,
) -> logging.Logger:
    """
    Configure a logger, replacing any handlers it already has.

    Args:
        name: logger name
        level: overrides ``settings.level``
        log_to_file: overrides ``settings.to_file``
        log_to_console: write to stderr
        json_format: overrides ``settings.json``
        settings: defaults (from the environment if not given)

    Returns:
        The configured logger
    """
    settings = settings or LogSettings.from_env()
    level = level or settings.level
    if log_to_file is None:
        log_to_file = settings.to_file
    if json_format is None:
        json_format = settings.json

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_to_console:
        logger.addHandler(_console_handler(json_format))
    if log_to_file:
        for handler in _file_handlers(name, settings, json_format):
            logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str = 'ersatz') -> logging.Logger:
    """Get a logger, configuring it on first use"""
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logging(name)
    return logger


def log_execution_time(logger: Optional[logging.Logger] = None):
    """Decorator: log each call's duration, also as ``duration_ms``"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or get_logger()
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = (time.perf_counter() - start) * 1000
                log.error(
                    f"{func.__name__} failed after {elapsed:.2f}ms: {e}",
                    extra={'duration_ms': round(elapsed, 2)},
                )
                raise
            elapsed = (time.perf_counter() - start) * 1000
            log.debug(f"{func.__name__} done in {elapsed:.2f}ms", extra={'duration_ms': round(elapsed, 2)})
            return result
        return wrapper
    return decorator


def get_api_logger() -> logging.Logger:
    """Logger for the HTTP service"""
    return get_logger('ersatz.api')


def get_engine_logger() -> logging.Logger:
    """Logger for the substitution engine"""
    return get_logger('ersatz.engine')
