"""
Logging setup for mathkit.

Everything logs below the ``mathkit`` logger. ``setup_logging`` attaches a
console handler and optionally a rotating log file to it; the JSON
formatter emits one object per line and copies the optimizer context
(iteration, evaluation count, cost) passed through ``extra``.
"""

import logging
import logging.handlers
import json
import time
import threading
from typing import Dict, Optional, Union, List
from pathlib import Path
from contextlib import contextmanager
import functools

from ..core.config.settings import FittingConfig

PACKAGE_LOGGER = 'mathkit'

# extra attributes set by the optimizers
OPTIMIZER_FIELDS = ('iteration', 'evaluations', 'cost')

TEXT_FORMATS = {
    'standard': '%(asctime)s - %(levelname)s - %(message)s',
    'detailed': '%(asctime)s [%(name)s] %(levelname)s %(module)s.%(funcName)s:%(lineno)d: %(message)s',
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'location': f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update({key: getattr(record, key) for key in OPTIMIZER_FIELDS if hasattr(record, key)})
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


class PerformanceLogger:
    """Wall-clock timers reporting through a logger.

    Timers are keyed by name, so nested operations need distinct names.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._started: Dict[str, float] = {}
        self._lock = threading.Lock()

    def start_timer(self, name: str) -> None:
        with self._lock:
            self._started[name] = time.perf_counter()

    def end_timer(self, name: str, log_level: int = logging.DEBUG) -> float:
        """Stop a timer and log its duration.

        Returns
        -------
        float
            Elapsed seconds, 0.0 if the timer was never started
        """
        with self._lock:
            started = self._started.pop(name, None)
        if started is None:
            self.logger.warning(f"Timer '{name}' not found")
            return 0.0

        elapsed = time.perf_counter() - started
        self.logger.log(log_level, f"Operation '{name}' completed in {elapsed:.3f}s")
        return elapsed

    @contextmanager
    def time_operation(self, name: str, log_level: int = logging.DEBUG):
        self.start_timer(name)
        try:
            yield
        finally:
            self.end_timer(name, log_level)

    def time_function(self, name: Optional[str] = None, log_level: int = logging.DEBUG):
        """Decorate a function so that each call is timed.

        The timer defaults to the qualified name of the function.
        """
        def decorator(func):
            label = name or f"{func.__module__}.{func.__name__}"

            @functools.wraps(func)
            def timed(*args, **kwargs):
                with self.time_operation(label, log_level):
                    return func(*args, **kwargs)
            return timed
        return decorator


def create_formatter(format_type: str) -> logging.Formatter:
    """Build the formatter for ``"standard"``, ``"detailed"`` or ``"json"`` output."""
    if format_type == "json":
        return JSONFormatter()
    if format_type not in TEXT_FORMATS:
        raise ValueError(f"Unknown log format type: {format_type}")
    return logging.Formatter(TEXT_FORMATS[format_type])


def setup_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_type: str = "standard",
    max_file_size: int = 10,  # MB
    backup_count: int = 5,
    config: Optional[FittingConfig] = None,
) -> List[logging.Handler]:
    """Configure the ``mathkit`` logger.

    Handlers left by a previous call are closed and replaced.

    Parameters
    ----------
    level : str or int
        Level of the package logger and its handlers
    log_file : str or Path, optional
        Adds a rotating file handler writing to this path
    format_type : str
        One of "standard", "detailed" or "json"
    max_file_size : int
        Size in MB at which the log file is rotated
    backup_count : int
        Rotated files kept
    config : FittingConfig, optional
        Takes precedence for the level; its log file is used when
        ``log_file`` is not given

    Returns
    -------
    list
        Handlers now attached to the package logger
    """
    if config:
        level = config.get_log_level()
        log_file = log_file or config.log_file

    if not isinstance(level, int):
        level = getattr(logging, level.upper())
    formatter = create_formatter(format_type)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)
        old.close()

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            path, maxBytes=max_file_size * 1024 * 1024, backupCount=backup_count))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.debug(f"Logging configured at level {logging.getLevelName(level)}")
    return handlers
