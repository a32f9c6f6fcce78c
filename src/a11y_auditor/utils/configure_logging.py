# src/a11y_auditor/utils/configure_logging.py
import logging
import sys
from typing import Dict, Optional, Union

from tqdm import tqdm

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"

Level = Union[str, int]


class LogWithTqdm(logging.Handler):
    """
    A logging handler that writes through `tqdm.write()`, so log lines emitted
    while a batch audit progress bar is running do not break the bar.
    """
    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg, file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def _to_level(level: Optional[Level], fallback: int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level if level is not None else fallback


def configure_logger(
        general_level: Optional[Level] = 'WARNING',
        module_specific_levels: Optional[Dict[str, Level]] = None,
        silenced_loggers: Optional[Dict[str, Level]] = None
) -> None:
    """
    Configures the root logger with a tqdm-friendly handler.

    Args:
        general_level: Root level, name or number. Unknown names fall back to WARNING.
        module_specific_levels: e.g. {'a11y_auditor.dom.rules.contrast': 'DEBUG'}
        silenced_loggers: Loggers to muzzle; unknown names fall back to CRITICAL.
    """
    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(general_level, logging.WARNING))

    # Replace handlers so repeated CLI invocations in one process don't duplicate output
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name, level in (module_specific_levels or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.INFO))

    for name, level in (silenced_loggers or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.CRITICAL))
