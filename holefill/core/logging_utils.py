"""Logging utilities for holefill.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All holefill code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Union

_ROOT_NAME = 'holefill'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_holefill_root(stream: Optional[IO[str]] = None) -> logging.Logger:
    """Ensure the 'holefill' logger has a single stream handler and is isolated
    from the process root logger. Returns the 'holefill' logger.
    """
    root = logging.getLogger(_ROOT_NAME)
    # NullHandlers added by the package __init__ would swallow records
    for h in list(root.handlers):
        if isinstance(h, logging.NullHandler):
            root.removeHandler(h)
    streams = [h for h in root.handlers if isinstance(h, logging.StreamHandler)]
    if stream is not None:
        for h in streams:
            root.removeHandler(h)
        streams = []
    if not streams:
        handler = logging.StreamHandler(stream=stream or sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    if not isinstance(value, int):
        return default
    return value


def configure_logging(level: Union[str, int] = 'INFO', stream: Optional[IO[str]] = None) -> None:
    """Configure the 'holefill' logger family level and output stream.

    This does NOT modify the process root logger.
    """
    root = _ensure_holefill_root(stream)
    root.setLevel(_to_level(level))


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'holefill' namespace.

    Without a level the logger is left at NOTSET so it inherits from the
    'holefill' parent configured via configure_logging().
    """
    _ensure_holefill_root()
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + '.'):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    if level is not None:
        log.setLevel(_to_level(level))
    else:
        log.setLevel(logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
