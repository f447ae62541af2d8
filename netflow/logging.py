"""Logging helpers for netflow.

Every module logs through a child of the ``netflow`` logger. That logger owns
one stream handler, installed on first use. The algorithms report each
augmentation, relabel and gap at DEBUG, so ``enable_debug_logging()`` is the
quickest way to trace a run.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "netflow"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Set on the handler that setup_root_logger installs
_HANDLER_MARK = "_netflow_handler"


def _package_logger() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER_NAME)


def _installed_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if getattr(h, _HANDLER_MARK, False)]


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Install the netflow handler unless one is already attached.

    Args:
        level: Level for the ``netflow`` logger.
        format_string: Record format, ``DEFAULT_FORMAT`` when omitted.
        handler: Destination handler, a stdout ``StreamHandler`` when omitted.

    Returns:
        The ``netflow`` logger.
    """
    root = _package_logger()
    if _installed_handlers(root):
        return root

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    setattr(handler, _HANDLER_MARK, True)

    root.addHandler(handler)
    root.setLevel(level)
    # Records still reach the stdlib root so pytest's caplog can see them
    root.propagate = True
    return root


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, making sure the netflow handler exists."""
    setup_root_logger()
    return logging.getLogger(name)


def set_global_log_level(level: int) -> None:
    """Set the level of the netflow logger and of its handler."""
    root = setup_root_logger()
    root.setLevel(level)
    for handler in _installed_handlers(root):
        handler.setLevel(level)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def reset_logging() -> None:
    """Detach the netflow handler and clear the level.

    The next ``get_logger`` or ``setup_root_logger`` call installs a fresh one.
    """
    root = _package_logger()
    for handler in _installed_handlers(root):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
