"""Logging helpers for calcstate.

Adds a ``TRACE`` level below ``DEBUG``:

    TRACE =  5  — every key press, every action ignored by the current state
    DEBUG = 10  — state transitions, resolved computations
    INFO  = 20  — CLI session start/stop

Importing this module once registers the level and ``Logger.trace()``::

    import calcstate.log
    logger = logging.getLogger(__name__)
    logger.trace("pressed %r", key)
"""

from __future__ import annotations

import logging

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")

LEVEL_NAMES: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _trace(self: logging.Logger, message: object, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)  # type: ignore[attr-defined]


logging.Logger.trace = _trace  # type: ignore[attr-defined]


def parse_level(name: str) -> int:
    """Map a level name such as ``"trace"`` or ``"INFO"`` to its number.

    Raises ``ValueError`` for unknown names.
    """
    try:
        return LEVEL_NAMES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name!r}")
