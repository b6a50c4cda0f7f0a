"""Root logger setup for Showcase entry points."""

from __future__ import annotations

import logging
import os
from typing import Any

__all__ = ["LEVEL_ENV_VARS", "configure_logging", "level_from_env", "resolve_level"]

LEVEL_ENV_VARS = ("SHOWCASE_LOG_LEVEL", "LOG_LEVEL")

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"


def resolve_level(value: str | int | None) -> int:
    """Turn a level name or number into a ``logging`` level; unknown input means INFO."""

    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper()) if text else None
    return level if isinstance(level, int) else logging.INFO


def level_from_env(environ: dict[str, str] | None = None) -> str | None:
    """First non-blank value among :data:`LEVEL_ENV_VARS`."""

    env = os.environ if environ is None else environ
    return next(
        (env[name] for name in LEVEL_ENV_VARS if (env.get(name) or "").strip()),
        None,
    )


def configure_logging(*, level: str | int | None = None, **kwargs: Any) -> int:
    """Install the Showcase log format on the root logger and return the level used.

    ``level`` wins over the environment. Extra ``kwargs`` go to
    :func:`logging.basicConfig`, which is forced so repeated Streamlit reruns
    do not stack handlers.
    """

    effective = resolve_level(level_from_env() if level is None else level)
    kwargs.setdefault("format", _FORMAT)
    kwargs.setdefault("datefmt", _DATEFMT)
    kwargs.setdefault("force", True)
    logging.basicConfig(level=effective, **kwargs)
    logging.getLogger("showcase").debug(
        "Logging configured at %s", logging.getLevelName(effective)
    )
    return effective
