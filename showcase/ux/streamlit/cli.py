"""``showcase-streamlit``: run the portfolio page under ``streamlit run``."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from showcase.boot.logging import configure_logging

LOG = logging.getLogger(__name__)

APP_ENV_VAR = "SHOWCASE_APP"
DEFAULT_APP_PATH = (
    Path(__file__).resolve().parents[3] / "ui" / "streamlit" / "showcase_app.py"
)


def find_app(explicit: str | None = None) -> Path:
    """Locate the page script: explicit argument, then ``SHOWCASE_APP``, then the bundled page."""

    requested = explicit or os.environ.get(APP_ENV_VAR)
    if requested:
        script = Path(requested).expanduser()
        if not script.is_absolute():
            script = Path.cwd() / script
    else:
        script = DEFAULT_APP_PATH
    if not script.is_file():
        raise FileNotFoundError(f"Showcase page script not found: {script}")
    return script


def streamlit_argv(script: Path, extra: Sequence[str] = ()) -> list[str]:
    return ["streamlit", "run", str(script), *extra]


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()

    args = list(sys.argv[1:] if argv is None else argv)
    explicit = args.pop(0) if args and not args[0].startswith("-") else None
    try:
        script = find_app(explicit)
    except FileNotFoundError as exc:
        raise SystemExit(str(exc)) from exc

    from streamlit.web import cli as stcli

    LOG.info("Launching Showcase page %s", script)
    saved_argv, sys.argv = sys.argv, streamlit_argv(script, args)
    try:
        stcli.main()
    except SystemExit as exc:
        return int(exc.code or 0)
    finally:
        sys.argv = saved_argv
    return 0


__all__ = ["APP_ENV_VAR", "DEFAULT_APP_PATH", "find_app", "main", "streamlit_argv"]
