"""Session-state helpers binding a :class:`ContentBrowser` to a Streamlit session."""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from typing import Any, Optional

from showcase.browser import ContentBrowser, HostServices
from showcase.config import Settings

LOG = logging.getLogger(__name__)

SESSION_KEY = "showcase_browser"
JUMP_KEY = "showcase_pending_jump"
CLIPBOARD_KEY = "showcase_clipboard"


class SessionScrollService:
    """Scroll requests become a pending anchor jump consumed by the next render."""

    def __init__(self, store: MutableMapping[str, Any]) -> None:
        self._store = store

    def scroll_to(self, landmark: str) -> None:
        self._store[JUMP_KEY] = landmark


class SessionClipboard:
    """Streamlit cannot write the OS clipboard; the text is shown in a copyable block instead."""

    def __init__(self, store: MutableMapping[str, Any]) -> None:
        self._store = store

    def write_text(self, text: str) -> None:
        self._store[CLIPBOARD_KEY] = text


def session_host(store: MutableMapping[str, Any]) -> HostServices:
    # No visibility signals or timers in a Streamlit session.
    return HostServices(scroll=SessionScrollService(store), clipboard=SessionClipboard(store))


def get_browser(
    store: MutableMapping[str, Any],
    settings_loader: Optional[Callable[[], Settings]] = None,
) -> ContentBrowser:
    """Return the session's browser, building and mounting it on first use."""

    browser = store.get(SESSION_KEY)
    if not isinstance(browser, ContentBrowser):
        settings = settings_loader() if settings_loader else None
        browser = ContentBrowser.from_settings(settings, session_host(store))
        browser.mount()
        store[SESSION_KEY] = browser
        LOG.debug("Created browser for new session")
    return browser


def reset_browser(store: MutableMapping[str, Any]) -> None:
    browser = store.pop(SESSION_KEY, None)
    if isinstance(browser, ContentBrowser):
        browser.unmount()
    store.pop(JUMP_KEY, None)
    store.pop(CLIPBOARD_KEY, None)


def consume_pending_jump(store: MutableMapping[str, Any]) -> Optional[str]:
    return store.pop(JUMP_KEY, None)


def clipboard_text(store: MutableMapping[str, Any]) -> Optional[str]:
    return store.get(CLIPBOARD_KEY)


__all__ = [
    "CLIPBOARD_KEY",
    "JUMP_KEY",
    "SESSION_KEY",
    "SessionClipboard",
    "SessionScrollService",
    "clipboard_text",
    "consume_pending_jump",
    "get_browser",
    "reset_browser",
    "session_host",
]
