from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip(
    "streamlit",
    reason="streamlit not installed; install with `pip install -e .[test]`.",
)

from streamlit.testing.v1 import AppTest

APP_PATH = Path(__file__).resolve().parents[2] / "ui" / "streamlit" / "showcase_app.py"


@pytest.fixture()
def app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AppTest:
    monkeypatch.setenv("SHOWCASE_HOME", str(tmp_path))
    at = AppTest.from_file(str(APP_PATH), default_timeout=15)
    at.run()
    assert not at.exception
    return at


def _card_titles(at: AppTest) -> list[str]:
    return [md.value[4:] for md in at.markdown if md.value.startswith("### ")]


def test_initial_render_lists_every_project(app: AppTest) -> None:
    assert len(_card_titles(app)) == 6
    browser = app.session_state["showcase_browser"]
    assert browser.mounted
    assert all(card.revealed for card in browser.view().cards)


def test_search_and_tag_filter(app: AppTest) -> None:
    app.text_input(key="showcase_query").input("ozark").run()
    assert _card_titles(app) == ["Ozark (LMS Dashboard)"]

    app.text_input(key="showcase_query").input("").run()
    app.selectbox(key="showcase_tag").select("Java").run()
    assert _card_titles(app) == ["HR Management & Payroll System"]


def test_detail_overlay_open_and_back(app: AppTest) -> None:
    app.button(key="link-ozark-lms-dashboard-0").click().run()
    assert [sub.value for sub in app.subheader] == ["Ozark (LMS Dashboard)"]

    app.button(key="overlay-back").click().run()
    assert not app.exception
    assert app.session_state["showcase_browser"].selected is None
    assert [sub.value for sub in app.subheader] == []


def test_copy_email_shows_copyable_block(app: AppTest) -> None:
    app.button(key="copy-email-contact").click().run()
    assert [block.value for block in app.code] == ["ifrad.hossain04@gmail.com"]
