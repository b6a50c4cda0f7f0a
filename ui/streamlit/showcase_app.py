"""Streamlit front-end for the Showcase content browser."""

from __future__ import annotations

import streamlit as st
import streamlit.components.v1 as components

from showcase.browser import BrowserView, CardView
from showcase.config import load_settings
from showcase.ux.streamlit.state import clipboard_text, consume_pending_jump, get_browser

st.set_page_config(page_title="Showcase | Portfolio", layout="wide")

LANDMARK_LABELS = {
    "home": "Home",
    "projects": "Projects",
    "certs": "Certifications",
    "contact": "Contact",
}

browser = get_browser(st.session_state, load_settings)
settings = browser.settings


def _scroll_script(anchor_id: str) -> str:
    return f"""
<script>
(function(){{
  const el = window.parent.document.getElementById("{anchor_id}");
  if (el) {{ el.scrollIntoView({{behavior: "smooth", block: "start"}}); }}
}})();
</script>
"""


def render_nav(view: BrowserView) -> None:
    cols = st.columns(len(view.landmarks) + 1)
    cols[0].markdown("**Ifrad Hossain**  \nFull Stack Developer")
    for col, landmark in zip(cols[1:], view.landmarks):
        col.button(
            LANDMARK_LABELS.get(landmark, landmark.title()),
            key=f"nav-{landmark}",
            type="primary" if landmark == view.active_landmark else "secondary",
            on_click=browser.scroll_to,
            args=(landmark,),
        )


def render_overlay(view: BrowserView) -> None:
    entry = view.overlay
    if entry is None:
        return
    with st.container(border=True):
        st.subheader(entry.title)
        st.caption(" · ".join([entry.year, *entry.tags]))
        st.write(entry.details_text)
        for link in entry.external_links():
            st.link_button(link.label, link.target or "")
        close_col, back_col = st.columns(2)
        close_col.button("Close", key="overlay-close", on_click=browser.close_details)
        back_col.button(
            "Back to Projects", key="overlay-back", on_click=browser.return_to_catalog
        )


def render_card(card: CardView) -> None:
    entry = card.entry
    with st.container(border=True):
        st.markdown(f"### {entry.title}")
        st.caption(" · ".join([entry.year, *entry.tags[:4]]))
        st.write(entry.summary)
        for index, link in enumerate(entry.links):
            if link.kind == "external":
                st.link_button(link.label, link.target or "")
            else:
                st.button(
                    link.label,
                    key=f"link-{entry.key}-{index}",
                    on_click=browser.activate_link,
                    args=(entry.key, index),
                )


def render_home() -> None:
    st.header("Building clean, fast, production-style apps", anchor="home")
    st.write(
        "Full Stack Developer focused on modern UI, reliable backend logic, and real-world systems."
    )
    view_col, copy_col, li_col = st.columns(3)
    view_col.button(
        "View Projects", key="hero-projects", on_click=browser.scroll_to, args=("projects",)
    )
    copy_col.button("Copy Email", key="copy-email-hero", on_click=browser.copy_contact)
    li_col.link_button("LinkedIn", settings.contact.linkedin)


def render_projects(view: BrowserView) -> None:
    st.header("Projects", anchor="projects")
    query_col, tag_col = st.columns([3, 1])
    query = query_col.text_input(
        "Search projects",
        key="showcase_query",
        placeholder="Search (e.g., Ozark, JavaFX, dashboard)...",
    )
    tag = tag_col.selectbox("Filter by tag", view.tags, key="showcase_tag")
    browser.apply_filter(query=query, tag=tag)
    view = browser.view()

    render_overlay(view)
    if view.is_empty:
        st.info("No projects match the current search.")
        return
    columns = st.columns(2)
    for index, card in enumerate(view.cards):
        with columns[index % 2]:
            render_card(card)


def render_certs(view: BrowserView) -> None:
    st.header("Certifications", anchor="certs")
    columns = st.columns(max(1, len(view.credentials)))
    for column, card in zip(columns, view.credentials):
        with column, st.container(border=True):
            st.markdown(f"**{card.entry.title}**")
            st.write(card.entry.summary)
            st.caption(" · ".join(card.entry.tags))


def render_contact() -> None:
    st.header("Contact", anchor="contact")
    st.write(f"Email: {settings.contact.email}")
    st.button("Copy Email", key="copy-email-contact", on_click=browser.copy_contact)
    copied = clipboard_text(st.session_state)
    if copied:
        st.code(copied, language=None)
    github_col, li_col = st.columns(2)
    github_col.link_button("GitHub", settings.contact.github)
    li_col.link_button("LinkedIn", settings.contact.linkedin)


view = browser.view()
render_nav(view)
render_home()
render_projects(view)
render_certs(view)
render_contact()

jump = consume_pending_jump(st.session_state)
if jump:
    components.html(_scroll_script(jump), height=0)
