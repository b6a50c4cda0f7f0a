from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from showcase.catalog import (
    ALL_TAG,
    CatalogError,
    CatalogStore,
    Entry,
    EntryLink,
    build_tag_index,
    load_catalog,
    slugify,
)


def test_bundled_catalog_loads_in_order(catalog: CatalogStore) -> None:
    titles = [entry.title for entry in catalog]
    assert titles[0] == "Ozark (LMS Dashboard)"
    assert titles[-1] == "Cosmic Fusion"
    assert len(catalog) == 6


def test_bundled_credentials_section(credentials: CatalogStore) -> None:
    assert [entry.title for entry in credentials] == [
        "IBM AI Engineering",
        "Google UX Design",
        "Google IT Support",
    ]


def test_tag_index_starts_with_all_and_keeps_first_seen_order(catalog: CatalogStore) -> None:
    tags = catalog.tags
    assert tags[0] == ALL_TAG
    assert tags[1:5] == ("React", "UI/UX", "Dashboard", "State")
    assert len(tags) == len(set(tags))
    assert "Java" in tags and "Three.js" in tags


def test_tag_index_of_empty_catalog_is_only_all() -> None:
    assert CatalogStore().tags == (ALL_TAG,)
    assert build_tag_index([]) == (ALL_TAG,)


def test_entry_defaults_primary_tag_and_dedupes_tags() -> None:
    entry = Entry(title="Sample", tags=["Python", " Python ", "", "CLI"])
    assert entry.tags == ("Python", "CLI")
    assert entry.primary_tag == "Python"
    assert entry.key == "sample"
    assert entry.element_id == "entry:sample"


def test_entry_is_immutable() -> None:
    entry = Entry(title="Frozen")
    with pytest.raises(ValidationError):
        entry.title = "Thawed"  # type: ignore[misc]


def test_external_link_requires_target() -> None:
    with pytest.raises(ValidationError):
        EntryLink(label="GitHub", kind="external")
    link = EntryLink(label="GitHub", kind="external", target="https://example.org")
    assert link.target == "https://example.org"


def test_entry_link_partitions(catalog: CatalogStore) -> None:
    rickby = catalog.get(slugify("Rickby (AI Voice Calling Bot)"))
    assert rickby is not None
    assert rickby.detail_links() == ()
    assert [link.label for link in rickby.external_links()] == ["GitHub"]


def test_duplicate_keys_are_rejected() -> None:
    with pytest.raises(CatalogError):
        CatalogStore([Entry(title="Same Name"), Entry(title="same  name")])


def test_store_lookup_and_membership(catalog: CatalogStore) -> None:
    ozark = catalog.get("ozark-lms-dashboard")
    assert ozark is not None
    assert ozark in catalog
    assert catalog.index_of(ozark) == 0
    assert catalog.get("missing") is None


def test_load_catalog_from_custom_file(tmp_path: Path) -> None:
    path = tmp_path / "catalog.yaml"
    path.write_text(
        "projects:\n  - title: One\n    tags: [A]\n  - title: Two\n    year: 2024\n",
        encoding="utf-8",
    )
    store = load_catalog(path)
    assert [entry.title for entry in store] == ["One", "Two"]
    assert store.entries[1].year == "2024"
    assert len(load_catalog(path, section="credentials")) == 0


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "projects: {title: not-a-list}\n",
        "projects:\n  - summary: missing title\n",
        "projects: [unclosed\n",
    ],
)
def test_load_catalog_rejects_malformed_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(path)


def test_load_catalog_rejects_unknown_section() -> None:
    with pytest.raises(CatalogError):
        load_catalog(section="blog")


def test_missing_catalog_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "nope.yaml")
