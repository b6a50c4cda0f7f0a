"""Pydantic models describing catalog entries."""

from __future__ import annotations

import re
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Return a lowercase, dash separated identifier for ``text``."""

    return _SLUG_RE.sub("-", text.lower()).strip("-")


def _clean_tags(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    cleaned = (str(tag).strip() for tag in value)  # type: ignore[union-attr]
    return tuple(dict.fromkeys(tag for tag in cleaned if tag))


class EntryLink(BaseModel):
    """Action attached to an entry card."""

    model_config = ConfigDict(frozen=True)

    label: str
    kind: Literal["detail", "external"] = "detail"
    target: Optional[str] = None

    @model_validator(mode="after")
    def _require_external_target(self) -> "EntryLink":
        if self.kind == "external" and not (self.target or "").strip():
            raise ValueError(f"external link '{self.label}' needs a target")
        return self


class Entry(BaseModel):
    """One catalog item (project or credential)."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    year: str = ""
    summary: str = ""
    details_text: str = ""
    tags: Tuple[str, ...] = ()
    primary_tag: Optional[str] = None
    links: Tuple[EntryLink, ...] = ()

    @field_validator("year", mode="before")
    @classmethod
    def _year_as_text(cls, value: object) -> str:
        return "" if value is None else str(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _dedupe_tags(cls, value: object) -> tuple[str, ...]:
        return _clean_tags(value)

    @model_validator(mode="before")
    @classmethod
    def _default_primary_tag(cls, data: object) -> object:
        if isinstance(data, dict) and not data.get("primary_tag"):
            tags = _clean_tags(data.get("tags"))
            if tags:
                data = {**data, "primary_tag": tags[0]}
        return data

    @property
    def key(self) -> str:
        return slugify(self.title)

    @property
    def element_id(self) -> str:
        """Identity of the rendered card for this entry."""

        return f"entry:{self.key}"

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def detail_links(self) -> tuple[EntryLink, ...]:
        return tuple(link for link in self.links if link.kind == "detail")

    def external_links(self) -> tuple[EntryLink, ...]:
        return tuple(link for link in self.links if link.kind == "external")


__all__ = ["Entry", "EntryLink", "slugify"]
