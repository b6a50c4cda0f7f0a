"""Helpers for running the Showcase browser under Streamlit."""

from __future__ import annotations

from .cli import DEFAULT_APP_PATH, main

__all__ = ["DEFAULT_APP_PATH", "main"]
