"""Flask UI and JSON API on top of the fuzzy search Engine."""
from __future__ import annotations

from .web import app, main

__all__ = ["app", "main"]
