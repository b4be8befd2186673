"""Errors raised while loading planner input."""

from __future__ import annotations

from pathlib import Path


class ScenarioError(ValueError):
    """A scenario file exists but does not describe a valid snapshot."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(f"Invalid scenario {path}: {detail}")
        self.path = path
        self.detail = detail
