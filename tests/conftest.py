"""Shared test fixtures for cmdtree.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import io
from collections.abc import Mapping
from typing import Any

import pytest
from rich.console import Console


class Recorder:
    """Action that remembers every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, dict[str, str]]] = []

    def __call__(self, config: Any, args: Mapping[str, str]) -> None:
        self.calls.append((config, dict(args)))

    @property
    def called(self) -> bool:
        return bool(self.calls)

    @property
    def last_args(self) -> dict[str, str]:
        return self.calls[-1][1]


def _string_console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture()
def recorder() -> Recorder:
    """Return a fresh recording action."""
    return Recorder()


@pytest.fixture()
def console() -> Console:
    """Console writing to an in-memory buffer; read with ``console.file.getvalue()``."""
    return _string_console()


@pytest.fixture()
def err_console() -> Console:
    """In-memory console for error output."""
    return _string_console()


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"
