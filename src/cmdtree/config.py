"""Application configuration consumed by the dispatcher.

``AppConfig`` is the value an ``App`` is constructed with.  Only
``version`` changes dispatcher behaviour: a non-empty version makes the
``App`` register the synthetic ``help`` command.  ``name`` and
``description`` appear in the help listing.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields


@dataclass(frozen=True)
class AppConfig:
    """Identity of the application being dispatched.

    Parameters
    ----------
    name:
        Program name shown in help output.
    version:
        Version identifier; may be empty.
    description:
        One-line description shown under the help header.
    """

    name: str = "app"
    version: str = ""
    description: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "AppConfig":
        """Build a config from a plain mapping.

        Unknown keys are ignored and ``None`` values fall back to the
        field default; everything else is converted with ``str``.
        """
        known = {f.name for f in fields(cls)}
        values = {
            key: str(value)
            for key, value in data.items()
            if key in known and value is not None
        }
        return cls(**values)
