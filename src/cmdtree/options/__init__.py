"""Option set module.

Flag definitions are plain ``click.Option`` objects grouped into an
``OptionSet`` that a command references.
"""
from __future__ import annotations

from cmdtree.options.option_set import OptionSet

__all__ = ["OptionSet"]
