"""Command registry module.

Exports the command node type, registry validation and the serializer
used to inspect a command tree.
"""
from __future__ import annotations

from cmdtree.registry.nodes import HELP_COMMAND, Action, Cmd, walk
from cmdtree.registry.serializer import RegistrySerializer
from cmdtree.registry.validation import RegistryError, validate_registry

__all__ = [
    "HELP_COMMAND",
    "Action",
    "Cmd",
    "walk",
    "RegistryError",
    "validate_registry",
    "RegistrySerializer",
]
