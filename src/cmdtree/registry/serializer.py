"""Registry serialization for inspection.

Converts a command registry to a plain dict/list structure and from
there to JSON or YAML.  The conversion is one-way: actions are callables
and option sets are externally owned, so only their presence and flag
names are recorded.

Usage
-----
::

    from cmdtree.registry.serializer import RegistrySerializer

    serializer = RegistrySerializer()
    data = serializer.to_dict(app.commands)
    print(serializer.to_yaml(app.commands))
"""
from __future__ import annotations

import json
from collections.abc import Mapping

import yaml

from cmdtree.registry.nodes import Cmd


class RegistrySerializer:
    """Converts a ``Cmd`` mapping into JSON-compatible data."""

    def to_dict(self, cmds: Mapping[str, Cmd]) -> dict[str, object]:
        """Serialize a registry to a dict keyed by command name."""
        return {name: self._cmd_to_dict(cmds[name]) for name in sorted(cmds)}

    def _cmd_to_dict(self, cmd: Cmd) -> dict[str, object]:
        return {
            "summary": cmd.summary,
            "pre_run": cmd.pre_run,
            "args": list(cmd.args),
            "options": cmd.options.names() if cmd.options is not None else None,
            "has_action": cmd.action is not None,
            "children": self.to_dict(cmd.children),
        }

    def to_json(self, cmds: Mapping[str, Cmd], indent: int = 2) -> str:
        """Serialize a registry to a JSON string."""
        return json.dumps(self.to_dict(cmds), indent=indent)

    def to_yaml(self, cmds: Mapping[str, Cmd]) -> str:
        """Serialize a registry to a YAML string."""
        return yaml.safe_dump(self.to_dict(cmds), sort_keys=False, allow_unicode=True)
