"""CLI package.

The ``cli`` sub-package contains the Click application used to inspect
and exercise command registries from a shell. It should import only
from the public subpackages of the parent package.
"""
from __future__ import annotations
