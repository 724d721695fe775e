#!/usr/bin/env python3
"""Example: Quickstart — cmdtree

Minimal working example: register a small command tree, run a pre-run
check, then dispatch the process arguments.

Usage:
    python examples/01_quickstart.py
    python examples/01_quickstart.py deploy web --env prod
    python examples/01_quickstart.py db migrate up

Requirements:
    pip install cmdtree
"""
from __future__ import annotations

from collections.abc import Mapping

import click

import cmdtree

DEPLOY_FLAGS = cmdtree.OptionSet(
    "deploy",
    [
        click.Option(["--env"], default="staging", help="Target environment"),
        click.Option(["--dry-run"], is_flag=True, default=False),
    ],
)


def check(config: cmdtree.AppConfig, args: Mapping[str, str]) -> None:
    print(f"{config.name} {config.version}: configuration looks fine")


def deploy(config: cmdtree.AppConfig, args: Mapping[str, str]) -> None:
    mode = "would deploy" if DEPLOY_FLAGS["dry_run"] else "deploying"
    print(f"{mode} {args['service']} to {DEPLOY_FLAGS['env']}")


def migrate(config: cmdtree.AppConfig, args: Mapping[str, str]) -> None:
    print(f"running migration {args['direction']}")


COMMANDS = {
    "check": cmdtree.Cmd(action=check, pre_run=True, summary="Validate configuration"),
    "deploy": cmdtree.Cmd(
        action=deploy, args=("service",), options=DEPLOY_FLAGS, summary="Deploy a service"
    ),
    "db": cmdtree.Cmd(
        summary="Database tasks",
        children={"migrate": cmdtree.Cmd(action=migrate, args=("direction",))},
    ),
}


def main() -> None:
    print(f"cmdtree version: {cmdtree.__version__}")
    app = cmdtree.new(COMMANDS, cmdtree.AppConfig(name="quickstart", version="1.0"))

    # Step 1: Only commands marked pre_run may run in the pre-run pass
    if app.pre_run(["check"]) != 0:
        raise SystemExit(1)

    # Step 2: Dispatch the real arguments; no arguments prints the help listing
    cmdtree.exit_with(app)


if __name__ == "__main__":
    main()
