"""Shared Click option decorators for sitepub commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import click

F = TypeVar("F", bound=Callable[..., object])


def examples_option(examples: str) -> Callable[[F], F]:
    """Add an eager ``--examples`` flag that prints *examples* and exits.

    Keeps ``--help`` short while usage recipes (env overrides, dry runs)
    stay one flag away.
    """

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return click.option(
        "--examples",
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show_examples,
        help="Show usage examples.",
    )
