"""Application context shared across CLI commands."""

from dataclasses import dataclass

import typer

from mb_userdb.config import Config
from mb_userdb.output import Output
from mb_userdb.resolver import Resolver


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared application state passed through Typer context."""

    out: Output
    resolver: Resolver
    cfg: Config


def use_context(ctx: typer.Context) -> AppContext:
    """Extract application context from Typer context."""
    result: AppContext = ctx.obj
    return result
