"""CLI entry point for mb-userdb."""

from pathlib import Path
from typing import Annotated

import typer

from mb_userdb.app_context import AppContext
from mb_userdb.commands.group import group
from mb_userdb.commands.user import user
from mb_userdb.config import Config
from mb_userdb.log import setup_logging
from mb_userdb.output import Output
from mb_userdb.resolver import Resolver

app = typer.Typer(no_args_is_help=True)


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    config_path: Annotated[Path | None, typer.Option("--config", help="Config file path.")] = None,
    socket_path: Annotated[Path | None, typer.Option("--socket", help="Identity service socket path.")] = None,
    timeout: Annotated[float | None, typer.Option("--timeout", min=0.001, help="Socket timeout in seconds.")] = None,
) -> None:
    """Resolve users and groups through the systemd userdb service."""
    cfg = Config.build(config_path, socket_path=socket_path, timeout=timeout)
    if cfg.log_path is not None:
        setup_logging(cfg.log_path)
    ctx.obj = AppContext(out=Output(json_mode=json_output), resolver=Resolver(cfg), cfg=cfg)


# KEY may be a negative id such as -5, which click would otherwise parse as an option
_KEY_SETTINGS = {"ignore_unknown_options": True}

app.command(context_settings=_KEY_SETTINGS)(user)
app.command(context_settings=_KEY_SETTINGS)(group)

# Short aliases
app.command("u", hidden=True, context_settings=_KEY_SETTINGS)(user)
app.command("g", hidden=True, context_settings=_KEY_SETTINGS)(group)
