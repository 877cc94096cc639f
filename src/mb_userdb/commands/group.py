"""Look up a group."""

import typer

from mb_userdb.app_context import use_context
from mb_userdb.commands.user import NUMERIC_ID
from mb_userdb.errors import UserdbError


def group(ctx: typer.Context, key: str = typer.Argument(help="Group name or numeric gid")) -> None:
    """Look up a group by name or gid."""
    app = use_context(ctx)
    try:
        if NUMERIC_ID.fullmatch(key):
            found = app.resolver.lookup_group_id(key)
        else:
            found = app.resolver.lookup_group(key)
    except UserdbError as e:
        app.out.print_error_and_exit(e.code, str(e))
    if found is None:
        app.out.print_not_found_and_exit("group", key)
    app.out.print_group(found)
