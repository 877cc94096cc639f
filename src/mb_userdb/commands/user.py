"""Look up a user."""

import re

import typer

from mb_userdb.app_context import use_context
from mb_userdb.errors import UserdbError

NUMERIC_ID = re.compile(r"-?[0-9]+")


def user(ctx: typer.Context, key: str = typer.Argument(help="Username or numeric uid")) -> None:
    """Look up a user by name or uid."""
    app = use_context(ctx)
    try:
        if NUMERIC_ID.fullmatch(key):
            found = app.resolver.lookup_user_id(key)
        else:
            found = app.resolver.lookup_user(key)
    except UserdbError as e:
        app.out.print_error_and_exit(e.code, str(e))
    if found is None:
        app.out.print_not_found_and_exit("user", key)
    app.out.print_user(found)
