"""Structured output for CLI and JSON modes."""

# ruff: noqa: T201 - this module is the output layer; print() is its sole mechanism for producing CLI output.

import json
import sys
from dataclasses import asdict
from typing import NoReturn

import typer

from mb_userdb.resolver import Group, User

# getent(1) exit status for "key not found"
NOT_FOUND_EXIT_CODE = 2


class Output:
    """Handles all CLI output in JSON or getent-style text format."""

    def __init__(self, *, json_mode: bool) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise getent-style lines.

        """
        self._json_mode = json_mode

    def _success(self, data: dict[str, object], message: str) -> None:
        """Print a success result in JSON or human-readable format."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": data}))
        else:
            print(message)

    def print_error_and_exit(self, code: str, message: str, *, exit_code: int = 1) -> NoReturn:
        """Print an error in JSON or human-readable format and exit.

        Raises:
            typer.Exit: Always, with ``exit_code``.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=exit_code)

    def print_not_found_and_exit(self, kind: str, key: str) -> NoReturn:
        """Report a missing user or group with the getent exit status."""
        self.print_error_and_exit("not_found", f"{kind.capitalize()} '{key}' not found.", exit_code=NOT_FOUND_EXIT_CODE)

    def print_user(self, user: User) -> None:
        """Print a resolved user as a passwd-style line (no shell field)."""
        self._success(asdict(user), f"{user.username}:x:{user.uid}:{user.gid}:{user.name}:{user.home_dir}:")

    def print_group(self, group: Group) -> None:
        """Print a resolved group as a group-style line (no member list)."""
        self._success(asdict(group), f"{group.name}:x:{group.gid}:")
