"""Centralized application configuration."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SOCKET_PATH = Path("/run/systemd/userdb/io.systemd.NameServiceSwitch")
DEFAULT_SERVICE = "io.systemd.NameServiceSwitch"
DEFAULT_CONFIG_PATH = Path("/etc/mb-userdb/config.toml")


class Config(BaseModel):
    """Application-wide configuration."""

    model_config = ConfigDict(frozen=True)

    socket_path: Path = Field(default=DEFAULT_SOCKET_PATH, description="Unix domain socket of the identity service")
    service: str = Field(default=DEFAULT_SERVICE, min_length=1, description="Varlink service name sent with every query")
    timeout: float | None = Field(default=None, gt=0, description="Socket timeout in seconds (None = block indefinitely)")
    log_path: Path | None = Field(default=None, description="Log file (None = logging disabled)")

    @staticmethod
    def build(config_path: Path | None = None, *, socket_path: Path | None = None, timeout: float | None = None) -> "Config":
        """Build a Config from defaults, an optional config.toml, and explicit overrides.

        Args:
            config_path: TOML file to read. Falls back to the system-wide file; a missing file is not an error.
            socket_path: Overrides the socket path from the file.
            timeout: Overrides the timeout from the file.

        """
        resolved_path = config_path if config_path is not None else DEFAULT_CONFIG_PATH

        kwargs: dict[str, Any] = {}
        if resolved_path.is_file():
            with resolved_path.open("rb") as f:
                toml_data = tomllib.load(f)
            if isinstance(toml_data.get("socket_path"), str):
                kwargs["socket_path"] = Path(toml_data["socket_path"])
            if isinstance(toml_data.get("service"), str):
                kwargs["service"] = toml_data["service"]
            toml_timeout = toml_data.get("timeout")
            if isinstance(toml_timeout, int | float) and not isinstance(toml_timeout, bool):
                kwargs["timeout"] = toml_timeout
            if isinstance(toml_data.get("log_path"), str):
                kwargs["log_path"] = Path(toml_data["log_path"])

        if socket_path is not None:
            kwargs["socket_path"] = socket_path
        if timeout is not None:
            kwargs["timeout"] = timeout

        return Config(**kwargs)
