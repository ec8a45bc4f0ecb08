"""Process-level configuration for tfs-shell.

Settings come from ``TFS_*`` environment variables (pydantic-settings)
and are read once by the CLI layer, then handed explicitly to the
components that need them.  Core code never reads the environment.
"""

from __future__ import annotations

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from tfs_shell.core.models import ServiceAddress
from tfs_shell.core.path_resolver import DEFAULT_PORT
from tfs_shell.exceptions import ConfigurationError


class ShellSettings(BaseSettings):
    """Central configuration of the shell."""

    model_config = SettingsConfigDict(
        env_prefix="TFS_",
        extra="ignore",
        case_sensitive=False,
    )

    master_host: str | None = Field(
        default=None,
        min_length=1,
        description="Default master host for paths without a service prefix.",
    )
    master_port: int = Field(
        default=DEFAULT_PORT,
        gt=0,
        lt=65536,
        description="Default master port, also used when a URL omits one.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request to the master (seconds).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for the tfs_shell logger.",
    )

    @property
    def default_address(self) -> ServiceAddress | None:
        if self.master_host is None:
            return None
        return ServiceAddress(host=self.master_host, port=self.master_port)


def load_settings() -> ShellSettings:
    """Read settings from the environment.

    Raises
    ------
    ConfigurationError
        If any ``TFS_*`` variable fails validation.
    """
    try:
        return ShellSettings()
    except ValidationError as exc:
        fields = ", ".join(
            "TFS_" + str(error["loc"][0]).upper() for error in exc.errors() if error["loc"]
        )
        raise ConfigurationError(
            f"Invalid configuration: {fields or exc}",
            hint="Check the TFS_* environment variables.",
        ) from exc
