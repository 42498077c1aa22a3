"""Unified settings — CLI flags and environment variables in one object.

Sources, first match wins:

- flags given on the command line
- ``SKEL_*`` environment variables (e.g. ``SKEL_VERBOSE=1``)
- field defaults

The project config file itself is resolved by
:func:`skel.config.discovery.resolve_config_path` and stored here as an
absolute path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from skel.config.discovery import resolve_config_path


class SkelSettings(BaseSettings):
    """Settings for one skel invocation, frozen after construction.

    Attributes:
        config_file: Absolute path of the project layer's config file.
        json_output: Emit ServiceResult JSON instead of rendered text.
        quiet: Minimal output.
        verbose: Debug logging and result metadata.
        log_json: JSON log lines on stderr.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SKEL_",
    }

    config_file: Path = Field(default_factory=resolve_config_path)

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only CLI kwargs and ``SKEL_*`` env vars; no dotenv or secrets."""
        return init_settings, env_settings

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> SkelSettings:
        """Construct settings from a CLI invocation.

        *config_path* is the raw ``--config`` value; it is resolved against
        *cwd* (default: the working directory) before being stored.  Flags
        left unset on the command line fall through to ``SKEL_*`` env vars.
        """
        flags = {name: value for name, value in cli_flags.items() if value}
        return cls(config_file=resolve_config_path(config_path, cwd), **flags)
