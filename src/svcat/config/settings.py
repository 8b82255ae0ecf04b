"""SvcatSettings: one frozen object built from flags, environment and svcat.toml.

Sources, first match wins:

- keyword arguments (the CLI flags Click collected)
- ``SVCAT_*`` environment variables, ``__`` between section and key
- the ``svcat.toml`` named by ``config_path``
- defaults on the section models
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, InitSettingsSource, PydanticBaseSettingsSource

from svcat.config.discovery import find_config
from svcat.config.models import KubectlConfig, ProvisionConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source over a single TOML file; a missing file contributes nothing."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            import click

            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


def _toml_path_from(init_settings: PydanticBaseSettingsSource) -> Path | None:
    if not isinstance(init_settings, InitSettingsSource):
        return None
    value = init_settings.init_kwargs.get("config_path")
    return Path(value) if value else None


class SvcatSettings(BaseSettings):
    """Settings for one svcat invocation, kept on ``AppContext.settings``.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SVCAT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    provision: ProvisionConfig = Field(default_factory=ProvisionConfig)
    kubectl: KubectlConfig = Field(default_factory=KubectlConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # The TOML file is whatever this instance is told its config_path is.
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _toml_path_from(init_settings)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> SvcatSettings:
        """Resolve the config file, then build settings with *cli_flags* on top.

        An explicit *config_path* that does not exist is ignored rather than
        replaced by discovery; otherwise ``svcat.toml`` is looked up from *cwd*.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(cwd)
        return cls(config_path=toml_path, **cli_flags)
