from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(RuntimeError):
    pass


class PromuSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PROMU_",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # GOPATH keeps the Go workspace layout working without extra setup.
    workspace_root: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("PROMU_WORKSPACE_ROOT", "GOPATH"),
    )

    @field_validator("workspace_root", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            # GOPATH may list several workspaces; the first one is primary.
            return value.split(os.pathsep, 1)[0] or None
        return value

    @field_validator("workspace_root")
    @classmethod
    def _expand_root(cls, value: Path | None) -> Path | None:
        if value is None:
            return None
        return value.expanduser()


def load_settings() -> PromuSettings:
    try:
        return PromuSettings()
    except ValidationError as e:
        raise ConfigError(f"Invalid promu settings: {e}") from e
