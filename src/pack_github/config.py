"""Explicit configuration passed into the install pipeline.

Nothing here reads process-wide state on its own; the CLI builds these
models from its options and hands them down.
"""

import os
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import field_validator

DEFAULT_META_FOLDER = "mods"
DEFAULT_API_URL = "https://api.github.com/"


class MetadataConfig(BaseModel):
    """Where metadata files are placed inside the pack.

    ``meta_folder_base`` defaults to the pack root when left unset.
    """

    model_config = ConfigDict(frozen=True)

    meta_folder: str = DEFAULT_META_FOLDER
    meta_folder_base: Path | None = None

    @field_validator("meta_folder")
    @classmethod
    def _default_empty_folder(cls, value: str) -> str:
        return value or DEFAULT_META_FOLDER


class ClientConfig(BaseModel):
    """GitHub client settings."""

    model_config = ConfigDict(frozen=True)

    api_url: str = DEFAULT_API_URL
    token: str | None = None
    timeout: float = 30.0

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """Build from ``GITHUB_TOKEN`` / ``PACK_GITHUB_API_URL``, letting explicit values win."""
        values: dict = {}
        if token := os.environ.get("GITHUB_TOKEN"):
            values["token"] = token
        if api_url := os.environ.get("PACK_GITHUB_API_URL"):
            values["api_url"] = api_url
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
