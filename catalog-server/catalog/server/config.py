"""Configuration for the catalog server."""

import os
from collections.abc import Mapping
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = "8080"


class Config(BaseModel):
    """Immutable server configuration.

    Values come from the environment via `from_env`. `catalog.server.__main__`
    layers command-line overrides on top.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    host: str = Field(default=DEFAULT_HOST, description="Address to bind to")
    port: int = Field(
        default=int(DEFAULT_PORT), ge=1, le=65535, description="TCP port to listen on"
    )
    title: str = Field(default="Catalog Server", description="API title")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Config":
        """Build a config from `HOST` and `PORT`.

        Empty values fall back to the defaults. An invalid port raises
        `pydantic.ValidationError`.
        """
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("HOST") or DEFAULT_HOST,
            port=env.get("PORT") or DEFAULT_PORT,  # type: ignore[arg-type]
        )
