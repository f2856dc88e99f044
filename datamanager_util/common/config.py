from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from datamanager_util.common.hashing import Encoding
from datamanager_util.common.io import load_yaml

DEFAULT_BASE_URL = "https://datamanager.googleapis.com"


class StrictBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ClientConfig(StrictBaseModel):
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = Field(default=60.0, gt=0)
    max_retries: int = Field(default=3, ge=0)
    backoff_base_s: float = Field(default=0.2, ge=0)
    backoff_max_s: float = Field(default=5.0, ge=0)
    encoding: Encoding = Encoding.HEX
    headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ClientConfig":
        raw = load_yaml(path)
        if "client" in raw:
            raw = raw["client"]
        return cls.model_validate(raw)


def load_client_config(path: str | Path | None) -> ClientConfig:
    if path is None:
        return ClientConfig()
    return ClientConfig.from_yaml(path)


__all__ = [
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "load_client_config",
    "load_yaml",
]
