"""Application configuration using pydantic-settings."""
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CDP_ENDPOINT = "http://127.0.0.1:9222/json/version"


class ViewportConfig(BaseModel):
    """Viewport applied to pages opened after attach."""

    width: int = Field(default=1280, gt=0)
    height: int = Field(default=800, gt=0)

    def as_dict(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}


class BrowserConfig(BaseModel):
    """Remote browser connection configuration.

    ``ws_endpoint`` wins over ``cdp_endpoint`` when both are set. A ``None``
    viewport leaves page sizes untouched.
    """

    ws_endpoint: Optional[str] = None
    cdp_endpoint: Optional[str] = None
    viewport: Optional[ViewportConfig] = Field(default_factory=ViewportConfig)
    discovery_timeout: float = 5.0
    attach_timeout: int = 10000


class Settings(BaseSettings):
    """Application settings loaded from YAML or environment."""

    model_config = SettingsConfigDict(
        env_prefix="REMOTE_TABS_",
        env_nested_delimiter="__",
    )

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML file.

        Environment variables still win over values in the file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Settings instance with loaded configuration.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        from_env = cls().model_dump(exclude_unset=True)
        return cls(**_merge(data, from_env))


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
