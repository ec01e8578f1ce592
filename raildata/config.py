"""
Configuration loading for the RailData client and gateway.

Loads non-secret settings from config.yaml, secrets from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, model_validator

from raildata.api import PRODUCTION_BASE_URL, TEST_BASE_URL


class Config(BaseModel):
    """Client configuration. Secrets come from env vars, rest from YAML."""

    # Secrets (from environment only)
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    api_key: Optional[str] = None

    # RailData settings
    use_test_endpoint: bool = False
    base_url: Optional[str] = None
    timeout: float = Field(default=10.0, gt=0)

    # File holding the current token, rewritten when it is refreshed
    token_file: Optional[str] = None

    @model_validator(mode="after")
    def validate_credentials(self) -> "Config":
        if (self.username is None) != (self.password is None):
            raise ValueError(
                "RAILDATA_USERNAME and RAILDATA_PASSWORD must be set together"
            )
        return self

    @property
    def effective_base_url(self) -> str:
        if self.base_url:
            return self.base_url
        return TEST_BASE_URL if self.use_test_endpoint else PRODUCTION_BASE_URL


def load_config(config_path: str | None = None) -> Config:
    """
    Load configuration from YAML file + environment variables.

    Args:
        config_path: Path to config.yaml. If None, reads CONFIG_PATH env var
                     (default: config.yaml in current directory).

    Returns:
        Validated Config instance.
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config.yaml")

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raw = {}

    # Inject secrets from environment (never from YAML)
    config_data = {
        **raw,
        "username": os.environ.get("RAILDATA_USERNAME"),
        "password": os.environ.get("RAILDATA_PASSWORD"),
        "token": os.environ.get("RAILDATA_TOKEN"),
        "api_key": os.environ.get("API_KEY"),
    }

    return Config(**config_data)
