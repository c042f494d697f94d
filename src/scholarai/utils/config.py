"""
Configuration utilities.
"""

import json
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel


ENV_PREFIX = "SCHOLARAI_"

# Unprefixed variables honoured for compatibility with the usual OpenAI setup
ENV_ALIASES = {
    "OPENAI_API_KEY": "openai_api_key",
    "OPENAI_BASE_URL": "openai_base_url",
    "PORT": "port",
}


class Config(BaseModel):
    """Base configuration class."""

    @classmethod
    def from_yaml(cls, path: Path) -> dict[str, Any]:
        """Read raw configuration values from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return data or {}

    @classmethod
    def from_file(cls, path: str | Path) -> dict[str, Any]:
        """Read raw configuration values from file (YAML or JSON)."""
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        elif path.suffix == ".json":
            with open(path) as f:
                return json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")


class AppConfig(Config):
    """Configuration for the ScholarAI server."""

    # Storage
    data_dir: str = "data"
    store_filename: str = "store.json"

    # Provider settings
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_timeout: float = 60.0
    openai_max_retries: int = 0
    embedding_model: str = "text-embedding-3-small"
    chat_model: str = "gpt-4o-mini"

    # Chunking
    chunk_size: int = 3500
    chunk_overlap: int = 300
    max_chunks_per_doc: int = 500
    max_chunk_size: int = 20000
    embedding_batch_size: int = 64

    # Generation
    answer_temperature: float = 0.2
    summary_temperature: float = 0.3
    summary_max_chars: int = 100_000
    max_tokens: int = 1500
    default_k: int = 6

    # Upload limits
    max_upload_files: int = 10
    max_upload_bytes: int = 20 * 1024 * 1024

    # Server
    host: str = "0.0.0.0"
    port: int = 8787
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    @property
    def store_path(self) -> Path:
        """Full path of the JSON document store."""
        return Path(self.data_dir) / self.store_filename


def _env_overrides() -> dict[str, Any]:
    """Collect configuration values set through environment variables."""
    overrides: dict[str, Any] = {}

    for env_key, field in ENV_ALIASES.items():
        value = os.getenv(env_key)
        if value:
            overrides[field] = value

    for field, info in AppConfig.model_fields.items():
        value = os.getenv(f"{ENV_PREFIX}{field.upper()}")
        if not value:
            continue
        if info.annotation == list[str]:
            overrides[field] = [v.strip() for v in value.split(",") if v.strip()]
        else:
            overrides[field] = value

    return overrides


def load_config(path: str | Path = "scholarai.yaml") -> AppConfig:
    """
    Load server configuration.

    Values come from the config file (if it exists), then from the
    environment, which wins. A ``.env`` file in the working directory is
    loaded first.

    Args:
        path: Path to config file

    Returns:
        AppConfig instance
    """
    load_dotenv(find_dotenv(usecwd=True))
    path = Path(path)

    data: dict[str, Any] = {}
    if path.exists():
        data.update(AppConfig.from_file(path))

    data.update(_env_overrides())
    return AppConfig(**data)
