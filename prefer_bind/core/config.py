"""Runtime settings and options-file loading.

Settings come from environment variables (prefix PREFER_BIND_) or a .env
file. Rule options come from a config file: the [tool.prefer-bind] table
of pyproject.toml, the top-level table of any other TOML file, or a JSON
object.
"""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from prefer_bind.rule.options import ConfigError

logger = logging.getLogger(__name__)

PYPROJECT = "pyproject.toml"
TOOL_TABLE = "prefer-bind"


class Settings(BaseSettings):
    """Process-level settings for the scanner and CLI."""

    model_config = SettingsConfigDict(
        env_prefix="PREFER_BIND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Console logs with DEBUG level instead of JSON logs.
    debug: bool = False

    # Files larger than this (bytes) are skipped during directory scans.
    max_file_size: int = 256 * 1024


def get_settings() -> Settings:
    return Settings()


def load_options_file(path: Path) -> dict[str, Any]:
    """Read rule options from a TOML or JSON file.

    Raises ConfigError if the file is unreadable, malformed, or does not
    hold an options object. Validation of the options themselves happens
    in resolve_options().
    """
    path = Path(path)
    try:
        if path.suffix == ".toml":
            with open(path, "rb") as fh:
                data = tomllib.load(fh)
            if path.name == PYPROJECT:
                data = data.get("tool", {}).get(TOOL_TABLE, {})
        elif path.suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            raise ConfigError(f"Unsupported config file type: {path.name}")
    except (OSError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain an options object")

    logger.debug("Loaded options from %s: %s", path, sorted(data))
    return data


def discover_options(cwd: Optional[Path] = None) -> dict[str, Any]:
    """Options from ./pyproject.toml's [tool.prefer-bind], or {}."""
    path = (cwd or Path.cwd()) / PYPROJECT
    if not path.exists():
        return {}
    return load_options_file(path)
