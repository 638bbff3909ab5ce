"""Settings, options-file loading and logging setup for the host layer."""

from prefer_bind.core.config import Settings, discover_options, get_settings, load_options_file
from prefer_bind.core.logging import configure_structlog

__all__ = [
    "Settings",
    "get_settings",
    "load_options_file",
    "discover_options",
    "configure_structlog",
]
