"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
application starts without any configuration at all.
"""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Defaults are evaluated when an instance is created, so tests can
    patch the environment and build a fresh ``Settings()``.
    """

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Users API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    # Prefix under which the versioned router is mounted.  Set to an
    # empty string to serve ``/users`` at the root.
    api_prefix: str = field(default_factory=lambda: os.getenv("API_PREFIX", "/api/v1"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    # Optional path of a log file in addition to console output.
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
