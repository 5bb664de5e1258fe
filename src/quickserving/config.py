"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for Quickserving.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── quickserving --port 3000 --dir ./public                   │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── QUICKSERVING_PORT=3000 quickserving                       │
    │                                                                      │
    │   3. Configuration file (JSON)                                      │
    │      └── quickserving --config quickserving.json                   │
    │                                                                      │
    │   4. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The dataclass is frozen: once the server starts, the same Config is handed
to every connection and nothing may change it.

=============================================================================
"""

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


ENV_PREFIX = "QUICKSERVING_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


class ConfigError(ValueError):
    """Raised when configuration values are missing, unknown or invalid."""


@dataclass(frozen=True)
class Config:
    """
    Configuration for the static file server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    CONTENT
    - directory, index_file, not_found_uri

    NETWORK
    - host, port, buffer_size, timeout

    BEHAVIOUR
    - server_name, reject_traversal

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT
    # ─────────────────────────────────────────────────────────────────────

    directory: str = "."
    """Document root. Every request path is resolved under it."""

    index_file: str = "index.html"
    """File name appended to request paths that end in "/"."""

    not_found_uri: str = "404.html"
    """Page sent with 404 responses, relative to ``directory``."""

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK
    # ─────────────────────────────────────────────────────────────────────

    port: int = 8080
    """Port to listen on. 0 lets the OS pick one (used by the tests)."""

    host: str = "0.0.0.0"
    """Address to bind. All interfaces by default."""

    buffer_size: int = 4096
    """How many bytes each recv() asks for while reading a request."""

    timeout: Optional[float] = None
    """
    Read timeout for client sockets in seconds.
    None = block forever: a client that never finishes its headers stalls
    the (single-threaded) server until it disconnects.
    """

    # ─────────────────────────────────────────────────────────────────────
    # BEHAVIOUR
    # ─────────────────────────────────────────────────────────────────────

    server_name: str = "Quickserving"
    """Value of the Server header."""

    reject_traversal: bool = False
    """
    Normalize request paths and refuse ".." segments that climb out of
    the document root. Off by default: paths are joined verbatim.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    log_format: str = "text"
    """'text' for humans, 'json' for one JSON object per line."""

    # =========================================================================
    # ALTERNATE CONSTRUCTORS
    # =========================================================================

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        QUICKSERVING_PORT              Port (default: 8080)
        QUICKSERVING_DIRECTORY         Document root (default: .)
        QUICKSERVING_INDEX_FILE        Index file (default: index.html)
        QUICKSERVING_NOT_FOUND_URI     404 page (default: 404.html)
        QUICKSERVING_HOST              Bind address (default: 0.0.0.0)
        QUICKSERVING_REJECT_TRAVERSAL  "1"/"true" to enable
        QUICKSERVING_LOG_LEVEL         Logging level (default: INFO)
        QUICKSERVING_LOG_FORMAT        text or json (default: text)

        =====================================================================
        """
        return cls().merge(**cls.env_overrides(environ))

    @staticmethod
    def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Collect the settings present in the environment, typed."""
        if environ is None:
            environ = os.environ

        overrides: Dict[str, Any] = {}
        for f in fields(Config):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is not None:
                overrides[f.name] = _coerce(f.name, raw)
        return overrides

    @classmethod
    def from_file(cls, path: str) -> "Config":
        """
        Load configuration from a JSON file.

        The file holds one object whose keys are field names:

            {"port": 8000, "directory": "public", "not_found_uri": "404.html"}

        Raises:
            ConfigError: If the file cannot be read, is not a JSON object,
                         or names an unknown setting.
        """
        return cls().merge(**load_file(path))

    def merge(self, **overrides: Any) -> "Config":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once at startup so a bad setting fails before the port is
        bound, with a message naming the setting.

        Raises:
            ConfigError: On the first invalid value.
        """
        if not isinstance(self.port, int) or not 0 <= self.port < 65536:
            raise ConfigError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.buffer_size < 1:
            raise ConfigError("buffer_size must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError("timeout must be > 0")

        if not self.index_file:
            raise ConfigError("index_file must not be empty")

        if not Path(self.directory).is_dir():
            raise ConfigError(f"directory does not exist: {self.directory}")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}")

        if self.log_format not in LOG_FORMATS:
            raise ConfigError(f"Unknown log format: {self.log_format}")

    @property
    def level(self) -> int:
        """``log_level`` as a logging module constant."""
        return getattr(logging, self.log_level.upper(), logging.INFO)


def load_file(path: str) -> Dict[str, Any]:
    """Read a JSON configuration file into a dict of typed settings."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    known = {f.name for f in fields(Config)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    return {name: _coerce(name, value) for name, value in data.items()}


def _coerce(name: str, value: Any) -> Any:
    """Convert an environment/file value to the type of field ``name``."""
    if value is None:
        return None

    try:
        if name in ("port", "buffer_size"):
            return int(value)
        if name == "timeout":
            return float(value)
        if name == "reject_traversal":
            if isinstance(value, bool):
                return value
            return str(value).strip().lower() in ("1", "true", "yes", "on")
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from e

    return str(value)
