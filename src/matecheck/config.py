from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .errors import ConfigError


@dataclass
class SearchConfig:
    depth: int = 3  # plies searched by the automated opponent
    max_depth: int = 6  # upper bound accepted from API callers


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a config from defaults overlaid with ``MATECHECK_*`` variables.

        Raises:
            ConfigError: If a numeric variable is not an integer or a depth
                is out of range.
        """
        env = os.environ if environ is None else environ
        cfg = Config()
        cfg.search.depth = _int_var(env, "MATECHECK_DEPTH", cfg.search.depth)
        cfg.search.max_depth = _int_var(env, "MATECHECK_MAX_DEPTH", cfg.search.max_depth)
        cfg.server.host = env.get("MATECHECK_HOST", cfg.server.host)
        cfg.server.port = _int_var(env, "MATECHECK_PORT", cfg.server.port)
        cfg.log_level = env.get("MATECHECK_LOG_LEVEL", cfg.log_level).upper()
        if cfg.search.max_depth < 1:
            raise ConfigError("MATECHECK_MAX_DEPTH must be >= 1")
        if not 1 <= cfg.search.depth <= cfg.search.max_depth:
            raise ConfigError("MATECHECK_DEPTH must be between 1 and MATECHECK_MAX_DEPTH")
        return cfg


def _int_var(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
