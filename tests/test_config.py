from __future__ import annotations

import pytest

from matecheck.config import Config
from matecheck.errors import ConfigError


def test_defaults() -> None:
    cfg = Config.from_env({})
    assert cfg.search.depth == 3
    assert cfg.search.max_depth == 6
    assert cfg.server.port == 8000
    assert cfg.log_level == "INFO"


def test_env_overrides() -> None:
    cfg = Config.from_env(
        {
            "MATECHECK_DEPTH": "2",
            "MATECHECK_PORT": "9001",
            "MATECHECK_HOST": "0.0.0.0",
            "MATECHECK_LOG_LEVEL": "debug",
        }
    )
    assert cfg.search.depth == 2
    assert cfg.server.port == 9001
    assert cfg.server.host == "0.0.0.0"
    assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [
        {"MATECHECK_DEPTH": "deep"},
        {"MATECHECK_DEPTH": "0"},
        {"MATECHECK_DEPTH": "7"},
        {"MATECHECK_MAX_DEPTH": "0"},
    ],
)
def test_invalid_values(env) -> None:
    with pytest.raises(ConfigError):
        Config.from_env(env)
