"""Runtime configuration, read once from the environment at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import DEFAULT_LOCALE


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "info"
DEFAULT_FIXTURES_DIR = "mocks"


def _parse_port(value: str) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        raise ValueError(f"invalid port: {value!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"port out of range: {port}")
    return port


@dataclass(frozen=True, slots=True)
class MockConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    mocks_dir: Path = Path(DEFAULT_FIXTURES_DIR)
    default_locale: str = DEFAULT_LOCALE

    @property
    def logging_level(self) -> str:
        """``log_level`` as a stdlib logging level name; uvicorn's ``trace`` maps to DEBUG."""

        level = self.log_level.upper()
        return "DEBUG" if level == "TRACE" else level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "MockConfig":
        """Build a config from ``environ`` (defaults to ``os.environ``).

        MOCK_PORT wins over PORT; PORT is what most PaaS hosts inject.
        The fixture directory is resolved against the current working directory.
        """

        env = os.environ if environ is None else environ

        port_raw = env.get("MOCK_PORT") or env.get("PORT")
        port = _parse_port(port_raw) if port_raw else DEFAULT_PORT

        mocks_dir = Path(env.get("MOCK_FIXTURES_DIR") or DEFAULT_FIXTURES_DIR).resolve()

        return cls(
            host=env.get("MOCK_HOST") or DEFAULT_HOST,
            port=port,
            log_level=(env.get("MOCK_LOG_LEVEL") or DEFAULT_LOG_LEVEL).lower(),
            mocks_dir=mocks_dir,
            default_locale=env.get("MOCK_LOCALE") or DEFAULT_LOCALE,
        )
