"""File-backed fixture storage.

Fixtures live in a single directory:

  <root>/<msisdn>.json   response for one subscriber
  <root>/default.json    fallback for every other subscriber

Two optional reserved fields configure the HTTP response instead of the body:

  "__status":  integer HTTP status (default 200)
  "__headers": object of header name -> value

Files are read on every call so edits apply without a restart.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from starlette.concurrency import run_in_threadpool


STATUS_FIELD = "__status"
HEADERS_FIELD = "__headers"
RESERVED_FIELDS = (STATUS_FIELD, HEADERS_FIELD)

DEFAULT_FIXTURE = "default"

_DIGITS = re.compile(r"[0-9]+")


class FixtureError(Exception):
    """Base class for storage failures; never shown to clients."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class FixtureNotFound(FixtureError):
    """Neither the subscriber fixture nor default.json exists."""


class FixtureParseError(FixtureError):
    """The selected fixture is not a valid fixture document."""


def _header_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class Fixture:
    """A parsed fixture with the reserved fields split out of the body."""

    path: Path
    body: Mapping[str, Any]
    status: int | None = None
    headers: Mapping[str, str] | None = None

    @classmethod
    def from_document(cls, path: Path, document: Any) -> "Fixture":
        if not isinstance(document, dict):
            raise FixtureParseError(
                f"fixture must be a JSON object, got {type(document).__name__}",
                path=path,
            )

        body = {k: v for k, v in document.items() if k not in RESERVED_FIELDS}

        status = document.get(STATUS_FIELD)
        if status is not None:
            if isinstance(status, bool) or not isinstance(status, int):
                raise FixtureParseError(f"{STATUS_FIELD} must be an integer, got {status!r}", path=path)
            if not 100 <= status <= 599:
                raise FixtureParseError(f"{STATUS_FIELD} out of range: {status}", path=path)

        raw_headers = document.get(HEADERS_FIELD)
        headers: dict[str, str] | None = None
        if raw_headers is not None:
            if not isinstance(raw_headers, dict):
                raise FixtureParseError(f"{HEADERS_FIELD} must be a JSON object", path=path)
            headers = {str(k): _header_value(v) for k, v in raw_headers.items()}

        return cls(path=path, body=body, status=status, headers=headers)


class FixtureStore:
    """Resolves an MSISDN to a fixture file under ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    @property
    def default_path(self) -> Path:
        return self.root / f"{DEFAULT_FIXTURE}.json"

    def path_for(self, msisdn: str) -> Path:
        if not _DIGITS.fullmatch(msisdn or ""):
            raise ValueError(f"msisdn must be digits only, got {msisdn!r}")
        return self.root / f"{msisdn}.json"

    def resolve_path(self, msisdn: str) -> Path:
        specific = self.path_for(msisdn)
        try:
            if specific.is_file():
                return specific
        except OSError:
            # e.g. ENAMETOOLONG for very long identifiers; treat as missing.
            pass
        if self.default_path.is_file():
            return self.default_path
        raise FixtureNotFound(
            f"no fixture for {msisdn} and no {self.default_path.name} in {self.root}",
            path=self.default_path,
        )

    def load_sync(self, msisdn: str) -> Fixture:
        path = self.resolve_path(msisdn)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise FixtureNotFound(f"fixture disappeared: {path}", path=path) from exc
        except UnicodeDecodeError as exc:
            raise FixtureParseError(f"fixture is not valid UTF-8: {exc}", path=path) from exc

        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FixtureParseError(f"invalid JSON in {path.name}: {exc}", path=path) from exc

        return Fixture.from_document(path, document)

    async def load(self, msisdn: str) -> Fixture:
        """Load a fixture without blocking the event loop."""

        return await run_in_threadpool(self.load_sync, msisdn)
