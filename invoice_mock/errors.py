"""Client-visible error catalog for the invoice mock.

Only two codes ever reach the client: a usage error (no MSISDN could be
extracted) and an opaque mock failure. Storage errors and tracebacks stay in
the operator log.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


DEFAULT_LOCALE = "pt"


def primary_language(locale: str | None) -> str:
    """Reduce a locale tag such as ``pt-BR`` or ``en_US`` to ``pt``/``en``."""

    tag = (locale or "").strip().replace("_", "-")
    return tag.split("-", 1)[0].lower()


@dataclass(frozen=True, slots=True)
class ErrorCode:
    """Represents a stable error code returned in the ``code`` body field."""

    code: str
    status_code: int
    messages: Mapping[str, str] = field(default_factory=dict)

    def message(self, locale: str | None = None) -> str:
        lang = primary_language(locale)
        if lang in self.messages:
            return self.messages[lang]
        return self.messages.get(DEFAULT_LOCALE, self.code)

    def as_error(self, locale: str | None = None) -> dict[str, Any]:
        return {"code": self.code, "message": self.message(locale)}


INVALID_REQUEST = ErrorCode(
    code="INVALID_REQUEST",
    status_code=400,
    messages={
        "pt": "msisdn é obrigatório (via query ?msisdn=... ou header x-querystring: msisdn=...)",
        "en": "msisdn is required (via query ?msisdn=... or header x-querystring: msisdn=...)",
    },
)

MOCK_ERROR = ErrorCode(
    code="MOCK_ERROR",
    status_code=500,
    messages={
        "pt": "Erro no mock",
        "en": "Mock error",
    },
)


def supported_languages() -> frozenset[str]:
    return frozenset(INVALID_REQUEST.messages) | frozenset(MOCK_ERROR.messages)
