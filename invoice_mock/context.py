"""Request context: MSISDN extraction, pagination echo and locale.

The real API receives the subscriber either as ``?msisdn=`` or inside an
``x-querystring`` header forwarded by the gateway. The mock accepts both.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import primary_language, supported_languages


MSISDN_PARAM = "msisdn"
QUERYSTRING_HEADER = "x-querystring"
LOCALE_HEADER = "x-locale"
ACCEPT_LANGUAGE_HEADER = "accept-language"

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50

_NON_DIGITS = re.compile(r"[^0-9]")
_QUERYSTRING_MSISDN = re.compile(r"(?<!\w)msisdn\s*=\s*([0-9]+)", re.IGNORECASE)


def _lower_map(headers: Mapping[str, str]) -> dict[str, str]:
    return {str(k).lower(): str(v) for k, v in headers.items()}


def normalize_msisdn(value: Any) -> str:
    """Strip every non-digit character; ``None`` yields an empty string."""

    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def extract_msisdn(query: Mapping[str, Any], headers: Mapping[str, str]) -> str | None:
    """Return the normalized MSISDN of a request, or None.

    Precedence:
      1. ``?msisdn=`` query parameter
      2. ``x-querystring`` header containing ``msisdn=<digits>``
    """

    msisdn = normalize_msisdn(query.get(MSISDN_PARAM))
    if msisdn:
        return msisdn

    raw = _lower_map(headers).get(QUERYSTRING_HEADER)
    if raw:
        match = _QUERYSTRING_MSISDN.search(raw)
        if match:
            msisdn = normalize_msisdn(match.group(1))
            if msisdn:
                return msisdn

    return None


def _int_param(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class RequestEcho:
    """Resolved request parameters, echoed back for client-side debugging."""

    msisdn: str
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def as_dict(self) -> dict[str, Any]:
        return {"msisdn": self.msisdn, "page": self.page, "limit": self.limit}


def build_request_echo(msisdn: str, query: Mapping[str, Any]) -> RequestEcho:
    return RequestEcho(
        msisdn=msisdn,
        page=_int_param(query.get("page"), DEFAULT_PAGE),
        limit=_int_param(query.get("limit"), DEFAULT_LIMIT),
    )


def resolve_locale(headers: Mapping[str, str], default: str) -> str:
    """Pick the message language from X-Locale, then Accept-Language.

    Unsupported or missing languages fall back to ``default``.
    """

    h = _lower_map(headers)
    known = supported_languages()

    explicit = primary_language(h.get(LOCALE_HEADER))
    if explicit in known:
        return explicit

    accept = h.get(ACCEPT_LANGUAGE_HEADER, "")
    first = accept.split(",", 1)[0].split(";", 1)[0]
    lang = primary_language(first)
    if lang in known:
        return lang

    return primary_language(default) or default
