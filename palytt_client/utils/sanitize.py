"""
Redaction helpers used before anything reaches the log.

Auth headers and bearer tokens must never be written out verbatim.
"""

from __future__ import annotations

import re
from typing import Mapping

REDACTED = "[REDACTED]"

_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "set-cookie", "x-api-key"})

_SENSITIVE_PATTERNS = [
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"(api[_-]?key|token|secret|password)[=:]\s*['\"]?([^\s'\",}]+)['\"]?", re.IGNORECASE),
    re.compile(r"eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+"),
    re.compile(r"sk_(live|test)_[a-zA-Z0-9]{16,}"),
]


def sanitize_text(text: str, replacement: str = REDACTED) -> str:
    """Strip tokens and credentials from free-form text."""
    sanitized = text
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of ``headers`` with credential values replaced."""
    return {
        key: (REDACTED if key.lower() in _SENSITIVE_HEADERS else value)
        for key, value in headers.items()
    }
