"""Redaction helpers for dependency URLs and git error output.

Dependency URLs may carry credentials (``https://token@host/repo.git``);
anything logged or put in an error message goes through these helpers.
"""
from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

_SCHEME_CRED_RE = re.compile(r"([a-zA-Z][a-zA-Z0-9+.-]*://)([^\s/@]+(:[^\s/@]*)?@)")
_SCP_STYLE_RE = re.compile(r"\b(?!git@)([^\s@/:]+)@([^\s:/]+):")
_SCP_URL_RE = re.compile(r"(?P<user>[^@\s/]+)@(?P<host>[^:\s/]+):(?P<rest>.+)$")


def redact_url(url: str) -> str:
    """Return ``url`` without embedded credentials."""
    raw = str(url)
    if "://" in raw:
        try:
            parts = urlsplit(raw)
            username, password = parts.username, parts.password
        except ValueError:
            return _SCHEME_CRED_RE.sub(r"\1<redacted>@", raw)
        if username is None and password is None:
            return raw
        netloc = parts.netloc.rsplit("@", 1)[-1]
        return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))

    # scp-like syntax; the conventional "git" user is not a secret.
    m = _SCP_URL_RE.match(raw)
    if m and m.group("user") != "git":
        return f"<redacted>@{m.group('host')}:{m.group('rest')}"
    return raw


def redact_text(text: str) -> str:
    """Redact credential-bearing URL fragments inside arbitrary text."""
    s = _SCHEME_CRED_RE.sub(r"\1<redacted>@", str(text))
    return _SCP_STYLE_RE.sub(r"<redacted>@\2:", s)


def redact_args(args: list[str]) -> list[str]:
    return [redact_url(a) for a in args]


__all__ = ["redact_url", "redact_text", "redact_args"]
