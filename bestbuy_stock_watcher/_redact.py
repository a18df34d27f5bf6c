"""Helpers for keeping credentials out of log messages.

The Best Buy API takes its key as a query parameter, so request URLs (and
the exception text that embeds them) must be scrubbed before logging.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

_SENSITIVE_PARAMS = ("apiKey", "token", "key")
_PARAM_RE = re.compile(
    r"(?P<name>(?:%s))=(?P<value>[^&\s'\")]+)" % "|".join(_SENSITIVE_PARAMS),
    re.IGNORECASE,
)


def redact_secrets(text: str, secrets: Iterable[Optional[str]] = ()) -> str:
    """Return *text* with sensitive query values and known secrets replaced."""
    redacted = _PARAM_RE.sub(lambda m: f"{m.group('name')}=<redacted>", text)
    for secret in secrets:
        if secret:
            redacted = redacted.replace(secret, "<redacted>")
    return redacted
