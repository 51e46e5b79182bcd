"""Authored external identifiers.

A record names its channel either by the stable channel id (``UC`` followed by
22 url-safe characters) or by a human-chosen ``@handle``. Only the stable id is
ever stored remotely; handles are resolved to it first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

CHANNEL_ID_PATTERN: Final[str] = r"UC[A-Za-z0-9_-]{22}"
HANDLE_PATTERN: Final[str] = r"@[\w.-]{3,30}"
EXTERNAL_ID_PATTERN: Final[str] = rf"^({CHANNEL_ID_PATTERN}|{HANDLE_PATTERN})?$"

_CHANNEL_ID_RE: Final = re.compile(rf"^{CHANNEL_ID_PATTERN}$")
_HANDLE_RE: Final = re.compile(rf"^{HANDLE_PATTERN}$")


class ExternalIdKind(StrEnum):
    CHANNEL_ID = "channel_id"
    HANDLE = "handle"


class InvalidExternalIdError(ValueError):
    """Raised when an authored identifier matches neither accepted shape."""


@dataclass(frozen=True, slots=True)
class ExternalIdentifier:
    kind: ExternalIdKind
    value: str

    def __str__(self) -> str:
        if self.kind is ExternalIdKind.HANDLE:
            return f"@{self.value}"
        return self.value


def parse_external_id(raw: str) -> ExternalIdentifier:
    value = raw.strip()
    if _CHANNEL_ID_RE.match(value):
        return ExternalIdentifier(kind=ExternalIdKind.CHANNEL_ID, value=value)
    if _HANDLE_RE.match(value):
        return ExternalIdentifier(kind=ExternalIdKind.HANDLE, value=value[1:])
    raise InvalidExternalIdError(f"Invalid external id: {raw!r}")
