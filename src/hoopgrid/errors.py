"""Error taxonomy shared by the import, grid and rarity layers."""

from __future__ import annotations

from typing import Dict, Type


class HoopgridError(RuntimeError):
    """Base class for errors that cross the core boundary.

    Every subclass carries a stable ``kind`` tag so callers can branch on the
    failure category without parsing messages.
    """

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "message": self.message}


class FormatError(HoopgridError):
    """Bytes are not valid compressed, text or JSON data."""

    kind = "format"


class WebPageError(HoopgridError):
    """Content is an HTML page rather than a league export."""

    kind = "web_page"


class SchemaError(HoopgridError):
    """JSON parsed but does not look like a league."""

    kind = "schema"


class InsufficientDataError(HoopgridError):
    """Not enough teams or players to build a valid grid."""

    kind = "insufficient_data"


class TooLargeError(HoopgridError):
    """Input exceeds the configured size ceiling."""

    kind = "too_large"


ERROR_TYPES: Dict[str, Type[HoopgridError]] = {
    cls.kind: cls
    for cls in (FormatError, WebPageError, SchemaError, InsufficientDataError, TooLargeError)
}


def error_from_kind(kind: str, message: str) -> HoopgridError:
    """Rebuild an error from its ``kind`` tag, defaulting to ``FormatError``."""

    return ERROR_TYPES.get(kind, FormatError)(message)
