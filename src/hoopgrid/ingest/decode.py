"""Turn raw league export bytes into an untyped JSON document."""

from __future__ import annotations

import gzip
import io
import json
import logging
import zlib
from typing import Any, Optional

from hoopgrid.config import ImportLimits
from hoopgrid.errors import FormatError, TooLargeError, WebPageError


logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
COMPRESSED_SUFFIXES = (".gz", ".gzip")
GZIP_HINTS = frozenset({"gzip", "x-gzip", "gz"})
PLAIN_HINTS = frozenset({"", "identity", "json", "none"})
STORED_TYPES = ("json", "gzip")

# HTML markers only need to be found near the top of the payload.
_SNIFF_WINDOW = 4096
_ERROR_PREFIX_CHARS = 80


def _format_size(num_bytes: int) -> str:
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def is_compressed(
    data: bytes,
    filename_hint: Optional[str] = None,
    compression: Optional[str] = None,
) -> bool:
    """Return True when any of hint, filename suffix or magic number says gzip."""

    if compression is not None:
        hint = compression.strip().lower()
        if hint in GZIP_HINTS:
            return True
        if hint not in PLAIN_HINTS:
            logger.warning("Ignoring unknown compression hint %r", compression)
    if filename_hint and filename_hint.strip().lower().endswith(COMPRESSED_SUFFIXES):
        return True
    return data[:2] == GZIP_MAGIC


def _check_size(size: int, limits: ImportLimits, stage: str) -> None:
    if size > limits.max_bytes:
        raise TooLargeError(
            f"League file is too large {stage} ({_format_size(size)} > {_format_size(limits.max_bytes)})"
        )


def decompress(data: bytes, limits: ImportLimits) -> bytes:
    """Inflate gzip bytes, stopping one byte past the size ceiling."""

    try:
        with gzip.GzipFile(fileobj=io.BytesIO(data)) as handle:
            inflated = handle.read(limits.max_bytes + 1)
    except (OSError, EOFError, zlib.error) as exc:
        raise FormatError(f"Could not decompress gzip data: {exc}") from exc
    _check_size(len(inflated), limits, "after decompression")
    return inflated


def _looks_like_html(text: str) -> bool:
    head = text[:_SNIFF_WINDOW].lower()
    return head.lstrip().startswith("<") or "<html" in head


def decode(
    data: bytes,
    filename_hint: Optional[str] = None,
    *,
    compression: Optional[str] = None,
    limits: Optional[ImportLimits] = None,
) -> Any:
    """Decode raw export bytes into a parsed JSON object or array.

    Decompression happens when the compression hint, the filename suffix or
    the gzip magic number says so. HTML content raises ``WebPageError`` so a
    fetched web page is never reported as malformed JSON.
    """

    limits = limits or ImportLimits()
    _check_size(len(data), limits, "to import")

    compressed = is_compressed(data, filename_hint, compression)
    payload = decompress(data, limits) if compressed else data

    try:
        text = payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FormatError(f"League file is not valid UTF-8 text: {exc}") from exc

    if _looks_like_html(text):
        raise WebPageError(
            "Received a web page instead of a league file; check that the link points to the raw file"
        )

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        prefix = text[:_ERROR_PREFIX_CHARS]
        raise FormatError(f"Invalid JSON ({exc.msg}); content starts with {prefix!r}") from exc

    if not isinstance(document, (dict, list)):
        raise FormatError(f"League file must contain a JSON object or array, got {type(document).__name__}")

    logger.info(
        "Decoded league document: %d bytes%s",
        len(payload),
        f" (inflated from {len(data)})" if compressed else "",
    )
    return document


def decode_league_bytes(blob: bytes, stored_type: str, *, limits: Optional[ImportLimits] = None) -> Any:
    """Decode a stored blob using its persisted type tag (``json`` or ``gzip``)."""

    if stored_type not in STORED_TYPES:
        raise FormatError(f"Unknown stored league type {stored_type!r}; expected one of {', '.join(STORED_TYPES)}")
    compression = "gzip" if stored_type == "gzip" else None
    return decode(blob, compression=compression, limits=limits)
