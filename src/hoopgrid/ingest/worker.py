"""Run league decoding in a separate process."""

from __future__ import annotations

import logging
import multiprocessing as mp
import queue as queue_module
import time
from typing import Any, Optional

from hoopgrid.config import ImportLimits
from hoopgrid.errors import FormatError, HoopgridError, error_from_kind
from hoopgrid.ingest.decode import decode


logger = logging.getLogger(__name__)

_POLL_SECONDS = 0.1


def _decode_worker(
    data: bytes,
    filename_hint: Optional[str],
    compression: Optional[str],
    limits: ImportLimits,
    queue: mp.Queue,
) -> None:
    try:
        document = decode(data, filename_hint, compression=compression, limits=limits)
    except HoopgridError as exc:
        queue.put(("error", exc.kind, exc.message))
    except Exception as exc:  # pragma: no cover - reported to the parent as a format error
        queue.put(("error", FormatError.kind, f"League decoding failed: {exc}"))
    else:
        queue.put(("ok", document))


def unpack_worker_message(message: Any) -> Any:
    """Return the document from a worker reply or raise the error it carries.

    Anything that is not a well-formed ``("ok", document)`` or
    ``("error", kind, message)`` tuple is treated as a format error.
    """

    if isinstance(message, tuple) and message:
        status = message[0]
        if status == "ok" and len(message) == 2:
            return message[1]
        if status == "error" and len(message) == 3:
            kind, text = message[1], message[2]
            if isinstance(kind, str) and isinstance(text, str):
                raise error_from_kind(kind, text)
    raise FormatError("League decoding worker returned a malformed message")


def decode_in_worker(
    data: bytes,
    filename_hint: Optional[str] = None,
    *,
    compression: Optional[str] = None,
    limits: Optional[ImportLimits] = None,
    timeout: Optional[float] = None,
) -> Any:
    """Decode ``data`` in a spawned process and return the parsed document.

    A worker that exits without replying, or does not reply within
    ``timeout`` seconds, is terminated and reported as ``FormatError``.
    """

    limits = limits or ImportLimits()
    ctx = mp.get_context("spawn")
    queue: mp.Queue = ctx.Queue()
    proc = ctx.Process(
        target=_decode_worker,
        args=(data, filename_hint, compression, limits, queue),
        daemon=True,
    )
    deadline = None if timeout is None else time.monotonic() + timeout
    proc.start()
    try:
        while True:
            try:
                message = queue.get(timeout=_POLL_SECONDS)
                break
            except queue_module.Empty:
                pass
            if not proc.is_alive():
                try:
                    message = queue.get(timeout=_POLL_SECONDS)
                    break
                except queue_module.Empty:
                    logger.warning("League decoding worker exited with code %s", proc.exitcode)
                    raise FormatError("League decoding worker crashed before replying") from None
            if deadline is not None and time.monotonic() > deadline:
                logger.warning("League decoding worker timed out after %.1fs", timeout)
                raise FormatError("League decoding worker timed out")
    finally:
        if proc.is_alive():
            proc.terminate()
        proc.join()
    return unpack_worker_message(message)
