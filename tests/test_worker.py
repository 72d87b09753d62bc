import gzip
import json

import pytest

from hoopgrid.errors import FormatError, SchemaError, TooLargeError, WebPageError
from hoopgrid.ingest import decode_in_worker, unpack_worker_message


def test_unpack_ok_message_returns_document():
    assert unpack_worker_message(("ok", {"players": []})) == {"players": []}


def test_unpack_error_message_restores_error_kind():
    with pytest.raises(SchemaError) as excinfo:
        unpack_worker_message(("error", "schema", "no players"))
    assert excinfo.value.message == "no players"

    with pytest.raises(TooLargeError):
        unpack_worker_message(("error", "too_large", "big"))


@pytest.mark.parametrize(
    "message",
    [
        None,
        "ok",
        ("ok",),
        ("error", "format"),
        ("error", 3, "bad kind"),
        ("done", {"players": []}),
        ["ok", {"players": []}],
    ],
)
def test_unpack_malformed_message_is_format_error(message):
    with pytest.raises(FormatError):
        unpack_worker_message(message)


def test_unpack_unknown_error_kind_is_format_error():
    with pytest.raises(FormatError):
        unpack_worker_message(("error", "mystery", "what happened"))


def test_decode_in_worker_returns_document():
    payload = gzip.compress(json.dumps({"players": [{"pid": 7}]}).encode("utf-8"))
    document = decode_in_worker(payload, "league.json.gz", timeout=60)
    assert document == {"players": [{"pid": 7}]}


def test_decode_in_worker_propagates_structured_errors():
    with pytest.raises(WebPageError):
        decode_in_worker(b"<html><body>login</body></html>", timeout=60)
