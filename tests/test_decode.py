import gzip
import json

import pytest

from hoopgrid.config import ImportLimits
from hoopgrid.errors import FormatError, TooLargeError, WebPageError
from hoopgrid.ingest import decode, decode_league_bytes, is_compressed


def _payload() -> bytes:
    return json.dumps({"players": [{"pid": 1, "name": "Zoë Example"}], "teams": []}).encode("utf-8")


def test_decode_plain_json():
    document = decode(_payload())
    assert document["players"][0]["name"] == "Zoë Example"


def test_decode_gzip_sniffed_from_magic_number():
    compressed = gzip.compress(_payload())
    assert compressed[:2] == b"\x1f\x8b"

    document = decode(compressed)
    assert document == json.loads(gzip.decompress(compressed).decode("utf-8"))


def test_decode_uses_filename_hint_and_compression_hint():
    compressed = gzip.compress(_payload())
    assert decode(compressed, "league.json.gz")["players"][0]["pid"] == 1
    assert decode(compressed, compression="gzip")["players"][0]["pid"] == 1


def test_filename_hint_alone_triggers_decompression():
    with pytest.raises(FormatError):
        decode(_payload(), "league.json.gz")


def test_corrupt_gzip_is_format_error():
    with pytest.raises(FormatError):
        decode(b"\x1f\x8b" + b"not really gzip data")


def test_truncated_gzip_is_format_error():
    compressed = gzip.compress(_payload())
    with pytest.raises(FormatError):
        decode(compressed[: len(compressed) // 2])


@pytest.mark.parametrize(
    "text",
    [
        "<!DOCTYPE html><html><body>Not found</body></html>",
        "   \n<html lang='en'></html>",
        "Moved: <HTML><body>see elsewhere</body></HTML>",
    ],
)
def test_html_content_is_web_page_error(text: str):
    with pytest.raises(WebPageError):
        decode(text.encode("utf-8"))


def test_html_inside_gzip_is_still_web_page_error():
    with pytest.raises(WebPageError):
        decode(gzip.compress(b"<html><body>oops</body></html>"))


def test_invalid_json_reports_bounded_prefix():
    text = "{" + "x" * 200
    with pytest.raises(FormatError) as excinfo:
        decode(text.encode("utf-8"))

    message = str(excinfo.value)
    assert repr(text[:80]) in message
    assert text[:81] not in message


def test_scalar_json_is_rejected():
    with pytest.raises(FormatError):
        decode(b"42")


def test_invalid_utf8_is_format_error():
    with pytest.raises(FormatError):
        decode(b'{"name": "\xff\xfe"}')


def test_byte_order_mark_is_tolerated():
    assert decode(b"\xef\xbb\xbf" + _payload())["players"][0]["pid"] == 1


def test_size_ceiling_checked_before_decompression():
    with pytest.raises(TooLargeError):
        decode(_payload(), limits=ImportLimits(max_bytes=10))


def test_size_ceiling_checked_after_decompression():
    inflated = json.dumps({"padding": "a" * 5000}).encode("utf-8")
    compressed = gzip.compress(inflated)
    assert len(compressed) < 500

    with pytest.raises(TooLargeError):
        decode(compressed, limits=ImportLimits(max_bytes=500))


def test_decode_league_bytes_uses_stored_type():
    assert decode_league_bytes(gzip.compress(_payload()), "gzip")["players"][0]["pid"] == 1
    assert decode_league_bytes(_payload(), "json")["players"][0]["pid"] == 1
    with pytest.raises(FormatError):
        decode_league_bytes(_payload(), "zip")


def test_is_compressed_ignores_unknown_hint():
    assert is_compressed(b"{}", compression="brotli") is False
    assert is_compressed(b"{}", "LEAGUE.JSON.GZ") is True
    assert is_compressed(b"\x1f\x8b\x08", compression="identity") is True
