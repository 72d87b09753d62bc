"""Input adapters that decode and normalize league exports."""

from .decode import decode, decode_league_bytes, is_compressed
from .export import league_to_document
from .normalize import normalize
from .worker import decode_in_worker, unpack_worker_message

__all__ = [
    "decode",
    "decode_in_worker",
    "decode_league_bytes",
    "is_compressed",
    "league_to_document",
    "normalize",
    "unpack_worker_message",
]
