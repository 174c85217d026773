"""Transport of decoded operations between the origin and remote mirrors."""

from .client import GenerationClient, GenerationClientError
from .envelope import NDJSON_MIMETYPE, encode_envelope, iter_envelopes
from .reassembler import GenerationStreamError, RemoteReassembler, StreamIncompleteError

__all__ = [
    "GenerationClient",
    "GenerationClientError",
    "GenerationStreamError",
    "NDJSON_MIMETYPE",
    "RemoteReassembler",
    "StreamIncompleteError",
    "encode_envelope",
    "iter_envelopes",
]
