"""
Decode signed cross-chain message envelopes and map every decoded field
back to the bytes it came from.
"""

from .decoder import (
    OPAQUE,
    DecodeResult,
    decode,
    indexes_only,
    parse_envelope_string,
    select_decoder,
)
from .errors import (
    InvalidEnvelopeString,
    TruncatedBuffer,
    UnknownRelayPayloadType,
    UnsupportedPayloadType,
    VaaDecodeError,
)
from .header import Header, Signature, decode_header, envelope_digest, header_indexes
from .indexes import IndexMap, compose

__version__ = "0.1.0"

__all__ = [
    "OPAQUE",
    "DecodeResult",
    "Header",
    "IndexMap",
    "Signature",
    "InvalidEnvelopeString",
    "TruncatedBuffer",
    "UnknownRelayPayloadType",
    "UnsupportedPayloadType",
    "VaaDecodeError",
    "compose",
    "decode",
    "decode_header",
    "envelope_digest",
    "header_indexes",
    "indexes_only",
    "parse_envelope_string",
    "select_decoder",
]
