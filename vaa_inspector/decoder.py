"""
Envelope decoding entry points.

decode() splits the envelope into header and payload, picks a payload codec
from the known emitter registry and merges every index into one map that is
absolute over the original buffer. Header failures propagate; payload
failures degrade the payload to opaque bytes.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from eth_utils import decode_hex

from .errors import InvalidEnvelopeString, VaaDecodeError
from .header import Header, decode_header, header_indexes
from .indexes import PAYLOAD_KEY_PREFIX, IndexMap, compose, prefixed
from .known_emitters import families_for
from .payloads import NftBridgeCodec, PayloadCodec, RelayerCodec, TokenBridgeCodec

logger = logging.getLogger(__name__)

OPAQUE = "opaque"

PAYLOAD_CODECS: Dict[str, PayloadCodec] = {
    codec.family: codec
    for codec in (TokenBridgeCodec(), NftBridgeCodec(), RelayerCodec())
}

_HEX_RE = re.compile(r"^(0[xX])?[A-Fa-f0-9]+$")
_WHITESPACE_RE = re.compile(r"\s+")
_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


@dataclass(frozen=True)
class DecodeResult:
    header: Header
    payload_kind: str
    payload: Any
    indexes: IndexMap
    payload_error: Optional[str] = None


def _decode_base64(text: str) -> bytes:
    """Standard or URL-safe base64, line-wrapped or unpadded"""
    compact = _WHITESPACE_RE.sub("", text).translate(_URLSAFE_TO_STANDARD)
    compact += "=" * (-len(compact) % 4)
    return base64.b64decode(compact, validate=True)


def parse_envelope_string(text: str) -> bytes:
    """Accept hex (with or without 0x) or base64 text"""
    text = text.strip()
    if not text:
        raise InvalidEnvelopeString("Empty envelope string")
    try:
        if _HEX_RE.match(text) or text[:2] in ("0x", "0X"):
            buf = decode_hex(text)
        else:
            buf = _decode_base64(text)
    except (binascii.Error, ValueError) as e:
        raise InvalidEnvelopeString(f"Envelope is neither hex nor base64: {e}") from e
    if not buf:
        raise InvalidEnvelopeString("Envelope string decodes to no bytes")
    return buf


def select_decoder(env: str, source_chain: int, source_address: bytes) -> Optional[PayloadCodec]:
    """Codec of the first registered family the emitter matches, else None"""
    families = families_for(env, source_chain, source_address)
    if not families:
        return None
    if len(families) > 1:
        logger.debug("Emitter %s on chain %s registered as %s, using %s",
                     source_address.hex(), source_chain, families, families[0])
    return PAYLOAD_CODECS[families[0]]


def decode(buf: bytes, env: str) -> DecodeResult:
    buf = bytes(buf)
    header, payload_offset = decode_header(buf)
    indexes = header_indexes(buf)
    # codecs read from a view; only the opaque result holds a copy
    payload = memoryview(buf)[payload_offset:]

    codec = select_decoder(env, header.source_chain, header.source_address)
    if codec is None:
        return DecodeResult(header=header, payload_kind=OPAQUE, payload=bytes(payload), indexes=indexes)

    try:
        value = codec.decode(payload)
        relative = codec.index(payload)
    except VaaDecodeError as e:
        logger.debug("Falling back to opaque payload for %s: %s", header.message_id, e)
        return DecodeResult(
            header=header,
            payload_kind=OPAQUE,
            payload=bytes(payload),
            indexes=indexes,
            payload_error=str(e),
        )

    indexes.update(prefixed(PAYLOAD_KEY_PREFIX, compose(payload_offset, relative)))
    return DecodeResult(header=header, payload_kind=codec.kind, payload=value, indexes=indexes)


def indexes_only(buf: bytes, env: Optional[str] = None) -> IndexMap:
    """Highlighting map without building decoded values.

    Without ``env`` only header ranges are returned. With it, the payload of
    a registered emitter is indexed too when its layout can be walked.
    """
    buf = bytes(buf)
    indexes = header_indexes(buf)
    if env is None:
        return indexes

    chain_start, chain_end = indexes["sourceChain"]
    address_start, address_end = indexes["sourceAddress"]
    codec = select_decoder(
        env,
        int.from_bytes(buf[chain_start:chain_end], 'big'),
        buf[address_start:address_end],
    )
    if codec is None:
        return indexes

    payload_offset = indexes["payload"][0]
    try:
        relative = codec.index(memoryview(buf)[payload_offset:])
    except VaaDecodeError as e:
        logger.debug("Payload indexes unavailable: %s", e)
        return indexes
    indexes.update(prefixed(PAYLOAD_KEY_PREFIX, compose(payload_offset, relative)))
    return indexes
