"""
Envelope header decoding and byte-range indexing.

Layout of a signed envelope (all integers big-endian):

    version            1 byte
    guardianSetIndex   4 bytes
    signature count    1 byte      (offset 5)
    signatures         66 bytes each: guardian index (1) + r (32) + s (32) + v (1)
    timestamp          4 bytes     <- body starts here, this is what guardians sign
    nonce              4 bytes
    sourceChain        2 bytes
    sourceAddress      32 bytes
    sequence           8 bytes
    consistencyLevel   1 byte
    payload            remaining bytes

decode_header() and header_indexes() derive the same boundaries from the
same two inputs (buffer length and the count byte) without sharing code.
Tests assert they agree.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from eth_utils import keccak

from .errors import TruncatedBuffer

HEADER_PREFIX_LENGTH = 6
SIGNATURE_LENGTH = 66
BODY_FIXED_LENGTH = 51  # timestamp + nonce + chain + address + sequence + consistency


@dataclass(frozen=True)
class Signature:
    guardian_index: int
    r: bytes
    s: bytes
    recovery_id: int

    @property
    def signature(self) -> bytes:
        """65-byte r || s || v form"""
        return self.r + self.s + bytes([self.recovery_id])


@dataclass(frozen=True)
class Header:
    version: int
    guardian_set_index: int
    signatures: Tuple[Signature, ...]
    timestamp: int
    nonce: int
    source_chain: int
    source_address: bytes
    sequence: int
    consistency_level: int

    @property
    def message_id(self) -> str:
        """chain/emitter/sequence identifier used to look messages up"""
        return f"{self.source_chain}/{self.source_address.hex()}/{self.sequence}"


def _signatures_end(buf: bytes) -> int:
    if len(buf) < HEADER_PREFIX_LENGTH:
        raise TruncatedBuffer("envelope header", HEADER_PREFIX_LENGTH, len(buf))
    sig_end = HEADER_PREFIX_LENGTH + SIGNATURE_LENGTH * buf[5]
    if sig_end > len(buf):
        raise TruncatedBuffer("signature list", sig_end, len(buf))
    if sig_end + BODY_FIXED_LENGTH > len(buf):
        raise TruncatedBuffer("envelope body", sig_end + BODY_FIXED_LENGTH, len(buf))
    return sig_end


def decode_header(buf: bytes) -> Tuple[Header, int]:
    """Decode the envelope header, returning it with the payload offset"""
    buf = bytes(buf)
    sig_end = _signatures_end(buf)

    version = buf[0]
    guardian_set_index = int.from_bytes(buf[1:5], 'big')

    signatures = []
    for i in range(buf[5]):
        start = HEADER_PREFIX_LENGTH + i * SIGNATURE_LENGTH
        record = buf[start:start + SIGNATURE_LENGTH]
        signatures.append(Signature(
            guardian_index=record[0],
            r=record[1:33],
            s=record[33:65],
            recovery_id=record[65],
        ))

    off = sig_end
    timestamp = int.from_bytes(buf[off:off + 4], 'big')
    off += 4
    nonce = int.from_bytes(buf[off:off + 4], 'big')
    off += 4
    source_chain = int.from_bytes(buf[off:off + 2], 'big')
    off += 2
    source_address = buf[off:off + 32]
    off += 32
    sequence = int.from_bytes(buf[off:off + 8], 'big')
    off += 8
    consistency_level = buf[off]
    off += 1

    header = Header(
        version=version,
        guardian_set_index=guardian_set_index,
        signatures=tuple(signatures),
        timestamp=timestamp,
        nonce=nonce,
        source_chain=source_chain,
        source_address=source_address,
        sequence=sequence,
        consistency_level=consistency_level,
    )
    return header, off


def header_indexes(buf: bytes) -> Dict[str, Optional[Tuple[int, int]]]:
    """Byte ranges of every header field and of the payload"""
    if len(buf) < HEADER_PREFIX_LENGTH:
        raise TruncatedBuffer("envelope header", HEADER_PREFIX_LENGTH, len(buf))
    num_signers = buf[5]
    sig_end = 6 + 66 * num_signers
    if sig_end > len(buf):
        raise TruncatedBuffer("signature list", sig_end, len(buf))
    if sig_end + 51 > len(buf):
        raise TruncatedBuffer("envelope body", sig_end + 51, len(buf))

    # guardianSignatures includes the count byte at offset 5
    return {
        "version": (0, 1),
        "guardianSetIndex": (1, 5),
        "guardianSignatures": (5, sig_end),
        "timestamp": (sig_end, sig_end + 4),
        "nonce": (sig_end + 4, sig_end + 8),
        "sourceChain": (sig_end + 8, sig_end + 10),
        "sourceAddress": (sig_end + 10, sig_end + 42),
        "sequence": (sig_end + 42, sig_end + 50),
        "consistencyLevel": (sig_end + 50, sig_end + 51),
        "payload": (sig_end + 51, len(buf)),
    }


def envelope_digest(buf: bytes) -> bytes:
    """keccak256(keccak256(body)), the hash the guardians sign"""
    buf = bytes(buf)
    body = buf[_signatures_end(buf):]
    return keccak(keccak(body))
