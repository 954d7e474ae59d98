"""
NFT bridge transfer payload (payload id 1)

    payloadType   u8
    tokenAddress  32 bytes
    tokenChain    u16
    symbol        32 bytes, NUL padded
    name          32 bytes, NUL padded
    tokenId       uint256
    uri           u8 length + bytes
    toAddress     32 bytes
    toChain       u16
"""

from dataclasses import dataclass
from typing import Tuple

from ..errors import TruncatedBuffer, UnsupportedPayloadType
from ..indexes import IndexMap
from ..known_emitters import NFT_BRIDGE
from ..reader import ByteReader
from .base import PayloadCodec

NFT_TRANSFER = 1


@dataclass(frozen=True)
class NftTransfer:
    token_address: bytes
    token_chain: int
    symbol: str
    name: str
    token_id: int
    uri: str
    to_address: bytes
    to_chain: int
    payload_type: int = NFT_TRANSFER


def _fixed_string(raw: bytes) -> str:
    return raw.rstrip(b"\x00").decode("utf-8", errors="replace")


def _read_nft_transfer(payload: bytes) -> ByteReader:
    if len(payload) < 1:
        raise TruncatedBuffer("nft transfer", 1, 0)
    if payload[0] != NFT_TRANSFER:
        raise UnsupportedPayloadType(NFT_BRIDGE, payload[0])
    return ByteReader(payload, what="nft transfer")


def decode_nft_transfer(payload: bytes) -> Tuple[NftTransfer, IndexMap]:
    reader = _read_nft_transfer(payload)
    payload_type = reader.u8("payloadType")
    transfer = NftTransfer(
        token_address=reader.bytes32("tokenAddress"),
        token_chain=reader.u16("tokenChain"),
        symbol=_fixed_string(reader.bytes32("symbol")),
        name=_fixed_string(reader.bytes32("name")),
        token_id=reader.u256("tokenId"),
        uri=reader.sized(1, "uri").decode("utf-8", errors="replace"),
        to_address=reader.bytes32("toAddress"),
        to_chain=reader.u16("toChain"),
        payload_type=payload_type,
    )
    return transfer, reader.spans


class NftBridgeCodec(PayloadCodec):
    kind = "nft-transfer"
    family = NFT_BRIDGE

    def decode(self, payload: bytes) -> NftTransfer:
        return decode_nft_transfer(payload)[0]

    def index(self, payload: bytes) -> IndexMap:
        return decode_nft_transfer(payload)[1]
