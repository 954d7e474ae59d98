"""
Token bridge transfer payloads

Type 1 (Transfer) and type 3 (TransferWithPayload) share the first 101 bytes
and differ in what follows:

    payloadType    [0, 1)
    amount         [1, 33)     uint256
    tokenAddress   [33, 65)
    tokenChain     [65, 67)
    toAddress      [67, 99)
    toChain        [99, 101)
    fee            [101, 133)  uint256, type 1 only
    fromAddress    [101, 133)  type 3 only
    extraPayload   [133, end)  type 3 only

Type 2 (asset metadata) is not decoded here.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from eth_abi import decode as abi_decode

from ..errors import TruncatedBuffer, UnsupportedPayloadType
from ..indexes import IndexMap
from ..known_emitters import TOKEN_BRIDGE
from .base import PayloadCodec

TRANSFER = 1
ASSET_META = 2
TRANSFER_WITH_PAYLOAD = 3

TRANSFER_LENGTH = 133


@dataclass(frozen=True)
class TokenTransfer:
    amount: int
    token_address: bytes
    token_chain: int
    to_address: bytes
    to_chain: int
    fee: int
    payload_type: int = TRANSFER


@dataclass(frozen=True)
class TokenTransferWithPayload:
    amount: int
    token_address: bytes
    token_chain: int
    to_address: bytes
    to_chain: int
    from_address: bytes
    extra_payload: bytes
    payload_type: int = TRANSFER_WITH_PAYLOAD


TokenTransferPayload = Union[TokenTransfer, TokenTransferWithPayload]


def _check(payload: bytes) -> int:
    if len(payload) < 1:
        raise TruncatedBuffer("token transfer", 1, 0)
    payload_type = payload[0]
    if payload_type not in (TRANSFER, TRANSFER_WITH_PAYLOAD):
        raise UnsupportedPayloadType(TOKEN_BRIDGE, payload_type)
    if len(payload) < TRANSFER_LENGTH:
        raise TruncatedBuffer("token transfer", TRANSFER_LENGTH, len(payload))
    return payload_type


def _uint256(data: bytes) -> int:
    return abi_decode(['uint256'], data)[0]


def token_transfer_value(payload: bytes) -> TokenTransferPayload:
    payload = bytes(payload)
    payload_type = _check(payload)

    amount = _uint256(payload[1:33])
    token_address = payload[33:65]
    token_chain = int.from_bytes(payload[65:67], 'big')
    to_address = payload[67:99]
    to_chain = int.from_bytes(payload[99:101], 'big')

    if payload_type == TRANSFER:
        return TokenTransfer(
            amount=amount,
            token_address=token_address,
            token_chain=token_chain,
            to_address=to_address,
            to_chain=to_chain,
            fee=_uint256(payload[101:133]),
        )
    return TokenTransferWithPayload(
        amount=amount,
        token_address=token_address,
        token_chain=token_chain,
        to_address=to_address,
        to_chain=to_chain,
        from_address=payload[101:133],
        extra_payload=payload[133:],
    )


def token_transfer_indexes(payload: bytes) -> IndexMap:
    """Payload-relative ranges; the untaken branch maps to None"""
    payload_type = _check(payload)
    indexes: IndexMap = {
        "payloadType": (0, 1),
        "amount": (1, 33),
        "tokenAddress": (33, 65),
        "tokenChain": (65, 67),
        "toAddress": (67, 99),
        "toChain": (99, 101),
        "fee": None,
        "fromAddress": None,
        "extraPayload": None,
    }
    if payload_type == TRANSFER:
        indexes["fee"] = (101, 133)
    else:
        indexes["fromAddress"] = (101, 133)
        indexes["extraPayload"] = (133, len(payload))
    return indexes


def decode_token_transfer(payload: bytes) -> Tuple[TokenTransferPayload, IndexMap]:
    return token_transfer_value(payload), token_transfer_indexes(payload)


class TokenBridgeCodec(PayloadCodec):
    kind = "token-transfer"
    family = TOKEN_BRIDGE

    def decode(self, payload: bytes) -> TokenTransferPayload:
        return token_transfer_value(payload)

    def index(self, payload: bytes) -> IndexMap:
        return token_transfer_indexes(payload)
