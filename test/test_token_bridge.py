import pytest

from vaa_inspector.errors import TruncatedBuffer, UnsupportedPayloadType
from vaa_inspector.payloads.token_bridge import (
    TokenBridgeCodec,
    TokenTransfer,
    TokenTransferWithPayload,
    decode_token_transfer,
)
from vaa_builders import token_transfer


def test_transfer_with_fee():
    payload = token_transfer(payload_type=1, amount=1, fee=0)

    transfer, indexes = decode_token_transfer(payload)

    assert transfer == TokenTransfer(
        amount=1,
        token_address=b"\xaa" * 32,
        token_chain=2,
        to_address=b"\xbb" * 32,
        to_chain=5,
        fee=0,
    )
    assert transfer.payload_type == 1
    assert indexes["payloadType"] == (0, 1)
    assert indexes["fee"] == (101, 133)
    assert indexes["fromAddress"] is None
    assert indexes["extraPayload"] is None


def test_transfer_with_payload():
    payload = token_transfer(payload_type=3, from_address=b"\xcc" * 32, extra_payload=b"\x01\x02\x03\x04")

    transfer, indexes = decode_token_transfer(payload)

    assert isinstance(transfer, TokenTransferWithPayload)
    assert transfer.payload_type == 3
    assert transfer.from_address == b"\xcc" * 32
    assert transfer.extra_payload == b"\x01\x02\x03\x04"
    assert not hasattr(transfer, "fee")
    assert indexes["fee"] is None
    assert indexes["fromAddress"] == (101, 133)
    assert indexes["extraPayload"] == (133, 137)


def test_transfer_with_empty_extra_payload():
    payload = token_transfer(payload_type=3, extra_payload=b"")
    transfer, indexes = decode_token_transfer(payload)
    assert transfer.extra_payload == b""
    assert indexes["extraPayload"] == (133, 133)


def test_amount_is_not_truncated():
    amount = 2 ** 256 - 1
    transfer, _ = decode_token_transfer(token_transfer(amount=amount, fee=2 ** 200))
    assert transfer.amount == amount
    assert transfer.fee == 2 ** 200


def test_index_order_is_canonical():
    _, indexes = decode_token_transfer(token_transfer())
    assert list(indexes) == [
        "payloadType",
        "amount",
        "tokenAddress",
        "tokenChain",
        "toAddress",
        "toChain",
        "fee",
        "fromAddress",
        "extraPayload",
    ]


@pytest.mark.parametrize("payload_type", [1, 3])
def test_slices_reproduce_values(payload_type):
    payload = token_transfer(payload_type=payload_type, amount=123456, token_chain=21, to_chain=30, fee=99)
    transfer, indexes = decode_token_transfer(payload)

    def field(name):
        start, end = indexes[name]
        return payload[start:end]

    assert int.from_bytes(field("amount"), 'big') == transfer.amount
    assert field("tokenAddress") == transfer.token_address
    assert int.from_bytes(field("tokenChain"), 'big') == transfer.token_chain
    assert field("toAddress") == transfer.to_address
    assert int.from_bytes(field("toChain"), 'big') == transfer.to_chain
    if payload_type == 1:
        assert int.from_bytes(field("fee"), 'big') == transfer.fee
    else:
        assert field("fromAddress") == transfer.from_address
        assert field("extraPayload") == transfer.extra_payload


@pytest.mark.parametrize("payload_type", [0, 2, 4, 255])
def test_unsupported_payload_types(payload_type):
    payload = bytes([payload_type]) + token_transfer()[1:]
    with pytest.raises(UnsupportedPayloadType) as excinfo:
        decode_token_transfer(payload)
    assert excinfo.value.payload_type == payload_type


def test_short_transfer():
    with pytest.raises(TruncatedBuffer):
        decode_token_transfer(token_transfer()[:100])
    with pytest.raises(TruncatedBuffer):
        decode_token_transfer(b"")


def test_codec_matches_function():
    payload = token_transfer(payload_type=3)
    codec = TokenBridgeCodec()
    assert codec.kind == "token-transfer"
    assert (codec.decode(payload), codec.index(payload)) == decode_token_transfer(payload)


@pytest.mark.parametrize("payload_type", [1, 3])
def test_accepts_memoryview(payload_type):
    payload = token_transfer(payload_type=payload_type, extra_payload=b"\x07\x08")
    assert decode_token_transfer(memoryview(payload)) == decode_token_transfer(payload)
    transfer, _ = decode_token_transfer(memoryview(b"\x00" + payload)[1:])
    assert type(transfer.token_address) is bytes
