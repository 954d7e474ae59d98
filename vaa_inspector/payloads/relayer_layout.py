"""
Generic relayer instruction layouts (version 1)

Delivery instruction, payload id 1:

    payloadId                u8
    targetChain              u16
    targetAddress            32 bytes
    payload                  u32 length + bytes
    requestedReceiverValue   uint256
    extraReceiverValue       uint256
    encodedExecutionInfo     u32 length + bytes
    refundChain              u16
    refundAddress            32 bytes
    refundDeliveryProvider   32 bytes
    sourceDeliveryProvider   32 bytes
    senderAddress            32 bytes
    messageKeys              u8 count, then per key:
                               u8 key type
                               type 1: chain u16, emitter 32 bytes, sequence u64
                               other:  u32 length + bytes

Redelivery instruction, payload id 2:

    payloadId                  u8
    deliveryVaaKey             chain u16, emitter 32 bytes, sequence u64
    targetChain                u16
    newRequestedReceiverValue  uint256
    newEncodedExecutionInfo    u32 length + bytes
    newSourceDeliveryProvider  32 bytes
    newSenderAddress           32 bytes
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError

from ..indexes import IndexMap
from ..reader import ByteReader

DELIVERY = 1
REDELIVERY = 2

VAA_KEY_TYPE = 1
EVM_V1_EXECUTION_INFO = 0


@dataclass(frozen=True)
class VaaKey:
    chain: int
    emitter_address: bytes
    sequence: int


@dataclass(frozen=True)
class OpaqueMessageKey:
    key_type: int
    encoded: bytes


MessageKey = Union[VaaKey, OpaqueMessageKey]


@dataclass(frozen=True)
class EvmExecutionInfo:
    gas_limit: int
    target_chain_refund_per_gas_unused: int


@dataclass(frozen=True)
class DeliveryInstruction:
    target_chain: int
    target_address: bytes
    payload: bytes
    requested_receiver_value: int
    extra_receiver_value: int
    encoded_execution_info: bytes
    refund_chain: int
    refund_address: bytes
    refund_delivery_provider: bytes
    source_delivery_provider: bytes
    sender_address: bytes
    message_keys: Tuple[MessageKey, ...]
    payload_type: int = DELIVERY

    @property
    def execution_info(self) -> Optional[EvmExecutionInfo]:
        return decode_execution_info(self.encoded_execution_info)


@dataclass(frozen=True)
class RedeliveryInstruction:
    delivery_vaa_key: VaaKey
    target_chain: int
    new_requested_receiver_value: int
    new_encoded_execution_info: bytes
    new_source_delivery_provider: bytes
    new_sender_address: bytes
    payload_type: int = REDELIVERY

    @property
    def execution_info(self) -> Optional[EvmExecutionInfo]:
        return decode_execution_info(self.new_encoded_execution_info)


def decode_execution_info(encoded: bytes) -> Optional[EvmExecutionInfo]:
    """EVM v1 execution info, or None for anything else"""
    if len(encoded) != 96:
        return None
    try:
        version, gas_limit, refund = abi_decode(['uint8', 'uint256', 'uint256'], encoded)
    except DecodingError:
        return None
    if version != EVM_V1_EXECUTION_INFO:
        return None
    return EvmExecutionInfo(gas_limit=gas_limit, target_chain_refund_per_gas_unused=refund)


def _read_vaa_key(reader: ByteReader) -> VaaKey:
    return VaaKey(
        chain=reader.u16(),
        emitter_address=reader.bytes32(),
        sequence=reader.u64(),
    )


def _read_message_key(reader: ByteReader, name: str) -> MessageKey:
    start = reader.offset
    key_type = reader.u8()
    if key_type == VAA_KEY_TYPE:
        key = _read_vaa_key(reader)
    else:
        key = OpaqueMessageKey(key_type=key_type, encoded=reader.sized(4))
    reader.mark(name, start)
    return key


def read_delivery(reader: ByteReader) -> DeliveryInstruction:
    payload_type = reader.u8("payloadId")
    target_chain = reader.u16("targetChain")
    target_address = reader.bytes32("targetAddress")
    payload = reader.sized(4, "payload")
    requested_receiver_value = reader.u256("requestedReceiverValue")
    extra_receiver_value = reader.u256("extraReceiverValue")
    encoded_execution_info = reader.sized(4, "encodedExecutionInfo")
    refund_chain = reader.u16("refundChain")
    refund_address = reader.bytes32("refundAddress")
    refund_delivery_provider = reader.bytes32("refundDeliveryProvider")
    source_delivery_provider = reader.bytes32("sourceDeliveryProvider")
    sender_address = reader.bytes32("senderAddress")

    keys_start = reader.offset
    reader.spans["messageKeys"] = None  # keeps the list ahead of its entries
    count = reader.u8()
    message_keys = tuple(
        _read_message_key(reader, f"messageKeys[{i}]") for i in range(count)
    )
    reader.mark("messageKeys", keys_start)

    return DeliveryInstruction(
        target_chain=target_chain,
        target_address=target_address,
        payload=payload,
        requested_receiver_value=requested_receiver_value,
        extra_receiver_value=extra_receiver_value,
        encoded_execution_info=encoded_execution_info,
        refund_chain=refund_chain,
        refund_address=refund_address,
        refund_delivery_provider=refund_delivery_provider,
        source_delivery_provider=source_delivery_provider,
        sender_address=sender_address,
        message_keys=message_keys,
        payload_type=payload_type,
    )


def read_redelivery(reader: ByteReader) -> RedeliveryInstruction:
    payload_type = reader.u8("payloadId")
    key_start = reader.offset
    delivery_vaa_key = _read_vaa_key(reader)
    reader.mark("deliveryVaaKey", key_start)
    return RedeliveryInstruction(
        delivery_vaa_key=delivery_vaa_key,
        target_chain=reader.u16("targetChain"),
        new_requested_receiver_value=reader.u256("newRequestedReceiverValue"),
        new_encoded_execution_info=reader.sized(4, "newEncodedExecutionInfo"),
        new_source_delivery_provider=reader.bytes32("newSourceDeliveryProvider"),
        new_sender_address=reader.bytes32("newSenderAddress"),
        payload_type=payload_type,
    )


INSTRUCTION_LAYOUTS = {
    DELIVERY: read_delivery,
    REDELIVERY: read_redelivery,
}


def read_instruction(payload: bytes) -> Tuple[Union[DeliveryInstruction, RedeliveryInstruction], IndexMap]:
    """Walk one instruction; the caller has already checked the payload id"""
    reader = ByteReader(payload, what="relay instruction")
    instruction = INSTRUCTION_LAYOUTS[payload[0]](reader)
    return instruction, reader.spans
