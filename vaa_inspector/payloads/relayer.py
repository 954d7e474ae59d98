"""
Relay instruction payloads: dispatch on the leading payload id to the
delivery or redelivery layout.
"""

from typing import Tuple, Union

from ..errors import TruncatedBuffer, UnknownRelayPayloadType
from ..indexes import IndexMap
from ..known_emitters import RELAYER
from .base import PayloadCodec
from .relayer_layout import (
    INSTRUCTION_LAYOUTS,
    DeliveryInstruction,
    RedeliveryInstruction,
    read_instruction,
)

RelayInstructionPayload = Union[DeliveryInstruction, RedeliveryInstruction]


def relay_payload_type(payload: bytes) -> int:
    if len(payload) < 1:
        raise TruncatedBuffer("relay instruction", 1, 0)
    if payload[0] not in INSTRUCTION_LAYOUTS:
        raise UnknownRelayPayloadType(payload[0])
    return payload[0]


def decode_relay_instruction(payload: bytes) -> Tuple[RelayInstructionPayload, IndexMap]:
    relay_payload_type(payload)
    return read_instruction(bytes(payload))


class RelayerCodec(PayloadCodec):
    kind = "relay-instruction"
    family = RELAYER

    def decode(self, payload: bytes) -> RelayInstructionPayload:
        return decode_relay_instruction(payload)[0]

    def index(self, payload: bytes) -> IndexMap:
        return decode_relay_instruction(payload)[1]
