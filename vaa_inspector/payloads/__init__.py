from .base import PayloadCodec
from .nft_bridge import NftBridgeCodec, NftTransfer, decode_nft_transfer
from .relayer import RelayerCodec, decode_relay_instruction
from .relayer_layout import DeliveryInstruction, RedeliveryInstruction, VaaKey
from .token_bridge import (
    TokenBridgeCodec,
    TokenTransfer,
    TokenTransferWithPayload,
    decode_token_transfer,
)

__all__ = [
    "PayloadCodec",
    "TokenBridgeCodec",
    "NftBridgeCodec",
    "RelayerCodec",
    "TokenTransfer",
    "TokenTransferWithPayload",
    "NftTransfer",
    "DeliveryInstruction",
    "RedeliveryInstruction",
    "VaaKey",
    "decode_token_transfer",
    "decode_nft_transfer",
    "decode_relay_instruction",
]
