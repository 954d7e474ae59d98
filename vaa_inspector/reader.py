"""
Big-endian byte cursor that records the span of every field it reads.

Variable-length layouts (relay instructions, NFT transfers) cannot be
indexed from fixed offsets alone, so the walk that decodes them also
produces their index map.
"""

from typing import Dict, Optional, Tuple

from eth_abi import decode as abi_decode

from .errors import TruncatedBuffer


class ByteReader:
    def __init__(self, buf: bytes, what: str = "payload"):
        self.buf = bytes(buf)
        self.what = what
        self.offset = 0
        self.spans: Dict[str, Optional[Tuple[int, int]]] = {}

    def take(self, length: int, name: Optional[str] = None) -> bytes:
        """Consume ``length`` raw bytes, recording their span under ``name``"""
        end = self.offset + length
        if end > len(self.buf):
            raise TruncatedBuffer(self.what, end, len(self.buf))
        chunk = self.buf[self.offset:end]
        if name is not None:
            self.spans[name] = (self.offset, end)
        self.offset = end
        return chunk

    def uint(self, size: int, name: Optional[str] = None) -> int:
        return int.from_bytes(self.take(size, name), 'big')

    def u8(self, name: Optional[str] = None) -> int:
        return self.uint(1, name)

    def u16(self, name: Optional[str] = None) -> int:
        return self.uint(2, name)

    def u32(self, name: Optional[str] = None) -> int:
        return self.uint(4, name)

    def u64(self, name: Optional[str] = None) -> int:
        return self.uint(8, name)

    def u256(self, name: Optional[str] = None) -> int:
        return abi_decode(['uint256'], self.take(32, name))[0]

    def bytes32(self, name: Optional[str] = None) -> bytes:
        return self.take(32, name)

    def sized(self, length_size: int, name: Optional[str] = None) -> bytes:
        """Length-prefixed byte string; the span covers prefix and body"""
        start = self.offset
        length = self.uint(length_size)
        body = self.take(length)
        if name is not None:
            self.spans[name] = (start, self.offset)
        return body

    def mark(self, name: str, start: int) -> None:
        """Record a span that started at ``start`` and ends at the cursor"""
        self.spans[name] = (start, self.offset)
