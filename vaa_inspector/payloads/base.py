"""
Common capability every payload family implements
"""

from abc import ABC, abstractmethod
from typing import Any

from ..indexes import IndexMap


class PayloadCodec(ABC):
    """Decodes one payload family and maps its fields to byte ranges.

    Both methods take the payload sub-buffer only, usually as a memoryview
    over the envelope; ranges returned by index() are relative to the start
    of the payload.
    """

    kind = "opaque"
    family = ""

    @abstractmethod
    def decode(self, payload: bytes) -> Any:
        ...

    @abstractmethod
    def index(self, payload: bytes) -> IndexMap:
        ...

    def __repr__(self):
        return f"{type(self).__name__}(kind={self.kind!r})"
