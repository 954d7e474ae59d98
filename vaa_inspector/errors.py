"""
Exceptions raised while decoding signed message envelopes
"""


class VaaDecodeError(ValueError):
    """Base class for envelope and payload decode failures"""


class TruncatedBuffer(VaaDecodeError):
    """Buffer is shorter than the structure it declares"""

    def __init__(self, what: str, needed: int, available: int):
        self.what = what
        self.needed = needed
        self.available = available
        super().__init__(f"Truncated {what}: need {needed} bytes, got {available}")


class UnsupportedPayloadType(VaaDecodeError):
    """Payload discriminant is not one this decoder handles"""

    def __init__(self, family: str, payload_type: int):
        self.family = family
        self.payload_type = payload_type
        super().__init__(f"Unsupported {family} payload type: {payload_type}")


class UnknownRelayPayloadType(VaaDecodeError):
    """Relay instruction discriminant is neither delivery nor redelivery"""

    def __init__(self, payload_type: int):
        self.payload_type = payload_type
        super().__init__(f"Unknown relay payload type: {payload_type}")


class InvalidEnvelopeString(VaaDecodeError):
    """Pasted text is neither hex nor base64"""
