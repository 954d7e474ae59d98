"""
Index maps: field name -> [start, end) byte range, or None when the field
belongs to a discriminant branch that was not taken.
"""

from typing import Dict, Optional, Tuple

Span = Tuple[int, int]
IndexMap = Dict[str, Optional[Span]]

PAYLOAD_KEY_PREFIX = "payload-"


def compose(payload_offset: int, relative: IndexMap) -> IndexMap:
    """Shift payload-relative ranges so they are absolute over the envelope"""
    absolute: IndexMap = {}
    for name, span in relative.items():
        if span is None:
            absolute[name] = None
        else:
            absolute[name] = (span[0] + payload_offset, span[1] + payload_offset)
    return absolute


def prefixed(prefix: str, index_map: IndexMap) -> IndexMap:
    return {f"{prefix}{name}": span for name, span in index_map.items()}

