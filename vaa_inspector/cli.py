#!/usr/bin/env python3
"""
Decode a pasted envelope (hex or base64) and show which bytes produced
each field.
"""

import argparse
import json
import sys
from dataclasses import fields, is_dataclass
from datetime import datetime, timezone

from eth_utils import to_checksum_address

from .config import get_environment
from .decoder import OPAQUE, decode, indexes_only, parse_envelope_string
from .header import envelope_digest

# Largest integer a JavaScript number holds exactly
MAX_SAFE_INTEGER = 2 ** 53 - 1


def format_timestamp(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def format_address(address: bytes) -> str:
    """0x-hex, plus the checksummed EVM form when the top 12 bytes are zero"""
    text = "0x" + address.hex()
    if len(address) == 32 and address[:12] == bytes(12) and any(address[12:]):
        text += f" ({to_checksum_address(address[12:])})"
    return text


def to_jsonable(value):
    if is_dataclass(value):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value) if value > MAX_SAFE_INTEGER else value
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    return value


def format_value(name: str, value) -> str:
    if isinstance(value, bytes):
        if len(value) == 32:
            return format_address(value)
        return "0x" + value.hex()
    if name == "timestamp":
        return f"{value} ({format_timestamp(value)})"
    if name == "signatures":
        return f"({len(value)})"
    if is_dataclass(value) or isinstance(value, tuple):
        return json.dumps(to_jsonable(value))
    return str(value)


def print_record(record):
    print("{")
    for f in fields(record):
        print(f"  {f.name}: {format_value(f.name, getattr(record, f.name))},")
    print("}")


def print_indexes(indexes):
    for name, span in indexes.items():
        if span is None:
            print(f"  {name}: absent")
        else:
            print(f"  {name}: [{span[0]}, {span[1]})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Decode a signed message envelope and map fields to bytes")
    parser.add_argument("envelope", help="Envelope as hex (with or without 0x) or base64")
    parser.add_argument("--env", default=None, help="Known emitter environment (MAINNET or TESTNET)")
    parser.add_argument("--indexes-only", action="store_true", help="Only print the byte ranges")
    parser.add_argument("--json", action="store_true", help="Print a JSON document instead of text")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        env = get_environment(args.env)
        buf = parse_envelope_string(args.envelope)
        if args.indexes_only:
            indexes = indexes_only(buf, env)
            result = None
        else:
            result = decode(buf, env)
            indexes = result.indexes
    except ValueError as e:
        print(f"❌ {e}")
        return 1

    if args.json:
        document = {"indexes": to_jsonable(indexes)}
        if result is not None:
            document.update({
                "digest": "0x" + envelope_digest(buf).hex(),
                "header": to_jsonable(result.header),
                "payloadKind": result.payload_kind,
                "payload": to_jsonable(result.payload),
                "payloadError": result.payload_error,
            })
        print(json.dumps(document, indent=2))
        return 0

    if result is not None:
        print(f"✅ Decoded {len(buf)} bytes ({env.lower()})")
        print(f"Message: {result.header.message_id}")
        print(f"Digest: 0x{envelope_digest(buf).hex()}")
        print("\n=== Header ===")
        print_record(result.header)
        print(f"\n=== Payload ({result.payload_kind}) ===")
        if result.payload_kind == OPAQUE:
            print(f"0x{result.payload.hex()}")
            if result.payload_error:
                print(f"⚠️  Payload left undecoded: {result.payload_error}")
        else:
            print_record(result.payload)
        print()

    print("=== Byte ranges ===")
    print_indexes(indexes)
    return 0


if __name__ == "__main__":
    sys.exit(main())
