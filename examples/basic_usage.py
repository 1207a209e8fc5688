#!/usr/bin/env python3
"""Basic usage example for satpack.

This example demonstrates:
1. Loading a layered schema from a JSON file
2. Encoding messages to compact binary format
3. Decoding back to JSON
4. Calculating message sizes
"""

from __future__ import annotations

import json
from pathlib import Path

from satpack import Parser, encoded_size, max_encoded_size

SCHEMA_PATH = Path(__file__).parent / "schemas" / "buoy.json"


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("satpack Basic Usage Example")
    print("=" * 60)
    print()

    # Load the schema
    print("1. Loading the buoy schema...")
    parser = Parser.from_text(SCHEMA_PATH.read_text(encoding="utf-8"))
    print(f"   Top-level messages: {sorted(parser.get_top_level_names())}")
    print(f"   Largest possible message: {max_encoded_size(parser)} bytes")
    print()

    # Create a message
    message = {
        "telemetry": {
            "position": {
                "buoy_id": 7,
                "latitude": 44.6488,
                "longitude": -63.5752,
                "battery_mv": 3712,
            }
        }
    }
    json_size = len(json.dumps(message, separators=(",", ":")))

    # Encode the message
    print("2. Encoding to compact binary format...")
    encoded_data = parser.encode(message)
    print(f"   Predicted size: {encoded_size(parser, message)} bytes")
    print(f"   Encoded size: {len(encoded_data)} bytes (JSON: {json_size} bytes)")
    print(f"   Hex: {encoded_data.hex()}")
    print()

    # Decode the message
    print("3. Decoding from binary...")
    decoded = parser.decode(encoded_data)
    print(f"   {parser.decode_to_text(encoded_data)}")
    print()

    # Verify round-trip
    print("4. Verifying round-trip...")
    if decoded == message:
        print("   ✓ Round-trip successful! Decoded message matches original.")
    else:
        print("   ✗ Round-trip failed!")
    print()

    # A message with no fields costs only its tag byte
    print("5. Encoding a ping...")
    print(f"   {parser.encode({'ping': {}}).hex()}")
    print()


if __name__ == "__main__":
    main()
