"""Unit tests for the Parser handle."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict

import pytest

from satpack import Bottom, EncodeError, Layer, ParseError, Parser


class TestConstruction:
    """Test building parsers."""

    def test_from_text(self, multi_schema: Dict[str, Any]) -> None:
        """Test constructing from JSON text."""
        parser = Parser.from_text(json.dumps(multi_schema))

        assert isinstance(parser.schema, Layer)
        assert parser.get_top_level_names() == {"status", "command_ack", "config", "singleton"}

    @pytest.mark.parametrize("text", ["{", "", "not json", "NaN"])
    def test_from_text_invalid_json(self, text: str) -> None:
        """Test malformed schema text."""
        with pytest.raises(ParseError, match="Schema could not be serialized"):
            Parser.from_text(text)

    def test_from_text_not_a_map(self) -> None:
        """Test valid JSON that is not an object."""
        with pytest.raises(ParseError, match="not a valid Key-Value Map"):
            Parser.from_text("[1, 2, 3]")

    def test_from_node(self, multi_parser: Parser) -> None:
        """Test a sub-schema parser drops the outer tag byte."""
        status = Parser.from_node(multi_parser.get_sub_schema("status"))
        message = {"heartbeat": {"uptime": 1000}}

        assert list(status.encode(message)) == [1, 0xE8, 0x03, 0, 0]
        assert list(multi_parser.encode({"status": message})) == [0, 1, 0xE8, 0x03, 0, 0]
        assert status.decode([1, 0xE8, 0x03, 0, 0]) == message

    def test_from_node_rejects_other_values(self) -> None:
        """Test from_node requires a compiled node."""
        with pytest.raises(ParseError):
            Parser.from_node({"required": []})  # type: ignore[arg-type]

    def test_repr(self, multi_parser: Parser, single_parser: Parser) -> None:
        """Test the debugging representation."""
        assert repr(single_parser) == "Parser(bottom='telemetry')"
        assert "command_ack" in repr(multi_parser)


class TestTextInterface:
    """Test JSON text encode/decode."""

    def test_encode_from_text(self, multi_parser: Parser) -> None:
        """Test encoding JSON message text."""
        text = '{"config": {"flags": {"enabled": true, "mode": "high"}}}'

        assert list(multi_parser.encode_from_text(text)) == [2, 0, 1, 1]

    def test_encode_from_text_invalid(self, multi_parser: Parser) -> None:
        """Test malformed message text."""
        with pytest.raises(ParseError, match="String could not be serialized"):
            multi_parser.encode_from_text('{"config": ')

    def test_decode_to_text(self, multi_parser: Parser) -> None:
        """Test decoding to compact JSON."""
        text = multi_parser.decode_to_text([2, 0, 1, 1])

        assert text == '{"config":{"flags":{"enabled":true,"mode":"high"}}}'

    def test_decode_to_text_keeps_field_order(self, single_parser: Parser) -> None:
        """Test fields appear in declared order."""
        text = single_parser.decode_to_text([50, 0, 4, 84, 101, 115, 116, 1])

        assert text == '{"value1":50,"value2":"Test","value3":true}'

    def test_decode_to_text_non_ascii(self) -> None:
        """Test non-ASCII text is kept as-is."""
        parser = Parser({"id": "r", "required": ["s"], "properties": {"s": {"type": "string"}}})

        assert parser.decode_to_text(b"\x03n\xc3\xa9") == '{"s":"né"}'

    def test_text_round_trip(self, multi_parser: Parser, multi_message: Dict[str, Any]) -> None:
        """Test text in, bytes, text out."""
        data = multi_parser.encode_from_text(json.dumps(multi_message))

        assert json.loads(multi_parser.decode_to_text(data)) == multi_message


class TestIntrospection:
    """Test top-level names and sub-schemas."""

    def test_top_level_names_bottom(self, single_parser: Parser) -> None:
        """Test a record root reports its own id."""
        assert single_parser.get_top_level_names() == {"telemetry"}

    def test_top_level_names_bottom_without_id(self) -> None:
        """Test a record root without an id has no name to report."""
        parser = Parser({"required": [], "properties": {}})

        with pytest.raises(ParseError, match="Missing an ID"):
            parser.get_top_level_names()

    def test_get_sub_schema(self, multi_parser: Parser) -> None:
        """Test looking up alternatives by name."""
        ack = multi_parser.get_sub_schema("command_ack")
        status = multi_parser.get_sub_schema("status")

        assert isinstance(ack, Bottom)
        assert ack.name == "command_ack"
        assert isinstance(status, Layer)
        assert set(status.lookup) == {"report", "heartbeat"}

    def test_get_sub_schema_unknown(self, multi_parser: Parser) -> None:
        """Test unknown names."""
        with pytest.raises(EncodeError) as exc_info:
            multi_parser.get_sub_schema("missing")

        assert exc_info.value.position == "missing"

    def test_get_sub_schema_on_bottom(self, single_parser: Parser) -> None:
        """Test a record root has no sub-schemas."""
        with pytest.raises(ParseError):
            single_parser.get_sub_schema("telemetry")


class TestSharing:
    """Test a parser is safe to share between threads."""

    def test_concurrent_calls(self, multi_parser: Parser, multi_message: Dict[str, Any]) -> None:
        """Test concurrent encode/decode calls agree with serial ones."""
        expected = multi_parser.encode(multi_message)

        def round_trip(_: int) -> Any:
            return multi_parser.decode(multi_parser.encode(multi_message))

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(round_trip, range(64)))

        assert all(result == multi_message for result in results)
        assert multi_parser.encode(multi_message) == expected
