"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from typing import Any, Dict

import pytest

from satpack import Parser


@pytest.fixture
def single_schema() -> Dict[str, Any]:
    """Schema with no layers: a 16-bit integer, a string and a boolean."""
    return {
        "id": "telemetry",
        "required": ["value1", "value2", "value3"],
        "properties": {
            "value1": {"type": "integer", "size": 16},
            "value2": {"type": "string"},
            "value3": {"type": "boolean"},
        },
    }


@pytest.fixture
def single_message() -> Dict[str, Any]:
    """Message matching single_schema."""
    return {"value1": 50, "value2": "Test", "value3": True}


@pytest.fixture
def multi_schema() -> Dict[str, Any]:
    """Layered schema with nested, flat, two-level and empty alternatives."""
    return {
        "id": "root",
        "oneOf": [
            {
                "id": "status",
                "oneOf": [
                    {
                        "id": "report",
                        "required": ["value1", "value2", "value3", "value4"],
                        "properties": {
                            "value1": {"type": "integer", "size": 8},
                            "value2": {"type": "string"},
                            "value3": {"type": "boolean"},
                            "value4": {"type": "number"},
                        },
                    },
                    {
                        "id": "heartbeat",
                        "required": ["uptime"],
                        "properties": {"uptime": {"type": "integer", "size": 32}},
                    },
                ],
            },
            {
                "id": "command_ack",
                "required": ["code"],
                "properties": {"code": {"type": "integer", "size": 8}},
            },
            {
                "id": "config",
                "oneOf": [
                    {
                        "id": "flags",
                        "required": ["enabled", "mode"],
                        "properties": {
                            "enabled": {"type": "boolean"},
                            "mode": {"enum": ["low", "high"]},
                        },
                    }
                ],
            },
            {
                "id": "singleton",
                "required": [],
                "properties": {},
            },
        ],
    }


@pytest.fixture
def multi_message() -> Dict[str, Any]:
    """Two-layer message matching multi_schema."""
    return {
        "status": {
            "report": {"value1": 50, "value2": "Test", "value3": True, "value4": 13.5}
        }
    }


@pytest.fixture
def single_parser(single_schema: Dict[str, Any]) -> Parser:
    """Parser over single_schema."""
    return Parser(single_schema)


@pytest.fixture
def multi_parser(multi_schema: Dict[str, Any]) -> Parser:
    """Parser over multi_schema."""
    return Parser(multi_schema)


@pytest.fixture
def multi_schema_file(tmp_path: Any, multi_schema: Dict[str, Any]) -> Any:
    """multi_schema written to a temporary JSON file."""
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(multi_schema), encoding="utf-8")
    return path
