"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path
from json_utility import ErrorHandler, JSONUtils


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def error_handler():
    """Error handler with a fresh diagnostic history."""
    return ErrorHandler()


@pytest.fixture
def utils(error_handler):
    """Facade with default configuration."""
    return JSONUtils(error_handler=error_handler)


@pytest.fixture
def person_schema():
    """Draft-07 schema requiring a string name and an integer age."""
    return (
        '{ "$schema": "http://json-schema.org/draft-07/schema#", "type": "object", '
        '"properties": { "name": { "type": "string" }, "age": { "type": "integer" } }, '
        '"required": ["name", "age"] }'
    )


@pytest.fixture
def sample_person_json():
    """Sample person document."""
    return '{"name":"Aashish","age":24}'


@pytest.fixture
def write_file(temp_dir):
    """Write text to a file in the temporary directory and return its path."""
    def _write(name: str, content: str) -> Path:
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
