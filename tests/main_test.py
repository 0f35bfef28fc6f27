#!/usr/bin/env python3
"""
Tests for the command-line interface.
"""
import json
import logging
import pytest
import tempfile
from pathlib import Path
from unittest import mock

# autopep8: off
from utils import setup
setup()
from json_schema_model.cli import load_json, main, parse_args, validate_files
# autopep8: on


@pytest.fixture
def valid_schema():
    """Create a valid schema for testing."""
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "title": "Test Schema",
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "age": {"type": "integer", "minimum": 0}
        },
        "required": ["name"],
        "additionalProperties": False
    }


@pytest.fixture
def valid_data():
    """Create valid data for testing."""
    return {
        "name": "John Doe",
        "age": 30
    }


@pytest.fixture
def invalid_data():
    """Create invalid data for testing."""
    return {
        "name": 123,
        "age": -5
    }


@pytest.fixture
def temp_files(valid_schema, valid_data, invalid_data):
    """Create temporary files for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_dir_path = Path(temp_dir)

        def write(name, content):
            path = temp_dir_path / name
            with open(path, "w", encoding="utf-8") as f:
                if isinstance(content, str):
                    f.write(content)
                else:
                    json.dump(content, f)
            return path

        yield {
            "temp_dir": temp_dir_path,
            "schema_file": write("schema.json", valid_schema),
            "valid_data_file": write("valid_data.json", valid_data),
            "invalid_data_file": write("invalid_data.json", invalid_data),
            "invalid_json_file": write("invalid_json.json", "{invalid json"),
            "bad_schema_file": write("bad_schema.json", {"type": "text"}),
        }


def run_main(*arguments):
    with mock.patch("sys.argv", ["json-schema-model", *map(str, arguments)]):
        return main()


def test_load_json_valid(temp_files):
    """Test loading a valid JSON file."""
    data = load_json(temp_files["valid_data_file"])
    assert data == {"name": "John Doe", "age": 30}


def test_load_json_file_not_found():
    """Test loading a non-existent JSON file."""
    with pytest.raises(FileNotFoundError):
        load_json("non_existent.json")


def test_load_json_invalid_json(temp_files):
    """Test loading a file with invalid JSON."""
    with pytest.raises(json.JSONDecodeError) as exc_info:
        load_json(temp_files["invalid_json_file"])
    assert "invalid_json.json" in str(exc_info.value)


def test_validate_files_reports_errors(temp_files):
    errors = validate_files(temp_files["invalid_data_file"], temp_files["schema_file"])
    assert len(errors) == 2
    assert errors[0].startswith("Error at '/name'")
    assert errors[1].startswith("Error at '/age'")


def test_validate_files_bad_schema(temp_files):
    errors = validate_files(temp_files["valid_data_file"], temp_files["bad_schema_file"])
    assert len(errors) == 1
    assert errors[0].startswith("Invalid schema:")


def test_main_valid_data(temp_files, caplog):
    """Test main function with valid data."""
    with caplog.at_level(logging.INFO, logger="json_schema_model"):
        exit_code = run_main(temp_files["valid_data_file"], temp_files["schema_file"])
    assert exit_code == 0
    assert "Validation successful!" in caplog.text


def test_main_invalid_data(temp_files, caplog):
    """Test main function with invalid data."""
    with caplog.at_level(logging.INFO, logger="json_schema_model"):
        exit_code = run_main(temp_files["invalid_data_file"], temp_files["schema_file"])
    assert exit_code == 1
    assert "Validation failed:" in caplog.text
    assert "  - Error at '/age'" in caplog.text


def test_main_invalid_json(temp_files):
    """Test main function with invalid JSON."""
    assert run_main(temp_files["invalid_json_file"], temp_files["schema_file"]) == 1


def test_main_file_not_found(temp_files):
    """Test main function with non-existent file."""
    assert run_main("non_existent.json", temp_files["schema_file"]) == 1


def test_main_schema_not_found(temp_files):
    """Test main function with non-existent schema file."""
    assert run_main(temp_files["valid_data_file"], "non_existent.json") == 1


def test_main_bad_schema(temp_files):
    assert run_main(temp_files["valid_data_file"], temp_files["bad_schema_file"]) == 1


def test_main_verbose(temp_files):
    """Test main function with verbose flag."""
    assert run_main(temp_files["valid_data_file"], temp_files["schema_file"], "--verbose") == 0


def test_main_print_schema(temp_files, capsys):
    exit_code = run_main(temp_files["valid_data_file"], temp_files["schema_file"], "--print-schema")
    assert exit_code == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["type"] == "object"
    assert printed["required"] == ["name"]
    assert printed["additionalProperties"] is False


def test_parse_args():
    args = parse_args(["data.json", "schema.json", "-v"])
    assert args.data_file == "data.json"
    assert args.schema_file == "schema.json"
    assert args.verbose
    assert not args.print_schema


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["--version"])
    assert exc_info.value.code == 0
    assert "json-schema-model" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
