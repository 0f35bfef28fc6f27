#!/usr/bin/env python3
"""
Command-line interface for the JSON schema model validator.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Union

from .api import SchemaError
from .parser import SchemaParser
from .serializer import to_json_schema
from .validator import Validator
from .version import __version__

logger = logging.getLogger("json_schema_model")


def load_json(filepath: Union[str, Path]) -> Any:
    """
    Load and parse a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Parsed JSON value

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file contains invalid JSON
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise json.JSONDecodeError(
            f"Failed to parse JSON in {filepath}: {e.msg}",
            e.doc,
            e.pos
        ) from e


def validate_files(data_file: Union[str, Path], schema_file: Union[str, Path],
                   verbose: bool = False, print_schema: bool = False) -> List[str]:
    """
    Validate a JSON data file against a JSON Schema file.

    Args:
        data_file: Path to the data file to validate
        schema_file: Path to the schema file
        verbose: If True, log validation details
        print_schema: If True, print the normalized schema document

    Returns:
        List of error messages (empty when the data is valid)
    """
    try:
        data = load_json(data_file)
    except FileNotFoundError as e:
        return [str(e)]
    except json.JSONDecodeError as e:
        return [str(e)]

    try:
        document = load_json(schema_file)
    except FileNotFoundError as e:
        return [f"Schema file not found: {e}"]
    except json.JSONDecodeError as e:
        return [f"Invalid schema JSON: {e}"]

    try:
        schema = SchemaParser(verbose=verbose).parse(document)
        if print_schema:
            print(json.dumps(to_json_schema(schema), indent=2))
        result = Validator(verbose=verbose).validate(schema, data)
    except SchemaError as e:
        return [f"Invalid schema: {e}"]

    return [str(error) for error in result.errors]


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="json-schema-model",
        description="Validate a JSON file against a JSON Schema (2020-12)."
    )
    parser.add_argument(
        "data_file",
        type=str,
        help="Path to the JSON data file to validate"
    )
    parser.add_argument(
        "schema_file",
        type=str,
        help="Path to the JSON schema file"
    )
    parser.add_argument(
        "--print-schema",
        action="store_true",
        help="Print the schema as normalized by the parser"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(args)


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the script."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    args = parse_args(args)

    errors = validate_files(
        args.data_file,
        args.schema_file,
        verbose=args.verbose,
        print_schema=args.print_schema
    )

    if errors:
        logger.error("Validation failed:")
        for error in errors:
            logger.error(f"  - {error}")
        return 1

    logger.info("Validation successful!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
