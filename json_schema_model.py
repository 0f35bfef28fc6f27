#!/usr/bin/env python3
"""
JSON Schema Model Validator

This script validates a JSON file against a JSON Schema (2020-12) document.

Usage:
    python json_schema_model.py <data_file> <schema_file> [--print-schema] [--verbose]
"""

import sys

from json_schema_model.cli import main

if __name__ == "__main__":
    sys.exit(main())
