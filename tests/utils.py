"""
Test bootstrap: makes the in-tree ``json_schema_model`` package importable
when the tests run without installing it.
"""
import importlib
import sys
from pathlib import Path

PACKAGE = "json_schema_model"
REPO_ROOT = Path(__file__).resolve().parent.parent


def setup():
    """Put the repository root on ``sys.path`` and import the package."""
    root = str(REPO_ROOT)
    if root not in sys.path:
        sys.path.insert(0, root)
    return importlib.import_module(PACKAGE)
