"""
Version information for json_schema_model.
"""

__version__ = "1.0.0"
