"""ItemVault - schema-validated JSON item collections.

Collections carry a JSON Schema; their items are stored as one JSON array
document per collection in an S3-compatible object store.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
