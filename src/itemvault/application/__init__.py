"""Application layer: use cases composed from domain services."""
