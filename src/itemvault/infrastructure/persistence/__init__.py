"""Relational persistence: engine, models and repositories."""
