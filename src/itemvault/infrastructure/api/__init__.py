"""HTTP API for ItemVault, built on FastAPI."""
