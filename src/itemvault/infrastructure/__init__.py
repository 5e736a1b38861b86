"""Infrastructure adapters: persistence, object storage and the HTTP API."""
