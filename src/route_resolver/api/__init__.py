"""HTTP API for the definition resolver."""
