"""HTTP API for reading and updating delivery records."""
