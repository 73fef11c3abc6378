"""Core services: URL parsing, credentials, transfer and fetch workflow."""
