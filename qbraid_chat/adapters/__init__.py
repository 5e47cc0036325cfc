"""Adapters for the qBraid API, credentials and the web UI."""
