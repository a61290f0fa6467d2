"""Adapters for third-party routing facilities."""
