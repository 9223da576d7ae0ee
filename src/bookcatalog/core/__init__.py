"""Core infrastructure: logging, exceptions and security helpers."""
