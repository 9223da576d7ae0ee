"""API version 1.0."""
