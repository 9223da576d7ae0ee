"""API version 2.0."""
