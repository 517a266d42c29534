"""Namespace table and error types."""
