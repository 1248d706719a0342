"""Shared utilities: error types and path helpers."""
