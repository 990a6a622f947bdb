"""Shared helpers: exception types and logging setup."""
