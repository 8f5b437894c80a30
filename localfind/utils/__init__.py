"""Logging, error handling and timing helpers."""
