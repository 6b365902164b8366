"""Observability: logging configuration."""
