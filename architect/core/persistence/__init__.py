"""Persistence: the state ledger and build history on disk."""
