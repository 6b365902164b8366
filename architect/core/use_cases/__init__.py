"""Use cases: the entry points behind every CLI command."""
