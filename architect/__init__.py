"""
Architect: idempotent scaffolding builds from a YAML draft.
"""

__version__ = "0.1.0"
