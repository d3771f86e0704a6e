"""
botbrain package bootstrap.

Subpackages:
- interface: Adapters for the CLI and telemetry layers.
- domain: Move decision engine, bot roster, and bot game sessions.
- infrastructure: Configuration and in-memory session storage.
"""

__all__ = ["interface", "domain", "infrastructure"]
