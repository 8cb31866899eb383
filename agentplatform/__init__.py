"""Shared building blocks for agent platform services: API reply envelopes, an HTTP client and logging."""

__version__ = "0.1.0"