"""Utility functions for palytt_client."""

from palytt_client.utils.sanitize import REDACTED, redact_headers, sanitize_text

__all__ = ["REDACTED", "redact_headers", "sanitize_text"]
