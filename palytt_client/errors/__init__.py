"""Error taxonomy: one exception type, tagged by kind."""

from palytt_client.errors.mapping import UnexpectedStatusError, from_cause, from_status_code
from palytt_client.errors.presentation import (
    analytics_code,
    describe,
    failure_reason,
    recovery_suggestion,
    should_report,
)
from palytt_client.errors.types import APIError, ErrorKind

__all__ = [
    "APIError",
    "ErrorKind",
    "UnexpectedStatusError",
    "analytics_code",
    "describe",
    "failure_reason",
    "from_cause",
    "from_status_code",
    "recovery_suggestion",
    "should_report",
]
