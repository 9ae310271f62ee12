"""Shared constants for pdum.iam."""

from __future__ import annotations

RESOURCE_TYPE = "AWS::IAM::Role"

# Columns at which the policy documents sit inside the rendered resource.
TRUST_POLICY_INDENT = 6
INLINE_POLICY_INDENT = 10

NOT_FOUND_CODES: frozenset[str] = frozenset({"NoSuchEntity", "NoSuchEntityException"})

THROTTLING_CODES: frozenset[str] = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "RequestLimitExceeded",
        "TooManyRequestsException",
    }
)

__all__ = [
    "INLINE_POLICY_INDENT",
    "NOT_FOUND_CODES",
    "RESOURCE_TYPE",
    "THROTTLING_CODES",
    "TRUST_POLICY_INDENT",
]
