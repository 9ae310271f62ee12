"""IAM role dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleSnapshot:
    """Basics of an IAM role as returned by ``GetRole``.

    Attributes
    ----------
    name : str
        Role name, unique within the account (e.g., ``"test-role-name"``).
    description : str
        Free-form description; empty when the role has none.
    path : str
        Role path (e.g., ``"/"``).
    max_session_duration : int
        Maximum session duration in seconds.
    trust_policy : str
        Percent-encoded JSON trust policy (``AssumeRolePolicyDocument``).
    """

    name: str
    description: str
    path: str
    max_session_duration: int
    trust_policy: str


@dataclass(frozen=True)
class InlinePolicy:
    """A policy document embedded in a role."""

    name: str
    document: str


@dataclass(frozen=True)
class ManagedPolicyAttachment:
    """A managed policy attached to a role, identified by ARN only."""

    arn: str


__all__ = ["InlinePolicy", "ManagedPolicyAttachment", "RoleSnapshot"]
