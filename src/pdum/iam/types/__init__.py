"""Public exports for pdum.iam types."""

from __future__ import annotations

from .constants import INLINE_POLICY_INDENT, RESOURCE_TYPE, TRUST_POLICY_INDENT
from .exceptions import (
    ConfigurationError,
    ConversionError,
    DecodeError,
    ExtractorError,
    NotFoundError,
    PolicyFetchError,
    RemoteCallError,
    TranscodeError,
)
from .role import InlinePolicy, ManagedPolicyAttachment, RoleSnapshot

__all__ = [
    "INLINE_POLICY_INDENT",
    "RESOURCE_TYPE",
    "TRUST_POLICY_INDENT",
    "ConfigurationError",
    "ConversionError",
    "DecodeError",
    "ExtractorError",
    "InlinePolicy",
    "ManagedPolicyAttachment",
    "NotFoundError",
    "PolicyFetchError",
    "RemoteCallError",
    "RoleSnapshot",
    "TranscodeError",
]
