"""Custom exceptions for pdum.iam."""

from __future__ import annotations

from typing import Optional


class ExtractorError(Exception):
    """Base class for every error raised while extracting a role."""


class ConfigurationError(ExtractorError):
    """Raised when required input or AWS configuration is missing or unusable."""


class RemoteCallError(ExtractorError):
    """Raised when a call to the IAM service fails."""


class NotFoundError(RemoteCallError):
    """Raised when the requested role or policy does not exist."""


class PolicyFetchError(RemoteCallError):
    """Raised when a single inline policy document cannot be fetched or transcoded."""

    def __init__(self, message: str, *, policy_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.policy_name = policy_name


class TranscodeError(ExtractorError, ValueError):
    """Base for failures turning a policy document into YAML."""


class DecodeError(TranscodeError):
    """Raised on malformed percent-encoding."""


class ConversionError(TranscodeError):
    """Raised when a decoded document is not valid JSON."""


__all__ = [
    "ConfigurationError",
    "ConversionError",
    "DecodeError",
    "ExtractorError",
    "NotFoundError",
    "PolicyFetchError",
    "RemoteCallError",
    "TranscodeError",
]
