"""Internal helpers to construct AWS service clients.

These helpers centralize ``boto3`` session and client construction to keep
retry options consistent across the codebase. They are intentionally private;
the public API surface remains in ``directory.py`` and ``assembler.py``.
"""

from __future__ import annotations

from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from pdum.iam.types import ConfigurationError

# Throttling retries live in IamRoleDirectory (backoff); botocore makes a single attempt.
_CLIENT_CONFIG = Config(retries={"max_attempts": 1, "mode": "standard"})


def session(*, profile: Optional[str] = None, region: Optional[str] = None) -> boto3.Session:
    """boto3 session for ``profile``/``region`` (default credential chain when omitted)."""
    try:
        return boto3.Session(profile_name=profile, region_name=region)
    except BotoCoreError as e:
        raise ConfigurationError(f"Failed to load AWS configuration: {e}") from e


def iam_client(*, profile: Optional[str] = None, region: Optional[str] = None):
    """IAM service client."""
    try:
        return session(profile=profile, region=region).client("iam", config=_CLIENT_CONFIG)
    except BotoCoreError as e:
        raise ConfigurationError(f"Failed to create IAM client: {e}") from e
