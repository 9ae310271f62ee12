"""Role lookups against AWS IAM.

:class:`RoleDirectory` is the seam between the rendering pipeline and the IAM
service. :class:`IamRoleDirectory` implements it on a boto3 client; tests
substitute an in-memory implementation.

Only the first page of the inline and managed policy listings is read.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union
from urllib.parse import quote

import backoff
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError
from rich.console import Console

from pdum.iam.types import (
    ConfigurationError,
    ManagedPolicyAttachment,
    NotFoundError,
    RemoteCallError,
    RoleSnapshot,
)
from pdum.iam.types.constants import NOT_FOUND_CODES, THROTTLING_CODES

console = Console(stderr=True)


class RoleDirectory(ABC):
    """Read access to IAM roles and their policies."""

    @abstractmethod
    def get_role(self, role_name: str) -> RoleSnapshot:
        """Return the role basics. Raises ``NotFoundError`` if the role does not exist."""

    @abstractmethod
    def list_inline_policy_names(self, role_name: str) -> list[str]:
        """Return the names of the role's inline policies in listing order."""

    @abstractmethod
    def list_attached_managed_policies(self, role_name: str) -> list[ManagedPolicyAttachment]:
        """Return the managed policies attached to the role in listing order."""

    @abstractmethod
    def get_inline_policy_document(self, role_name: str, policy_name: str) -> str:
        """Return the percent-encoded JSON document of one inline policy."""


def _error_code(error: Exception) -> str:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "")
    return ""


def _not_throttled(error: Exception) -> bool:
    return _error_code(error) not in THROTTLING_CODES


def _encode_document(document: Union[str, dict, Any]) -> str:
    """Return the percent-encoded JSON form of a policy document.

    botocore JSON-decodes policy documents before handing them back, so most
    responses carry a mapping here. Strings are passed through untouched.
    """
    if isinstance(document, str):
        return document
    return quote(json.dumps(document), safe="")


class IamRoleDirectory(RoleDirectory):
    """:class:`RoleDirectory` backed by a boto3 IAM client.

    Parameters
    ----------
    client
        A boto3 IAM client, e.g. from ``pdum.iam._clients.iam_client``.
    verbose : bool
        Print each call to the stderr console before it is made.
    """

    def __init__(self, client, *, verbose: bool = False) -> None:
        self._client = client
        self._verbose = verbose

    @backoff.on_exception(backoff.expo, ClientError, max_tries=5, giveup=_not_throttled)
    def _invoke(self, method: Callable[..., dict], **kwargs) -> dict:
        return method(**kwargs)

    def _call(self, operation: str, description: str, **kwargs) -> dict:
        if self._verbose:
            console.print(f"[cyan]{description}...[/cyan]")
        method = getattr(self._client, operation)
        try:
            return self._invoke(method, **kwargs)
        except NoCredentialsError as e:
            raise ConfigurationError(f"Failed to load AWS credentials. {e}") from e
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise NotFoundError(f"Failed {description} with error:\n{e}") from e
            raise RemoteCallError(f"Failed {description} with error:\n{e}") from e
        except BotoCoreError as e:
            raise RemoteCallError(f"Failed {description} with error:\n{e}") from e

    def _warn_truncated(self, response: dict, listing: str, role_name: str) -> None:
        if response.get("IsTruncated"):
            console.print(
                f"[yellow]Warning:[/yellow] {listing} for role '{role_name}' has more than one page; "
                "only the first page is included."
            )

    def get_role(self, role_name: str) -> RoleSnapshot:
        response = self._call("get_role", f"getting IAM role '{role_name}'", RoleName=role_name)
        role = response["Role"]
        return RoleSnapshot(
            name=role.get("RoleName", role_name),
            description=role.get("Description", ""),
            path=role.get("Path", "/"),
            max_session_duration=int(role.get("MaxSessionDuration", 3600)),
            trust_policy=_encode_document(role.get("AssumeRolePolicyDocument", "")),
        )

    def list_inline_policy_names(self, role_name: str) -> list[str]:
        response = self._call(
            "list_role_policies",
            f"getting IAM role inline policies for role '{role_name}'",
            RoleName=role_name,
        )
        self._warn_truncated(response, "Inline policy listing", role_name)
        return list(response.get("PolicyNames", []))

    def list_attached_managed_policies(self, role_name: str) -> list[ManagedPolicyAttachment]:
        response = self._call(
            "list_attached_role_policies",
            f"getting IAM role managed policies for role '{role_name}'",
            RoleName=role_name,
        )
        self._warn_truncated(response, "Managed policy listing", role_name)
        return [ManagedPolicyAttachment(arn=p["PolicyArn"]) for p in response.get("AttachedPolicies", [])]

    def get_inline_policy_document(self, role_name: str, policy_name: str) -> str:
        response = self._call(
            "get_role_policy",
            f"getting inline policy '{policy_name}' for role '{role_name}'",
            RoleName=role_name,
            PolicyName=policy_name,
        )
        return _encode_document(response["PolicyDocument"])


def iam_role_directory(
    *, profile: Optional[str] = None, region: Optional[str] = None, verbose: bool = False
) -> IamRoleDirectory:
    """Build an :class:`IamRoleDirectory` from an AWS profile and region."""
    from pdum.iam._clients import iam_client

    return IamRoleDirectory(iam_client(profile=profile, region=region), verbose=verbose)


__all__ = ["IamRoleDirectory", "RoleDirectory", "iam_role_directory"]
