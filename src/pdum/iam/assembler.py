"""Assemble a CloudFormation ``AWS::IAM::Role`` fragment from a live role.

The assembler performs four kinds of lookups through a
:class:`~pdum.iam.directory.RoleDirectory` (role, inline policy names,
managed policies, one document per inline policy), turns every policy
document into YAML and nests it at the right column of a fixed template.

Any failure aborts the render: no partial fragment is ever returned.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from rich.console import Console

from pdum.iam.directory import RoleDirectory
from pdum.iam.transcode import indent, sanitize_identifier, transcode_document, yaml_scalar
from pdum.iam.types import (
    INLINE_POLICY_INDENT,
    RESOURCE_TYPE,
    TRUST_POLICY_INDENT,
    ExtractorError,
    InlinePolicy,
    PolicyFetchError,
    RoleSnapshot,
    TranscodeError,
)

console = Console(stderr=True)

_POLICY_SEPARATOR = "\n      - "
_ARN_SEPARATOR = "\n    - "


class RoleAssembler:
    """Render IAM roles as CloudFormation YAML fragments.

    Parameters
    ----------
    directory : RoleDirectory
        Source of role and policy data.
    max_workers : int, default 1
        Number of threads used to fetch inline policy documents. The order of
        the rendered policies always follows the listing order.
    verbose : bool, default False
        Print progress to the stderr console.
    """

    def __init__(self, directory: RoleDirectory, *, max_workers: int = 1, verbose: bool = False) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.directory = directory
        self.max_workers = max_workers
        self.verbose = verbose

    def render(self, role_name: str) -> str:
        """Return the CloudFormation fragment for ``role_name``.

        Raises
        ------
        NotFoundError
            If the role does not exist.
        RemoteCallError
            If the role or one of its policy listings cannot be read.
        PolicyFetchError
            If an inline policy document cannot be fetched or transcoded.
        TranscodeError
            If the trust policy cannot be decoded or converted.
        """
        if not role_name:
            raise ValueError("role_name must be a non-empty string")

        role = self.directory.get_role(role_name)
        inline_names = self.directory.list_inline_policy_names(role_name)
        managed = self.directory.list_attached_managed_policies(role_name)

        if self.verbose:
            console.print(
                f"[cyan]Role '{role_name}': {len(inline_names)} inline, {len(managed)} managed policies[/cyan]"
            )

        inline_policies = self._fetch_inline_policies(role_name, inline_names)
        segments = [self._policy_segment(role_name, policy) for policy in inline_policies]

        trust_policy = transcode_document(role.trust_policy).rstrip("\n")

        return _fragment(
            role,
            role_name=role_name,
            logical_name=sanitize_identifier(role_name),
            trust_policy=indent(trust_policy, TRUST_POLICY_INDENT),
            segments=segments,
            managed_policy_arns=[attachment.arn for attachment in managed],
        )

    def _fetch_inline_policy(self, role_name: str, policy_name: str) -> InlinePolicy:
        try:
            document = self.directory.get_inline_policy_document(role_name, policy_name)
        except ExtractorError as e:
            raise PolicyFetchError(
                f"Failed getting inline policy '{policy_name}' for role '{role_name}':\n{e}",
                policy_name=policy_name,
            ) from e
        return InlinePolicy(name=policy_name, document=document)

    def _fetch_inline_policies(self, role_name: str, policy_names: Iterable[str]) -> list[InlinePolicy]:
        policy_names = list(policy_names)
        if self.max_workers == 1 or len(policy_names) < 2:
            return [self._fetch_inline_policy(role_name, name) for name in policy_names]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            # Executor.map yields results in input order and re-raises the first failure.
            return list(pool.map(lambda name: self._fetch_inline_policy(role_name, name), policy_names))

    def _policy_segment(self, role_name: str, policy: InlinePolicy) -> str:
        try:
            document = transcode_document(policy.document).rstrip("\n")
        except TranscodeError as e:
            raise PolicyFetchError(
                f"Failed converting inline policy '{policy.name}' for role '{role_name}': {e}",
                policy_name=policy.name,
            ) from e
        return (
            f"PolicyName: {yaml_scalar(policy.name)}\n"
            f"        PolicyDocument:\n"
            f"{indent(document, INLINE_POLICY_INDENT)}"
        )


def _fragment(
    role: RoleSnapshot,
    *,
    role_name: str,
    logical_name: str,
    trust_policy: str,
    segments: list[str],
    managed_policy_arns: list[str],
) -> str:
    if segments:
        policies = "Policies:" + _POLICY_SEPARATOR + _POLICY_SEPARATOR.join(segments)
    else:
        policies = "Policies: []"

    if managed_policy_arns:
        arns = "ManagedPolicyArns:" + _ARN_SEPARATOR + _ARN_SEPARATOR.join(yaml_scalar(a) for a in managed_policy_arns)
    else:
        arns = "ManagedPolicyArns: []"

    return (
        f"{logical_name}:\n"
        f"  Type: {RESOURCE_TYPE}\n"
        f"  Properties:\n"
        f"    RoleName: {yaml_scalar(role_name)}\n"
        f"    Description: {yaml_scalar(role.description)}\n"
        f"    AssumeRolePolicyDocument:\n"
        f"{trust_policy}\n"
        f"    MaxSessionDuration: {role.max_session_duration}\n"
        f"    Path: {yaml_scalar(role.path)}\n"
        f"    {policies}\n"
        f"    {arns}\n"
    )


def render_role(directory: RoleDirectory, role_name: str, **kwargs) -> str:
    """Render ``role_name`` with a one-off :class:`RoleAssembler`.

    Example:
        >>> from pdum.iam import iam_role_directory, render_role
        >>> print(render_role(iam_role_directory(profile="dev"), "my-app-role"))
    """
    return RoleAssembler(directory, **kwargs).render(role_name)


__all__ = ["RoleAssembler", "render_role"]
