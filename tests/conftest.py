"""Shared fixtures: an in-memory RoleDirectory."""

from __future__ import annotations

import json
from typing import Optional
from urllib.parse import quote

import pytest

from pdum.iam.directory import RoleDirectory
from pdum.iam.types import ManagedPolicyAttachment, NotFoundError, RemoteCallError, RoleSnapshot


def encode(document: dict) -> str:
    """Percent-encode a JSON document the way IAM returns it."""
    return quote(json.dumps(document), safe="")


class FakeRoleDirectory(RoleDirectory):
    """RoleDirectory serving a single role from memory and recording every call."""

    def __init__(
        self,
        *,
        role: Optional[RoleSnapshot] = None,
        inline: Optional[dict[str, str]] = None,
        managed: Optional[list[str]] = None,
        failing_policies: tuple[str, ...] = (),
        failing_listings: tuple[str, ...] = (),
    ) -> None:
        self.role = role
        self.inline = dict(inline or {})
        self.managed = list(managed or [])
        self.failing_policies = failing_policies
        self.failing_listings = failing_listings
        self.calls: list[tuple] = []

    def get_role(self, role_name: str) -> RoleSnapshot:
        self.calls.append(("get_role", role_name))
        if self.role is None:
            raise NotFoundError(f"Role '{role_name}' not found")
        return self.role

    def list_inline_policy_names(self, role_name: str) -> list[str]:
        self.calls.append(("list_inline_policy_names", role_name))
        if "list_inline_policy_names" in self.failing_listings:
            raise RemoteCallError(f"Failed listing inline policies for {role_name}")
        return list(self.inline)

    def list_attached_managed_policies(self, role_name: str) -> list[ManagedPolicyAttachment]:
        self.calls.append(("list_attached_managed_policies", role_name))
        if "list_attached_managed_policies" in self.failing_listings:
            raise RemoteCallError(f"Failed listing managed policies for {role_name}")
        return [ManagedPolicyAttachment(arn=arn) for arn in self.managed]

    def get_inline_policy_document(self, role_name: str, policy_name: str) -> str:
        self.calls.append(("get_inline_policy_document", role_name, policy_name))
        if policy_name in self.failing_policies:
            raise RemoteCallError(f"Access denied for {policy_name}")
        return self.inline[policy_name]


@pytest.fixture
def mock_role() -> RoleSnapshot:
    return RoleSnapshot(
        name="test-role-name",
        description="mock-description",
        path="/",
        max_session_duration=3600,
        trust_policy=encode({"a": 1}),
    )


@pytest.fixture
def mock_directory(mock_role) -> FakeRoleDirectory:
    return FakeRoleDirectory(
        role=mock_role,
        inline={"policy1": encode({"b": 2}), "policy2": encode({"b": 2})},
        managed=["mock-policy-1-arn"],
    )
