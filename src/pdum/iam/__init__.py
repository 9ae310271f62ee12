"""Extract AWS IAM roles as CloudFormation YAML"""

from pdum.iam.assembler import RoleAssembler, render_role
from pdum.iam.directory import IamRoleDirectory, RoleDirectory, iam_role_directory
from pdum.iam.transcode import decode_document, indent, json_to_yaml, sanitize_identifier, transcode_document
from pdum.iam.types import (
    ConfigurationError,
    ConversionError,
    DecodeError,
    ExtractorError,
    ManagedPolicyAttachment,
    NotFoundError,
    PolicyFetchError,
    RemoteCallError,
    RoleSnapshot,
)

__version__ = "0.1.0-alpha"


__all__ = [
    "__version__",
    "decode_document",
    "iam_role_directory",
    "indent",
    "json_to_yaml",
    "render_role",
    "sanitize_identifier",
    "transcode_document",
    "ConfigurationError",
    "ConversionError",
    "DecodeError",
    "ExtractorError",
    "IamRoleDirectory",
    "ManagedPolicyAttachment",
    "NotFoundError",
    "PolicyFetchError",
    "RemoteCallError",
    "RoleAssembler",
    "RoleDirectory",
    "RoleSnapshot",
]
