"""Turn IAM policy documents into YAML and shift text blocks.

IAM hands policy documents around as percent-encoded JSON. CloudFormation
templates want them as YAML nested at a fixed column, so every document goes
through :func:`decode_document`, :func:`json_to_yaml` and finally
:func:`indent`.
"""

from __future__ import annotations

import json
import re
from urllib.parse import unquote_plus

import yaml

from pdum.iam.types import ConversionError, DecodeError

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Large enough that PyYAML never folds long ARNs or conditions.
_YAML_WIDTH = 1 << 16


def decode_document(raw: str) -> str:
    """Reverse the percent-encoding of a policy document.

    Query-string semantics apply, so ``+`` decodes to a space.

    Parameters
    ----------
    raw : str
        Percent-encoded text as returned by IAM.

    Returns
    -------
    str
        The decoded JSON text.

    Raises
    ------
    DecodeError
        If ``raw`` holds a ``%`` that is not followed by two hex digits, or the
        escaped bytes are not valid UTF-8.
    """
    match = _BAD_ESCAPE.search(raw)
    if match:
        bad = raw[match.start() : match.start() + 3]
        raise DecodeError(f"Malformed percent escape {bad!r} at offset {match.start()}")
    try:
        return unquote_plus(raw, errors="strict")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Percent-encoded document is not valid UTF-8: {e}") from e


def json_to_yaml(document: str) -> str:
    """Convert JSON text to block-style YAML.

    Keys keep the order they have in the JSON object; nesting uses two spaces.

    Raises
    ------
    ConversionError
        If ``document`` is not valid JSON, or is a bare scalar.
    """
    try:
        value = json.loads(document)
    except json.JSONDecodeError as e:
        raise ConversionError(f"Policy document is not valid JSON: {e}") from e
    if not isinstance(value, (dict, list)):
        raise ConversionError(f"Policy document must be a JSON object or array, got {type(value).__name__}")
    return yaml.safe_dump(
        value,
        default_flow_style=False,
        sort_keys=False,
        indent=2,
        width=_YAML_WIDTH,
        allow_unicode=True,
    )


def transcode_document(raw: str) -> str:
    """Decode a percent-encoded JSON policy document and return it as YAML."""
    return json_to_yaml(decode_document(raw))


def indent(text: str, columns: int) -> str:
    """Prefix every line of ``text`` with ``columns`` spaces.

    Blank lines are prefixed too, the line count never changes and the line
    separator (``\\r\\n`` or ``\\n``) is kept as found.
    """
    if columns < 0:
        raise ValueError(f"columns must be non-negative, got {columns}")
    separator = "\r\n" if "\r\n" in text else "\n"
    spacer = " " * columns
    return separator.join(spacer + line for line in text.split(separator))


def sanitize_identifier(raw: str) -> str:
    """Make a role name usable as a CloudFormation logical resource name.

    Hyphens are removed. Names that differ only by hyphens collide.

    Example:
        >>> sanitize_identifier("test-role-name")
        'testrolename'
    """
    return raw.replace("-", "")


def yaml_scalar(value: object) -> str:
    """Render a single value as an inline YAML scalar.

    Plain style is used where PyYAML allows it; anything that would otherwise
    span several lines falls back to a double-quoted JSON string, which is
    also valid YAML.
    """
    rendered = yaml.safe_dump(value, default_flow_style=True, width=_YAML_WIDTH, allow_unicode=True)
    if rendered.endswith("\n...\n"):
        rendered = rendered[: -len("\n...\n")]
    rendered = rendered.rstrip("\n")
    if "\n" in rendered:
        return json.dumps(value, ensure_ascii=False)
    return rendered


__all__ = [
    "decode_document",
    "indent",
    "json_to_yaml",
    "sanitize_identifier",
    "transcode_document",
    "yaml_scalar",
]
