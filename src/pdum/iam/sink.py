"""Deliver rendered fragments to stdout and/or a file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import typer


def write_fragment(fragment: str, file_name: Union[str, Path]) -> Path:
    """Write ``fragment`` verbatim to ``file_name``.

    Missing parent directories are created; an existing file is replaced.

    Returns:
        Path to the written file
    """
    path = Path(file_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(fragment, encoding="utf-8")
    return path


def emit_fragment(
    fragment: str,
    *,
    suppress_stdout: bool = False,
    file_name: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """Print the fragment unless suppressed and write it to ``file_name`` when given.

    Returns:
        Path to the written file, or None if no file was requested
    """
    if not suppress_stdout:
        typer.echo(fragment)

    if file_name:
        return write_fragment(fragment, file_name)
    return None


__all__ = ["emit_fragment", "write_fragment"]
