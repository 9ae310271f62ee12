#!/usr/bin/env python3
"""Example script demonstrating RoleAssembler.render().

This script renders one IAM role from the current AWS account as a
CloudFormation fragment, first sequentially and then with parallel
inline policy fetches.

Usage:
    python example_render.py <role name> [profile]
"""

import sys

from pdum.iam import ExtractorError, RoleAssembler, iam_role_directory


def main():
    """Render a role twice and show that the output is identical."""
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)

    role_name = sys.argv[1]
    profile = sys.argv[2] if len(sys.argv) > 2 else None
    directory = iam_role_directory(profile=profile)

    print("=" * 60)
    print(f"CloudFormation fragment for {role_name}")
    print("=" * 60)

    try:
        sequential = RoleAssembler(directory).render(role_name)
        parallel = RoleAssembler(directory, max_workers=4).render(role_name)
    except ExtractorError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(sequential)
    print("=" * 60)
    print(f"Parallel fetch produced identical output: {sequential == parallel}")


if __name__ == "__main__":
    main()
