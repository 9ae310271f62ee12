"""CLI entry point for pdum_iam."""

import sys
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from pdum.iam import directory as directory_module
from pdum.iam.assembler import RoleAssembler
from pdum.iam.sink import emit_fragment
from pdum.iam.types import ConfigurationError, ExtractorError

app = typer.Typer(
    help="Extract AWS IAM roles as CloudFormation YAML",
    no_args_is_help=True,
)
console = Console(stderr=True)


@app.command("version")
def version():
    """Show the version of pdum_iam."""
    from pdum.iam import __version__

    typer.echo(f"pdum_iam version: {__version__}")


@app.command("extract")
def extract(
    role_name: Optional[str] = typer.Option(
        None,
        "--role-name",
        "-r",
        help="AWS IAM role name to extract",
    ),
    suppress_output_stdout: bool = typer.Option(
        False,
        "--suppress-output-stdout",
        "-s",
        help="Do not print the YAML fragment to stdout",
    ),
    file_name: Optional[str] = typer.Option(
        None,
        "--file-name",
        help="The name of the file to write the output to",
    ),
    profile: Optional[str] = typer.Option(
        None,
        "--profile",
        envvar="AWS_PROFILE",
        help="AWS shared config profile to use",
    ),
    region: Optional[str] = typer.Option(
        None,
        "--region",
        envvar="AWS_REGION",
        help="AWS region for the IAM client",
    ),
    workers: int = typer.Option(
        1,
        "--workers",
        min=1,
        help="Number of inline policy documents to fetch in parallel",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print each AWS call as it is made",
    ),
):
    """
    Render an existing IAM role as a CloudFormation AWS::IAM::Role fragment.

    The fragment includes the trust policy, every inline policy and the ARNs
    of the attached managed policies. Only the first page of inline and
    managed policies is read.

    Examples:
        # Print the fragment
        pdum_iam extract --role-name my-app-role

        # Write it to a file without printing
        pdum_iam extract -r my-app-role -s --file-name my-app-role.yaml
    """
    try:
        if not role_name:
            raise ConfigurationError("Role name is required. Please specify the --role-name argument.")

        role_directory = directory_module.iam_role_directory(profile=profile, region=region, verbose=verbose)
        fragment = RoleAssembler(role_directory, max_workers=workers, verbose=verbose).render(role_name)

        written = emit_fragment(fragment, suppress_stdout=suppress_output_stdout, file_name=file_name)
        if written is not None and verbose:
            console.print(f"[green]Saved fragment to:[/green] {written}")
    except ExtractorError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Extraction interrupted by user.[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(e))}")
        sys.exit(1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
