"""
autoapt CLI - AWS Exposure Report

Main entry point for the command-line interface.
"""

import sys
from typing import List, Optional

import click
from rich.console import Console

from . import __version__
from .core.aws_client import AWSClient
from .core.exceptions import AutoAptError, AWSClientError
from .core.logging import setup_logging
from .core.region_manager import DEFAULT_REGIONS, RegionManager
from .reporters.cli_reporter import CLIReporter
from .reporters.text_reporter import DEFAULT_OUTPUT_PATH, TextReporter, read_report
from .scanners.instance_scanner import InstanceScanner
from .web.app import DEFAULT_HOST, DEFAULT_PORT, serve


console = Console()
error_console = Console(stderr=True)


def validate_regions(ctx, param, value: Optional[str]) -> Optional[List[str]]:
    """Validate and parse comma-separated region list."""
    if value is None:
        return None
    regions = [r.strip() for r in value.split(",") if r.strip()]
    if not regions:
        raise click.BadParameter("No valid regions specified")
    return regions


@click.group()
@click.version_option(version=__version__, prog_name="autoapt")
def cli():
    """
    autoapt: AWS Exposure Report

    Lists EC2 instances with the inbound access their security groups
    allow, and RDS databases across several regions, then writes the
    report to a file and serves it as a web page.
    """
    pass


@cli.command("run")
@click.argument(
    "mode",
    required=False,
    type=click.Choice(["just-instances"]),
)
@click.option(
    "--profile",
    "-p",
    default=None,
    help="AWS profile name from ~/.aws/credentials",
)
@click.option(
    "--region",
    "-r",
    default=None,
    help=(
        "Region for the account lookup and EC2 inventory "
        "(default: the configured region, else us-east-1)"
    ),
)
@click.option(
    "--regions",
    callback=validate_regions,
    help="Comma-separated regions for the RDS scan (default: 8 built-in regions)",
)
@click.option(
    "--output",
    "-o",
    default=DEFAULT_OUTPUT_PATH,
    show_default=True,
    help="Report file path",
)
@click.option(
    "--host",
    default=DEFAULT_HOST,
    envvar="AUTOAPT_HOST",
    show_default=True,
    help="Address the web view listens on",
)
@click.option(
    "--port",
    default=DEFAULT_PORT,
    type=int,
    envvar="AUTOAPT_PORT",
    show_default=True,
    help="Port the web view listens on",
)
@click.option(
    "--no-serve",
    is_flag=True,
    help="Write the report and exit without starting the web view",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    show_default=True,
    help="Logging verbosity",
)
@click.option(
    "--log-file",
    default=None,
    help="Also write logs to this file",
)
def run(
    mode: Optional[str],
    profile: Optional[str],
    region: Optional[str],
    regions: Optional[List[str]],
    output: str,
    host: str,
    port: int,
    no_serve: bool,
    log_level: str,
    log_file: Optional[str],
):
    """
    Build the exposure report and serve it.

    Pass MODE "just-instances" to list only instance IDs and names.

    Examples:

        # Full report, served on port 3000
        autoapt run

        # Only instance IDs and names
        autoapt run just-instances

        # Scan two regions for databases, write the file and exit
        autoapt run --regions us-east-1,eu-west-1 --no-serve
    """
    setup_logging(level=log_level, log_file=log_file)
    cli_reporter = CLIReporter(console)
    error_reporter = CLIReporter(error_console)
    target_regions = regions or list(DEFAULT_REGIONS)

    cli_reporter.print_banner()

    try:
        client = AWSClient(region=region, profile=profile)
        try:
            account_id = client.get_account_id()
        except AWSClientError as e:
            error_reporter.print_error(str(e), title="Authentication Error")
            sys.exit(1)

        cli_reporter.print_account(account_id)

        console.print(f"Analyzing EC2 instances for AWS Account: {account_id}\n")
        instances = InstanceScanner(client).scan()

        console.print(
            f"Analyzing RDS databases across multiple regions "
            f"for AWS Account: {account_id}\n"
        )
        cli_reporter.print_scanning_message(target_regions)
        region_manager = RegionManager(profile=profile)
        databases = region_manager.scan_all_regions(
            target_regions,
            progress_callback=cli_reporter.print_region_progress,
        )

        text_reporter = TextReporter(
            output_path=output,
            just_instances=mode == "just-instances",
        )
        output_file = text_reporter.report(databases, instances)

        cli_reporter.report(databases, instances, target_regions)

        if no_serve:
            cli_reporter.print_completion_message(output_file)
            return

        report_text = read_report(output_file)
        cli_reporter.print_completion_message(
            output_file, url=f"http://{host}:{port}/"
        )
        serve(report_text, host=host, port=port)

    except AutoAptError as e:
        error_reporter.print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user.[/yellow]")
        sys.exit(130)


@cli.command("regions")
def list_regions():
    """List the regions scanned for RDS databases by default."""
    count = len(DEFAULT_REGIONS)
    console.print(f"\n[bold]Default RDS scan regions ({count}):[/bold]\n")
    for region in DEFAULT_REGIONS:
        console.print(f"  • {region}")
    console.print()


@cli.command("validate")
@click.option(
    "--profile",
    "-p",
    default=None,
    help="AWS profile name from ~/.aws/credentials",
)
@click.option(
    "--region",
    "-r",
    default=None,
    help="AWS region to use for validation (default: the configured region)",
)
def validate_credentials(profile: Optional[str], region: Optional[str]):
    """Validate AWS credentials and show account info."""
    try:
        client = AWSClient(region=region, profile=profile)
        account_id = client.get_account_id()

        console.print("\n[green bold]AWS credentials are valid![/green bold]")
        console.print(f"\n  Account ID: {account_id}")
        console.print(f"  Region: {client.region}")
        if profile:
            console.print(f"  Profile: {profile}")
        console.print()

    except AWSClientError as e:
        CLIReporter(error_console).print_error(str(e), title="Validation Failed")
        sys.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
