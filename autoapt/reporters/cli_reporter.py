"""
CLI Reporter Module
===================

Rich terminal output for autoapt: the opening banner, per-region scan
progress and a summary of what the report contains.

The full findings go to the report file; the terminal shows tables
that make open-to-the-world rules easy to spot.

Classes
-------
CLIReporter
    Main reporter class for terminal output.

Example
-------
>>> from autoapt.reporters import CLIReporter
>>>
>>> reporter = CLIReporter()
>>> reporter.print_banner()
>>> reporter.report(databases, instances, regions)

See Also
--------
rich : Python library for rich text and formatting.
TextReporter : Report file output.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from autoapt.core.records import DatabaseRecord, InstanceRecord
from autoapt.reporters.text_reporter import count_databases

logger = logging.getLogger(__name__)

BANNER_LINES = (
    "Hello! This is the Automatic APT™.",
    "You are running me in order to hack your own services.",
    "I will let you know what's vulnerable. Stand by.",
)


class CLIReporter:
    """
    Reporter for displaying scan progress and results in the terminal.

    Parameters
    ----------
    console : Console, optional
        Rich Console instance. If not provided, creates a new one.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def report(
        self,
        databases: Mapping[str, Sequence[DatabaseRecord]],
        instances: Sequence[InstanceRecord],
        regions: Sequence[str],
    ) -> None:
        """
        Print the summary of a completed run.

        Parameters
        ----------
        databases : mapping
            Result of the multi-region scan.
        instances : sequence of InstanceRecord
            Result of the instance inventory.
        regions : sequence of str
            Regions the database scan was asked to cover.
        """
        self._print_header(regions)
        self._print_database_table(databases, regions)
        self._print_exposure_table(instances)

    # =========================================================================
    # Private Methods: Output Formatting
    # =========================================================================

    def _print_header(self, regions: Sequence[str]) -> None:
        region_text = (
            ", ".join(regions) if len(regions) <= 5
            else f"{len(regions)} regions"
        )

        header_text = Text()
        header_text.append("\nExposure Report\n", style="bold blue")
        header_text.append(f"Database regions: {region_text}", style="dim")

        self.console.print(Panel(header_text, border_style="blue"))

    def _print_database_table(
        self,
        databases: Mapping[str, Sequence[DatabaseRecord]],
        regions: Sequence[str],
    ) -> None:
        counts = count_databases(databases)

        table = Table(title="\nRDS Instances by Region", title_style="bold")
        table.add_column("Region", style="yellow", no_wrap=True)
        table.add_column("Databases", justify="right")

        for region in sorted(set(regions) | set(counts)):
            if region in counts:
                table.add_row(region, str(counts[region]))
            else:
                table.add_row(region, "[red]not reported[/red]")

        self.console.print(table)

    def _print_exposure_table(self, instances: Sequence[InstanceRecord]) -> None:
        if not instances:
            self.console.print("\n[green]No EC2 instances found.[/green]")
            return

        table = Table(title="\nEC2 Instances", title_style="bold")
        table.add_column("Instance ID", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Public IP", style="dim")
        table.add_column("Open to 0.0.0.0/0", style="red")

        for instance in instances:
            exposed = self._format_exposed(instance)
            table.add_row(
                instance.instance_id,
                escape(instance.name or "N/A"),
                instance.public_ip or "-",
                exposed or "[green]none[/green]",
            )

        self.console.print(table)

    @staticmethod
    def _format_exposed(instance: InstanceRecord) -> str:
        seen: List[str] = []
        for port in instance.exposed_ports:
            label = "all" if port.protocol == "-1" else f"{port.port}/{port.protocol}"
            if label not in seen:
                seen.append(label)
        return ", ".join(seen)

    # =========================================================================
    # Public Methods: Progress and Messages
    # =========================================================================

    def print_banner(self) -> None:
        for line in BANNER_LINES:
            self.console.print(line, highlight=False)
        self.console.print("------------------")

    def print_account(self, account_id: str) -> None:
        self.console.print(f"AWS Account ID: {account_id}")

    def print_scanning_message(self, regions: Sequence[str]) -> None:
        """Announce the multi-region database scan."""
        region_preview = ", ".join(regions[:5])
        if len(regions) > 5:
            region_preview += f"... ({len(regions)} total)"
        self.console.print(
            f"\n[bold]Analyzing RDS databases across {len(regions)} regions...[/bold]"
        )
        self.console.print(f"[dim]Regions: {region_preview}[/dim]")

    def print_region_progress(self, region: str, status: str) -> None:
        """Progress callback for :meth:`RegionManager.scan_all_regions`."""
        if status == "complete":
            self.console.print(f"  [dim]Completed: {region}[/dim]")
        elif status == "error":
            self.console.print(f"  [yellow]Error scanning: {region}[/yellow]")

    def print_completion_message(
        self,
        output_file: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        self.console.print("\n[green bold]Scan complete![/green bold]")
        if output_file:
            self.console.print(f"[dim]Results saved to: {output_file}[/dim]")
        if url:
            self.console.print(f"[dim]Serving results at: {url}[/dim]")

    def print_error(self, message: str, title: str = "Error") -> None:
        self.console.print(f"\n[red bold]{title}:[/red bold] {escape(message)}")

    def __repr__(self) -> str:
        return "CLIReporter()"
