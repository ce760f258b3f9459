"""
Text Reporter Module
====================

Renders the exposure report as plain text and writes it to disk.

The text form is the canonical report: it is what lands in the output
file, and the web view serves that file's content.

Classes
-------
TextReporter
    Renders and writes the text report.

Output Structure
----------------
::

    RDS Start
    Region: eu-west-1
      No RDS instances found
    Region: us-east-1
      DB: orders, Engine: postgres, Status: available
      Instance: reporting-replica (no DB name), Engine: mysql
    RDS End
    Instance Report!
    Instance ID: i-0abc
    Name: web-1
    Public IP: 203.0.113.10
    Security Groups:
      Security Group: web (sg-0123)
        Port 443 (tcp):
          Inbound access allowed from: [0.0.0.0/0]
    ----------

Example
-------
>>> reporter = TextReporter(output_path="output.txt")
>>> path = reporter.report(databases, instances)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from autoapt.core.exceptions import ReportError
from autoapt.core.records import DatabaseRecord, InstanceRecord, PortAccess

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = "output.txt"


class TextReporter:
    """
    Reporter producing the plain-text exposure report.

    Parameters
    ----------
    output_path : str, default="output.txt"
        File the report is written to.
    just_instances : bool, default=False
        When True, the instance section lists only IDs and names.
    """

    def __init__(
        self,
        output_path: str = DEFAULT_OUTPUT_PATH,
        just_instances: bool = False,
    ) -> None:
        self.output_path = output_path
        self.just_instances = just_instances

    def report(
        self,
        databases: Mapping[str, Sequence[DatabaseRecord]],
        instances: Sequence[InstanceRecord],
    ) -> str:
        """
        Render the report and write it to :attr:`output_path`.

        Returns
        -------
        str
            Path of the written file.

        Raises
        ------
        ReportError
            If the file cannot be written.
        """
        output_path = Path(self.output_path)
        text = self.to_string(databases, instances)

        try:
            output_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ReportError(
                f"Error creating report file: {e}",
                path=str(output_path),
            ) from e

        logger.info(f"Report written to {output_path}")
        return str(output_path)

    def to_string(
        self,
        databases: Mapping[str, Sequence[DatabaseRecord]],
        instances: Sequence[InstanceRecord],
    ) -> str:
        """Render the full report without writing it."""
        lines = self.database_lines(databases)
        lines.append("Instance Report!")
        if self.just_instances:
            lines.extend(self.instance_summary_lines(instances))
        else:
            lines.extend(self.instance_detail_lines(instances))
        lines.append("----------")
        return "\n".join(lines) + "\n"

    # =========================================================================
    # Sections
    # =========================================================================

    @classmethod
    def database_lines(
        cls,
        databases: Mapping[str, Sequence[DatabaseRecord]],
    ) -> List[str]:
        lines = ["RDS Start"]
        # Sorted so repeated runs give identical files
        for region in sorted(databases):
            lines.append(f"Region: {region}")
            records = databases[region]
            if not records:
                lines.append("  No RDS instances found")
                continue
            for record in records:
                lines.append(cls.format_database(record))
        lines.append("RDS End")
        return lines

    @staticmethod
    def format_database(record: DatabaseRecord) -> str:
        if record.name:
            info = f"  DB: {record.name}"
        else:
            info = f"  Instance: {record.identifier} (no DB name)"

        if record.engine:
            info += f", Engine: {record.engine}"
        if record.status:
            info += f", Status: {record.status}"
        return info

    @staticmethod
    def instance_summary_lines(instances: Sequence[InstanceRecord]) -> List[str]:
        lines = []
        for instance in instances:
            lines.append(f"Instance ID: {instance.instance_id}")
            lines.append(f"Name: {instance.name or 'N/A'}")
        return lines

    @classmethod
    def instance_detail_lines(cls, instances: Sequence[InstanceRecord]) -> List[str]:
        lines = []
        for instance in instances:
            lines.append(f"Instance ID: {instance.instance_id}")
            if instance.name:
                lines.append(f"Name: {instance.name}")
            if instance.public_ip:
                lines.append(f"Public IP: {instance.public_ip}")

            lines.append("Security Groups:")
            for sg in instance.security_groups:
                lines.append(f"  Security Group: {sg.group_name} ({sg.group_id})")
                for port in sg.ports:
                    lines.extend(cls.format_port(port))
        return lines

    @staticmethod
    def format_port(port: PortAccess) -> List[str]:
        return [
            f"    Port {port.port} ({port.protocol}):",
            f"      Inbound access allowed from: [{' '.join(port.source_ranges)}]",
        ]

    def __repr__(self) -> str:
        return (
            f"TextReporter(output_path={self.output_path!r}, "
            f"just_instances={self.just_instances})"
        )


def read_report(path: str) -> str:
    """
    Read a written report back from disk.

    Raises
    ------
    ReportError
        If the file cannot be read.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ReportError(f"Error reading report file: {e}", path=path) from e


def count_databases(
    databases: Mapping[str, Sequence[DatabaseRecord]],
) -> Dict[str, int]:
    """Number of databases per region."""
    return {region: len(records) for region, records in databases.items()}
