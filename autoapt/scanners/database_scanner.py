"""
Database Scanner Module
=======================

Lists the RDS database instances of a single region.

This is the per-region unit of work of the multi-region scan. Failures
are classified here so the coordinator only has to decide whether a
region makes it into the aggregate:

- access denied (``AccessDenied``, ``AccessDeniedException``,
  ``UnauthorizedOperation``) is not an error: the region simply has no
  visible databases and an empty list is returned;
- anything else is raised as :class:`RegionScanError` carrying the
  region and the underlying exception.

Classification uses the structured ``Error.Code`` of botocore's
``ClientError`` rather than the message text.

Example
-------
>>> from autoapt.core import AWSClient
>>> from autoapt.scanners import DatabaseScanner
>>>
>>> scanner = DatabaseScanner(AWSClient(region="eu-west-1"))
>>> for db in scanner.scan():
...     print(db.identifier, db.engine, db.status)
"""

from __future__ import annotations

import logging
from typing import Callable, List

from botocore.exceptions import BotoCoreError, ClientError

from autoapt.core.base_scanner import BaseScanner
from autoapt.core.exceptions import AWSClientError, RegionScanError
from autoapt.core.records import DatabaseRecord

logger = logging.getLogger(__name__)

ACCESS_DENIED_CODES = frozenset(
    {
        "AccessDenied",
        "AccessDeniedException",
        "UnauthorizedOperation",
    }
)


def is_access_denied(error: ClientError) -> bool:
    """Return True if ``error`` is an authorization failure."""
    return error.response.get("Error", {}).get("Code") in ACCESS_DENIED_CODES


class DatabaseScanner(BaseScanner):
    """
    Scanner for the RDS instances of one region.

    Parameters
    ----------
    aws_client : AWSClient
        Client bound to the region to scan.

    Examples
    --------
    >>> scanner = DatabaseScanner(client)
    >>> records = scanner.scan()
    >>> print(f"{len(records)} databases in {scanner.region}")
    """

    def get_resource_type(self) -> str:
        return "db_instance"

    def scan(self) -> List[DatabaseRecord]:
        """
        List the region's DB instances.

        Returns
        -------
        list of DatabaseRecord
            Records in API order; empty when access is denied.

        Raises
        ------
        RegionScanError
            For every failure other than access denied, including a
            client that could not be constructed.
        """
        logger.info(f"Scanning region {self.region} for RDS instances...")

        try:
            records = self._describe_db_instances()
        except ClientError as e:
            if is_access_denied(e):
                logger.warning(
                    f"Access denied for RDS in region {self.region}. Skipping..."
                )
                return []
            raise RegionScanError(
                f"Failed to describe DB instances in region {self.region}",
                region=self.region,
                cause=e,
            ) from e
        except (BotoCoreError, AWSClientError) as e:
            raise RegionScanError(
                f"Failed to describe DB instances in region {self.region}",
                region=self.region,
                cause=e,
            ) from e

        logger.info(f"Found {len(records)} RDS instances in region {self.region}")
        return records

    def _describe_db_instances(self) -> List[DatabaseRecord]:
        rds = self.aws_client.get_rds_client()
        paginator = rds.get_paginator("describe_db_instances")

        records: List[DatabaseRecord] = []
        for page in paginator.paginate():
            for db_instance in page.get("DBInstances", []):
                records.append(DatabaseRecord.from_api(db_instance))
        return records


def scan_region(
    region: str,
    client_factory: Callable[[str], object],
) -> List[DatabaseRecord]:
    """
    Scan one region for RDS instances.

    Parameters
    ----------
    region : str
        Region to scan.
    client_factory : callable
        Returns a region-scoped ``AWSClient`` for ``region``.

    Returns
    -------
    list of DatabaseRecord
        The region's databases, empty when access is denied.

    Raises
    ------
    RegionScanError
        If the client cannot be built or the query fails.
    """
    try:
        client = client_factory(region)
    except AWSClientError as e:
        raise RegionScanError(
            f"Failed to load AWS config for region {region}",
            region=region,
            cause=e,
        ) from e

    return DatabaseScanner(client).scan()
