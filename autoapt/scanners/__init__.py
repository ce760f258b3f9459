"""
Resource Scanners
=================

Scanner implementations, each bound to one region through an
``AWSClient``.

Available Scanners
------------------
DatabaseScanner
    Lists RDS instances; access denied yields an empty list.
InstanceScanner
    Lists EC2 instances with the inbound rules of their security groups.

Example
-------
>>> from autoapt.core import AWSClient
>>> from autoapt.scanners import DatabaseScanner, InstanceScanner
>>>
>>> client = AWSClient(region="us-east-1")
>>> databases = DatabaseScanner(client).scan()
>>> instances = InstanceScanner(client).scan()
"""

from autoapt.scanners.database_scanner import (
    ACCESS_DENIED_CODES,
    DatabaseScanner,
    is_access_denied,
    scan_region,
)
from autoapt.scanners.instance_scanner import InstanceScanner

__all__ = [
    "ACCESS_DENIED_CODES",
    "DatabaseScanner",
    "InstanceScanner",
    "is_access_denied",
    "scan_region",
]
