"""
Core Infrastructure Components
==============================

- :class:`AWSClient` - Region-scoped boto3 session and service clients
- :class:`BaseScanner` - Abstract base class for resource scanners
- :class:`RegionManager` - Parallel multi-region database scan
- Record types produced by the scanners
- Exception hierarchy for error handling

Example
-------
>>> from autoapt.core import AWSClient, RegionManager
>>>
>>> client = AWSClient(region="us-east-1", profile="audit")
>>> client.get_account_id()
>>> databases = RegionManager(profile="audit").scan_all_regions()
"""

from autoapt.core.aws_client import AWSClient
from autoapt.core.base_scanner import BaseScanner
from autoapt.core.exceptions import (
    AutoAptError,
    AWSClientError,
    CredentialsError,
    RegionError,
    RegionScanError,
    ReportError,
    ResourceFetchError,
    ScannerError,
    ServiceError,
)
from autoapt.core.records import (
    DatabaseRecord,
    InstanceRecord,
    PortAccess,
    SecurityGroupAccess,
)
from autoapt.core.region_manager import DEFAULT_REGIONS, RegionManager

__all__ = [
    # Client
    "AWSClient",
    # Scanner base
    "BaseScanner",
    # Records
    "DatabaseRecord",
    "InstanceRecord",
    "PortAccess",
    "SecurityGroupAccess",
    # Region management
    "DEFAULT_REGIONS",
    "RegionManager",
    # Exceptions
    "AutoAptError",
    "AWSClientError",
    "CredentialsError",
    "RegionError",
    "ServiceError",
    "ScannerError",
    "RegionScanError",
    "ResourceFetchError",
    "ReportError",
]
